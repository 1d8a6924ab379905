import logging
from datetime import datetime, timedelta
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from ..db import VolunteerDb, get_db
from ..exceptions import BadRequestError, ServerError, VolunteerApiError
from ..schemas import HistoryOut, NotificationOut
from ..utils import to_object_id, utcnow

logger = logging.getLogger(__name__)

router = APIRouter(tags=["volunteer views"])

NOTIFICATION_DAYS = 7


def notification_window(now: datetime) -> tuple[datetime, datetime]:
    """Start of today through the last instant of the day NOTIFICATION_DAYS ahead."""
    start = now.replace(hour=0, minute=0, second=0, microsecond=0)
    end = start + timedelta(days=NOTIFICATION_DAYS + 1) - timedelta(microseconds=1)
    return start, end


def _find_post(db: VolunteerDb, post_id) -> Optional[dict]:
    object_id = to_object_id(post_id)
    if object_id is None:
        return None
    return db.volunteers.find_one({"_id": object_id})


def _require_email(email: Optional[str]) -> str:
    if not email:
        raise BadRequestError("Email is required")
    return email


@router.get("/notifications", response_model=List[NotificationOut])
def list_notifications(
    email: Optional[str] = Query(default=None),
    db: VolunteerDb = Depends(get_db),
):
    """Posts the volunteer applied to whose deadline falls within the next week."""
    email = _require_email(email)
    try:
        start, end = notification_window(utcnow())
        notifications = []
        for req in db.requests.find({"volunteerEmail": email}):
            post = _find_post(db, req.get("volunteerPostId"))
            if not post:
                continue
            deadline = post.get("deadline")
            if not isinstance(deadline, datetime) or not start <= deadline <= end:
                continue
            notifications.append(
                NotificationOut(
                    requestId=str(req["_id"]),
                    volunteerPostId=str(post["_id"]),
                    postTitle=post.get("postTitle"),
                    deadline=deadline,
                    location=post.get("location"),
                    organizerName=post.get("organizerName"),
                    organizerEmail=post.get("organizerEmail"),
                )
            )
        return notifications
    except VolunteerApiError:
        raise
    except Exception:
        logger.exception("Failed to build notifications for %s", email)
        raise ServerError()


@router.get("/history", response_model=List[HistoryOut])
def list_history(
    email: Optional[str] = Query(default=None),
    db: VolunteerDb = Depends(get_db),
):
    """One record per request, joined with its post and the volunteer's feedback."""
    email = _require_email(email)
    try:
        history = []
        for req in db.requests.find({"volunteerEmail": email}):
            post = _find_post(db, req.get("volunteerPostId"))
            if not post:
                continue
            feedback = db.feedbacks.find_one(
                {"volunteerPostId": req.get("volunteerPostId"), "volunteerEmail": email}
            ) or {}
            history.append(
                HistoryOut(
                    requestId=str(req["_id"]),
                    volunteerPostId=str(post["_id"]),
                    postTitle=post.get("postTitle"),
                    date=post.get("deadline"),
                    volunteerHours=post.get("volunteerHours"),
                    feedback=feedback.get("feedback"),
                    rating=feedback.get("rating"),
                    organizerName=post.get("organizerName"),
                    organizerEmail=post.get("organizerEmail"),
                )
            )
        return history
    except VolunteerApiError:
        raise
    except Exception:
        logger.exception("Failed to build history for %s", email)
        raise ServerError()
