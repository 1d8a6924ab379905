import logging

from fastapi import APIRouter, Body, Depends, status

from ..db import VolunteerDb, get_db
from ..exceptions import BadRequestError, ServerError, VolunteerApiError
from ..schemas import FeedbackCreated
from ..utils import serialize_doc, utcnow

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/feedbacks", tags=["feedbacks"])

REQUIRED_FIELDS = ("volunteerPostId", "volunteerName", "volunteerEmail", "feedback", "rating")
INT64_MAX = 2**63 - 1


def _coerce_rating(value) -> int:
    if isinstance(value, bool):
        raise BadRequestError("rating must be an integer")
    if isinstance(value, int):
        rating = value
    else:
        rating = None
        if isinstance(value, str):
            try:
                rating = int(value)
            except ValueError:
                pass
        if rating is None:
            # integral floats such as 4.0 or "4.0"
            try:
                as_float = float(value)
            except (TypeError, ValueError):
                raise BadRequestError("rating must be an integer")
            if not as_float.is_integer():
                raise BadRequestError("rating must be an integer")
            rating = int(as_float)
    if not -INT64_MAX - 1 <= rating <= INT64_MAX:
        raise BadRequestError("rating is out of range")
    return rating


@router.post("", response_model=FeedbackCreated, status_code=status.HTTP_201_CREATED)
def create_feedback(data: dict = Body(...), db: VolunteerDb = Depends(get_db)):
    missing = [field for field in REQUIRED_FIELDS if data.get(field) in (None, "")]
    if missing:
        raise BadRequestError(f"Missing required fields: {', '.join(missing)}")

    try:
        feedback = {
            "volunteerPostId": data["volunteerPostId"],
            "volunteerName": data["volunteerName"],
            "volunteerEmail": data["volunteerEmail"],
            "feedback": data["feedback"],
            "rating": _coerce_rating(data["rating"]),
            "createdAt": utcnow(),
        }
        result = db.feedbacks.insert_one(feedback)
    except VolunteerApiError:
        raise
    except Exception:
        logger.exception("Failed to save feedback for post %s", data.get("volunteerPostId"))
        raise ServerError()

    logger.info("Feedback %s saved for post %s", result.inserted_id, feedback["volunteerPostId"])
    return FeedbackCreated(insertedId=str(result.inserted_id))


@router.get("/{post_id}")
def list_post_feedback(post_id: str, db: VolunteerDb = Depends(get_db)):
    return [serialize_doc(item) for item in db.feedbacks.find({"volunteerPostId": post_id})]
