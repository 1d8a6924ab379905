import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, Query

from ..db import VolunteerDb, get_db
from ..exceptions import BadRequestError
from ..schemas import DeleteAck, InsertAck, RequestCreated, UpdateAck
from ..utils import parse_object_id, serialize_doc

logger = logging.getLogger(__name__)

router = APIRouter(tags=["requests"])


@router.get("/requests")
def list_requests(db: VolunteerDb = Depends(get_db)):
    return [serialize_doc(req) for req in db.requests.find()]


@router.get("/requests/{request_id}")
def get_request(request_id: str, db: VolunteerDb = Depends(get_db)):
    return serialize_doc(db.requests.find_one({"_id": parse_object_id(request_id)}))


@router.get("/myRequests")
def list_my_requests(
    email: Optional[str] = Query(default=None),
    db: VolunteerDb = Depends(get_db),
):
    if not email:
        raise BadRequestError("Email is required")
    return [serialize_doc(req) for req in db.requests.find({"volunteerEmail": email})]


@router.post("/requests", response_model=RequestCreated)
def create_request(data: dict = Body(...), db: VolunteerDb = Depends(get_db)):
    """
    Store the application, then take one slot off the post.

    The two writes are independent: there is no transaction, the counter is
    not floor-clamped and creation is never refused when no slots are left.
    """
    post_id = data.get("volunteerPostId")
    if not post_id:
        raise BadRequestError("volunteerPostId is required")
    object_id = parse_object_id(post_id)
    data.pop("_id", None)

    insert_result = db.requests.insert_one(data)
    update_result = db.volunteers.update_one(
        {"_id": object_id}, {"$inc": {"volunteersNeeded": -1}}
    )
    logger.info(
        "Request %s created for post %s (matched %s)",
        insert_result.inserted_id, post_id, update_result.matched_count,
    )
    return RequestCreated(
        insertResult=InsertAck.from_result(insert_result),
        updateResult=UpdateAck.from_result(update_result),
    )


@router.delete("/requests/{request_id}", response_model=DeleteAck)
def delete_request(request_id: str, db: VolunteerDb = Depends(get_db)):
    result = db.requests.delete_one({"_id": parse_object_id(request_id)})
    return DeleteAck.from_result(result)
