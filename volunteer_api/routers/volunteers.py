import re
from typing import Optional

from fastapi import APIRouter, Body, Depends, Query

from ..db import VolunteerDb, get_db
from ..exceptions import BadRequestError
from ..schemas import DeleteAck, InsertAck, UpdateAck
from ..utils import normalize_post_fields, parse_object_id, serialize_doc, utcnow

router = APIRouter(prefix="/volunteers", tags=["volunteers"])

UPCOMING_LIMIT = 6


@router.get("")
def list_volunteer_posts(
    search: Optional[str] = Query(default=None),
    email: Optional[str] = Query(default=None),
    db: VolunteerDb = Depends(get_db),
):
    """All posts, optionally narrowed by title substring and organizer email."""
    query = {}
    if search:
        query["postTitle"] = {"$regex": re.escape(search), "$options": "i"}
    if email:
        query["organizerEmail"] = email

    return [serialize_doc(post) for post in db.volunteers.find(query)]


@router.get("/upcoming")
def list_upcoming_posts(db: VolunteerDb = Depends(get_db)):
    cursor = (
        db.volunteers.find({"deadline": {"$gte": utcnow()}})
        .sort("deadline", 1)
        .limit(UPCOMING_LIMIT)
    )
    return [serialize_doc(post) for post in cursor]


@router.get("/{post_id}")
def get_volunteer_post(post_id: str, db: VolunteerDb = Depends(get_db)):
    # null body when the post is gone
    post = db.volunteers.find_one({"_id": parse_object_id(post_id)})
    return serialize_doc(post)


@router.post("", response_model=InsertAck)
def create_volunteer_post(data: dict = Body(...), db: VolunteerDb = Depends(get_db)):
    post = normalize_post_fields(data)
    result = db.volunteers.insert_one(post)
    return InsertAck.from_result(result)


@router.put("/{post_id}", response_model=UpdateAck)
def update_volunteer_post(
    post_id: str, data: dict = Body(...), db: VolunteerDb = Depends(get_db)
):
    object_id = parse_object_id(post_id)
    updated = normalize_post_fields(data)
    if not updated:
        raise BadRequestError("No fields to update")

    result = db.volunteers.update_one({"_id": object_id}, {"$set": updated})
    return UpdateAck.from_result(result)


@router.delete("/{post_id}", response_model=DeleteAck)
def delete_volunteer_post(post_id: str, db: VolunteerDb = Depends(get_db)):
    result = db.volunteers.delete_one({"_id": parse_object_id(post_id)})
    return DeleteAck.from_result(result)
