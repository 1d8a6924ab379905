from pydantic import BaseModel
from typing import Any, Optional
from datetime import datetime


class InsertAck(BaseModel):
    acknowledged: bool
    insertedId: str

    @classmethod
    def from_result(cls, result) -> "InsertAck":
        return cls(acknowledged=result.acknowledged, insertedId=str(result.inserted_id))


class UpdateAck(BaseModel):
    acknowledged: bool
    matchedCount: int
    modifiedCount: int
    upsertedCount: int
    upsertedId: Optional[str] = None

    @classmethod
    def from_result(cls, result) -> "UpdateAck":
        upserted_id = result.upserted_id
        return cls(
            acknowledged=result.acknowledged,
            matchedCount=result.matched_count,
            modifiedCount=result.modified_count,
            upsertedCount=1 if upserted_id is not None else 0,
            upsertedId=str(upserted_id) if upserted_id is not None else None,
        )


class DeleteAck(BaseModel):
    acknowledged: bool
    deletedCount: int

    @classmethod
    def from_result(cls, result) -> "DeleteAck":
        return cls(acknowledged=result.acknowledged, deletedCount=result.deleted_count)


class RequestCreated(BaseModel):
    insertResult: InsertAck
    updateResult: UpdateAck


class FeedbackCreated(BaseModel):
    insertedId: str


class NotificationOut(BaseModel):
    # post fields are copied as stored, posts accept any JSON
    requestId: str
    volunteerPostId: str
    postTitle: Any = None
    deadline: datetime
    location: Any = None
    organizerName: Any = None
    organizerEmail: Any = None


class HistoryOut(BaseModel):
    requestId: str
    volunteerPostId: str
    postTitle: Any = None
    date: Any = None
    volunteerHours: Any = None
    feedback: Any = None
    rating: Optional[int] = None
    organizerName: Any = None
    organizerEmail: Any = None
