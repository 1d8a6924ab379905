from datetime import datetime, timedelta, timezone
from typing import Any

from bson import ObjectId
from bson.errors import InvalidId

from .exceptions import BadRequestError

EPOCH = datetime(1970, 1, 1)


def utcnow() -> datetime:
    """Naive UTC now, comparable with the datetimes pymongo hands back."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_object_id(value: str) -> ObjectId:
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        raise BadRequestError("Invalid id")


def to_object_id(value: Any) -> ObjectId | None:
    """Like parse_object_id but returns None for values stored with a bad id."""
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


def parse_timestamp(value: Any) -> datetime:
    """Parse an ISO-8601 string or epoch milliseconds into a naive UTC datetime."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return EPOCH + timedelta(milliseconds=value)
        except OverflowError:
            raise BadRequestError("Invalid deadline")
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise BadRequestError("Invalid deadline")
    else:
        raise BadRequestError("Invalid deadline")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def normalize_post_fields(data: dict) -> dict:
    # _id is immutable in Mongo and always server generated here
    data.pop("_id", None)
    if data.get("deadline"):
        data["deadline"] = parse_timestamp(data["deadline"])
    return data


def serialize_doc(doc: Any) -> Any:
    """Turn ObjectIds into hex strings so documents can be returned as JSON."""
    if isinstance(doc, ObjectId):
        return str(doc)
    if isinstance(doc, dict):
        return {key: serialize_doc(value) for key, value in doc.items()}
    if isinstance(doc, list):
        return [serialize_doc(value) for value in doc]
    return doc
