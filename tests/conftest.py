from datetime import timedelta

import mongomock
import pytest
from fastapi.testclient import TestClient

from volunteer_api.db import VolunteerDb
from volunteer_api.main import create_app
from volunteer_api.utils import utcnow


@pytest.fixture
def volunteer_db():
    return VolunteerDb(mongomock.MongoClient(), "volunteerDbTest")


@pytest.fixture
def client(volunteer_db):
    return TestClient(create_app(db=volunteer_db))


@pytest.fixture
def make_post(volunteer_db):
    """Insert a post directly and return its id as a string."""

    def _make_post(title="Beach Clean-up", days_ahead=5, **fields):
        post = {
            "postTitle": title,
            "organizerName": "Rafi Ahmed",
            "organizerEmail": "rafi@example.com",
            "location": "Cox's Bazar",
            "deadline": utcnow() + timedelta(days=days_ahead),
            "volunteersNeeded": 3,
            "volunteerHours": 5,
        }
        post.update(fields)
        return str(volunteer_db.volunteers.insert_one(post).inserted_id)

    return _make_post
