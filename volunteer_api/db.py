import logging

from fastapi import Request
from pymongo import MongoClient
from pymongo.server_api import ServerApi

from .config import Settings, settings as default_settings

logger = logging.getLogger(__name__)

VOLUNTEERS = "volunteers"
REQUESTS = "volunteerRequests"
FEEDBACKS = "feedbacks"
USERS = "users"


class VolunteerDb:
    """Owns the Mongo client and the collections of the volunteer database."""

    def __init__(self, client: MongoClient, db_name: str = "volunteerDb"):
        self.client = client
        self.db = client[db_name]
        self.volunteers = self.db[VOLUNTEERS]
        self.requests = self.db[REQUESTS]
        self.feedbacks = self.db[FEEDBACKS]
        # reserved, no route reads it yet
        self.users = self.db[USERS]

    @classmethod
    def from_settings(cls, settings: Settings = default_settings) -> "VolunteerDb":
        client = MongoClient(
            settings.mongo_uri,
            server_api=ServerApi("1", strict=True, deprecation_errors=True),
        )
        logger.info("Mongo client created for database %s", settings.DB_NAME)
        return cls(client, settings.DB_NAME)

    def close(self) -> None:
        self.client.close()
        logger.info("Mongo client closed")


def get_db(request: Request) -> VolunteerDb:
    return request.app.state.db
