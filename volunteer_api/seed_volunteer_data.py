from datetime import datetime, timedelta

from volunteer_api.config import settings
from volunteer_api.db import VolunteerDb
from volunteer_api.utils import utcnow

SAMPLE_POSTS = [
    {
        "postTitle": "Community Food Drive",
        "organizerName": "Nadia Rahman",
        "organizerEmail": "nadia@example.com",
        "location": "Dhaka Central Library",
        "volunteersNeeded": 8,
        "volunteerHours": 4,
        "days_ahead": 3,
    },
    {
        "postTitle": "River Bank Clean-up",
        "organizerName": "Tanvir Hasan",
        "organizerEmail": "tanvir@example.com",
        "location": "Buriganga Ghat",
        "volunteersNeeded": 15,
        "volunteerHours": 6,
        "days_ahead": 10,
    },
    {
        "postTitle": "Weekend Tutoring",
        "organizerName": "Nadia Rahman",
        "organizerEmail": "nadia@example.com",
        "location": "Mirpur Community Hall",
        "volunteersNeeded": 4,
        "volunteerHours": 2.5,
        "days_ahead": 21,
    },
]


def seed_posts(db: VolunteerDb, now: datetime | None = None) -> list[str]:
    """Insert the sample posts with deadlines relative to ``now``."""
    now = now or utcnow()
    inserted = []
    for sample in SAMPLE_POSTS:
        post = {key: value for key, value in sample.items() if key != "days_ahead"}
        post["deadline"] = now + timedelta(days=sample["days_ahead"])
        result = db.volunteers.insert_one(post)
        inserted.append(str(result.inserted_id))
    return inserted


if __name__ == "__main__":
    db = VolunteerDb.from_settings(settings)
    print(f"Seeding volunteer posts into {settings.DB_NAME}...")
    ids = seed_posts(db)
    print(f"Inserted {len(ids)} posts.")
    db.close()
