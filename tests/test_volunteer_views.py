from datetime import datetime, timedelta

import pytest

from volunteer_api.routers.volunteer_views import notification_window

EMAIL = "sadia@example.com"


def _request(volunteer_db, post_id, email=EMAIL):
    return str(
        volunteer_db.requests.insert_one(
            {"volunteerPostId": post_id, "volunteerEmail": email, "volunteerName": "Sadia"}
        ).inserted_id
    )


def test_notification_window_is_inclusive_whole_days():
    start, end = notification_window(datetime(2030, 3, 10, 15, 45))
    assert start == datetime(2030, 3, 10)
    assert end == datetime(2030, 3, 17, 23, 59, 59, 999999)


def test_notifications_include_three_days_out_but_not_eight(client, volunteer_db, make_post):
    soon = make_post("Soon", days_ahead=3)
    later = make_post("Later", days_ahead=8)
    _request(volunteer_db, soon)
    _request(volunteer_db, later)

    response = client.get("/notifications", params={"email": EMAIL})
    assert response.status_code == 200
    notifications = response.json()
    assert [item["postTitle"] for item in notifications] == ["Soon"]
    assert notifications[0]["volunteerPostId"] == soon
    assert notifications[0]["organizerEmail"] == "rafi@example.com"


def test_notifications_skip_past_deadlines_and_other_volunteers(client, volunteer_db, make_post):
    _request(volunteer_db, make_post("Yesterday", days_ahead=-1))
    _request(volunteer_db, make_post("Not mine", days_ahead=2), email="other@example.com")
    _request(volunteer_db, "not-an-object-id")

    response = client.get("/notifications", params={"email": EMAIL})
    assert response.json() == []


def test_history_joins_post_and_feedback(client, volunteer_db, make_post):
    post_id = make_post("River clean-up", days_ahead=-10, volunteerHours=6)
    request_id = _request(volunteer_db, post_id)
    volunteer_db.feedbacks.insert_one(
        {
            "volunteerPostId": post_id,
            "volunteerName": "Sadia",
            "volunteerEmail": EMAIL,
            "feedback": "Great team",
            "rating": 5,
            "createdAt": datetime(2030, 1, 1),
        }
    )

    response = client.get("/history", params={"email": EMAIL})
    assert response.status_code == 200
    history = response.json()
    assert len(history) == 1
    record = history[0]
    assert record["requestId"] == request_id
    assert record["postTitle"] == "River clean-up"
    assert record["organizerName"] == "Rafi Ahmed"
    assert record["organizerEmail"] == "rafi@example.com"
    assert record["volunteerHours"] == 6
    assert record["feedback"] == "Great team"
    assert record["rating"] == 5


def test_history_without_feedback_and_with_deleted_post(client, volunteer_db, make_post):
    post_id = make_post("Tutoring")
    _request(volunteer_db, post_id)
    deleted = make_post("Cancelled")
    _request(volunteer_db, deleted)
    client.delete(f"/volunteers/{deleted}")

    history = client.get("/history", params={"email": EMAIL}).json()
    assert [record["postTitle"] for record in history] == ["Tutoring"]
    assert history[0]["feedback"] is None
    assert history[0]["rating"] is None


@pytest.mark.parametrize("path", ["/notifications", "/history"])
def test_derived_views_require_email(client, path):
    response = client.get(path)
    assert response.status_code == 400
    assert response.json() == {"error": "Email is required"}


@pytest.mark.parametrize("path", ["/notifications", "/history"])
def test_derived_views_hide_unexpected_errors(client, volunteer_db, path):
    class BrokenCollection:
        def find(self, query):
            raise RuntimeError("connection reset")

    volunteer_db.requests = BrokenCollection()
    response = client.get(path, params={"email": EMAIL})
    assert response.status_code == 500
    assert response.json() == {"error": "Server error"}


def test_derived_views_pass_through_non_string_post_fields(client, volunteer_db, make_post):
    odd = make_post("Odd", days_ahead=2, location={"city": "Dhaka"}, organizerName=42, volunteerHours="about 3")
    plain = make_post("Plain", days_ahead=2)
    _request(volunteer_db, odd)
    _request(volunteer_db, plain)

    notifications = client.get("/notifications", params={"email": EMAIL})
    assert notifications.status_code == 200
    by_title = {item["postTitle"]: item for item in notifications.json()}
    assert set(by_title) == {"Odd", "Plain"}
    assert by_title["Odd"]["location"] == {"city": "Dhaka"}
    assert by_title["Odd"]["organizerName"] == 42

    history = client.get("/history", params={"email": EMAIL})
    assert history.status_code == 200
    records = {record["postTitle"]: record for record in history.json()}
    assert records["Odd"]["organizerName"] == 42
    assert records["Odd"]["volunteerHours"] == "about 3"
    assert records["Plain"]["organizerName"] == "Rafi Ahmed"
