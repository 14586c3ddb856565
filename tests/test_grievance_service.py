from __future__ import annotations

import pytest

from citizen_api.core.errors import NotFoundError, ValidationFailureError
from citizen_api.services.user_service import NewUser


@pytest.fixture()
def grievance(services):
    return services.grievances.create_grievance(
        "Ration card not delivered", "Applied three months ago, nothing yet", user=NewUser("Sunita Rao")
    )


def test_new_grievance_is_open(grievance, services):
    assert grievance["status"] == "open"
    assert grievance["created_at"] == grievance["updated_at"]
    assert services.users.get_user(grievance["user_id"])["name"] == "Sunita Rao"


def test_anonymous_grievance(services):
    created = services.grievances.create_grievance("Broken street light", "Ward 12, near the school")
    assert created["user_id"] is None


def test_blank_subject_rejected(services):
    with pytest.raises(ValidationFailureError):
        services.grievances.create_grievance("   ", "Some description here")
    assert services.grievances.list_grievances() == []


def test_status_can_reopen(grievance, services):
    services.grievances.update_status(grievance["id"], "resolved")
    reopened = services.grievances.update_status(grievance["id"], "open")
    assert reopened["status"] == "open"
    assert reopened["updated_at"] > grievance["updated_at"]


def test_status_on_missing_grievance(services, store):
    with pytest.raises(NotFoundError):
        services.grievances.update_status(404, "closed")
    assert store.query("SELECT count(*) FROM grievances")[0][0] == 0


def test_unknown_status_rejected(grievance, services):
    with pytest.raises(ValidationFailureError):
        services.grievances.update_status(grievance["id"], "submitted")


def test_feedback_is_appended(grievance, services):
    first = services.grievances.add_feedback(grievance["id"], 5, "Sorted out")
    second = services.grievances.add_feedback(grievance["id"], 2)
    assert first["rating"] == 5
    assert first["comments"] == "Sorted out"
    assert second["comments"] is None
    assert [f["id"] for f in services.grievances.list_feedback(grievance["id"])] == [second["id"], first["id"]]


@pytest.mark.parametrize("rating", [0, 6, -1, True, 3.5, "4", None])
def test_feedback_rating_out_of_range(grievance, services, rating):
    with pytest.raises(ValidationFailureError):
        services.grievances.add_feedback(grievance["id"], rating)
    assert services.grievances.list_feedback(grievance["id"]) == []


def test_feedback_on_missing_grievance(services):
    with pytest.raises(NotFoundError):
        services.grievances.add_feedback(777, 3)
    with pytest.raises(NotFoundError):
        services.grievances.list_feedback(777)


def test_deleting_grievance_removes_its_feedback(grievance, services, store):
    other = services.grievances.create_grievance("Water supply", "Irregular supply in block B")
    services.grievances.add_feedback(grievance["id"], 4)
    services.grievances.add_feedback(grievance["id"], 1, "Still waiting")
    services.grievances.add_feedback(other["id"], 3)

    services.grievances.delete_grievance(grievance["id"])

    rows = store.query("SELECT grievance_id FROM grievance_feedback")
    assert [r[0] for r in rows] == [other["id"]]
    with pytest.raises(NotFoundError):
        services.grievances.get_grievance(grievance["id"])


def test_delete_missing_grievance(services):
    with pytest.raises(NotFoundError):
        services.grievances.delete_grievance(31337)


def test_deleting_user_unlinks_grievance(grievance, services):
    services.users.delete_user(grievance["user_id"])
    assert services.grievances.get_grievance(grievance["id"])["user_id"] is None
