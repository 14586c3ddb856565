from __future__ import annotations

import pytest

from citizen_api.core.errors import ConstraintViolationError, ValidationFailureError
from citizen_api.services.dev_service import DEMO_APPLICANTS, DEMO_FIRST_TRACKING_ID
from citizen_api.services.user_service import NewUser


def test_contact_message_roundtrip(services):
    sent = services.contact.create_message(" Asha ", "Please add Marathi forms", "asha@example.com")
    assert sent["name"] == "Asha"
    assert sent["email"] == "asha@example.com"
    assert services.contact.list_messages() == [sent]


def test_contact_message_requires_text(services):
    with pytest.raises(ValidationFailureError):
        services.contact.create_message("Asha", "   ")
    assert services.contact.list_messages() == []


def test_seed_applications_inserts_demo_rows(services):
    result = services.dev.seed_applications()

    assert result["inserted"] == len(DEMO_APPLICANTS)
    assert result["trackingIds"][0] == DEMO_FIRST_TRACKING_ID
    assert len(set(result["trackingIds"])) == len(DEMO_APPLICANTS)

    first = services.applications.get_by_tracking_id(DEMO_FIRST_TRACKING_ID)
    assert first["status"] == "in_review"
    assert first["scheme_id"] == 1
    assert first["data"]["applicantName"] == "Aarav Sharma"


def test_seed_twice_leaves_store_untouched(services, store, persist_calls):
    services.dev.seed_applications()
    users = store.query("SELECT count(*) FROM users")[0][0]
    applications = store.query("SELECT count(*) FROM applications")[0][0]
    flushes = len(persist_calls)

    with pytest.raises(ConstraintViolationError):
        services.dev.seed_applications()

    assert store.query("SELECT count(*) FROM users")[0][0] == users
    assert store.query("SELECT count(*) FROM applications")[0][0] == applications
    assert len(persist_calls) == flushes


def test_seed_creates_fallback_scheme_when_catalogue_empty(services):
    for scheme in services.schemes.list_schemes():
        services.schemes.delete_scheme(scheme["id"])

    services.dev.seed_applications()

    schemes = services.schemes.list_schemes()
    assert [s["title"] for s in schemes] == ["General Assistance"]
    first = services.applications.get_by_tracking_id(DEMO_FIRST_TRACKING_ID)
    assert first["scheme_id"] == schemes[0]["id"]


def test_delete_john_doe(services):
    keep = services.applications.create_application(1, {"applicantName": "Jane Roe"}, user=NewUser("Jane Roe"))
    services.applications.create_application(1, {"applicantName": "John Doe"})
    linked = services.applications.create_application(2, {"note": "other"}, user=NewUser("John Doe"))

    assert services.dev.delete_john_doe() == {"removedUsers": 1}

    remaining = services.applications.list_applications()
    assert {a["id"] for a in remaining} == {keep["id"], linked["id"]}
    assert services.applications.get_application(linked["id"])["user_id"] is None
    assert [u["name"] for u in services.users.list_users()] == ["Jane Roe"]


def test_delete_john_doe_without_matches(services):
    assert services.dev.delete_john_doe() == {"removedUsers": 0}
