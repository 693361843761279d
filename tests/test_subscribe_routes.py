# tests/test_subscribe_routes.py
import pytest

from app.errors import StoreWriteError, UNIQUE_VIOLATION


def test_subscribe_creates_contact_and_active_subscription(client, contacts, events):
    response = client.post("/api/subscribe", json={"email": "a@b.com"})

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Successfully subscribed!"}

    contact = contacts.contacts["a@b.com"]
    assert contact["name"] == "a"
    assert contact["source"] == "subscription_form"

    subscription = contacts.subscriptions["a@b.com"]
    assert subscription["subscribed"] is True
    assert subscription["unsubscribed_at"] is None
    assert subscription["contact_id"] == contact["id"]

    assert len(events.conversions) == 1
    assert events.conversions[0]["event_type"] == "email_subscription"
    assert events.conversions[0]["event_data"] == {"source": "final_cta_section"}
    assert events.clicks == []


def test_subscribing_twice_is_idempotent(client, contacts):
    client.post("/api/subscribe", json={"email": "a@b.com"})
    response = client.post("/api/subscribe", json={"email": "a@b.com"})

    assert response.status_code == 200
    assert len(contacts.contacts) == 1
    assert len(contacts.subscriptions) == 1
    assert contacts.subscriptions["a@b.com"]["subscribed"] is True


def test_subscribe_keeps_company_from_contact_form(client, contacts):
    client.post("/api/contact", json={
        "name": "Grace Hopper",
        "email": "grace@navy.example",
        "company": "US Navy",
        "ctaType": "pricing",
    })

    client.post("/api/subscribe", json={"email": "grace@navy.example"})

    contact = contacts.contacts["grace@navy.example"]
    assert len(contacts.contacts) == 1
    assert contact["company"] == "US Navy"
    assert contact["source"] == "subscription_form"


@pytest.mark.parametrize("payload", [{"email": "not-an-email"}, {"email": ""}, {}])
def test_invalid_email_is_rejected_without_writes(client, contacts, events, payload):
    response = client.post("/api/subscribe", json=payload)

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "Invalid email address"}
    assert contacts.contacts == {}
    assert contacts.subscriptions == {}
    assert events.conversions == []


def test_subscription_upsert_failure_is_fatal(client, contacts, events):
    contacts.failures["upsert_subscription"] = StoreWriteError(
        "subscription upsert", "connection reset", "08006"
    )

    response = client.post("/api/subscribe", json={"email": "a@b.com"})

    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Failed to subscribe"}
    assert "a@b.com" in contacts.contacts
    assert events.conversions == []


def test_unique_violation_on_subscription_upsert_is_still_fatal(client, contacts):
    contacts.failures["upsert_subscription"] = StoreWriteError(
        "subscription upsert", "duplicate key value", UNIQUE_VIOLATION
    )

    response = client.post("/api/subscribe", json={"email": "a@b.com"})

    assert response.status_code == 500
    assert response.json()["message"] == "Failed to subscribe"


def test_unique_violation_on_contact_upsert_still_subscribes(client, contacts):
    contacts.failures["upsert_contact"] = StoreWriteError(
        "contact upsert", "duplicate key value", UNIQUE_VIOLATION
    )

    response = client.post("/api/subscribe", json={"email": "a@b.com"})

    assert response.status_code == 200
    assert contacts.subscriptions["a@b.com"]["contact_id"] is None


def test_contact_upsert_failure_returns_500(client, contacts):
    contacts.failures["upsert_contact"] = StoreWriteError("contact upsert", "disk full", "53100")

    response = client.post("/api/subscribe", json={"email": "a@b.com"})

    assert response.status_code == 500
    assert response.json()["message"] == "Failed to save contact"
    assert contacts.subscriptions == {}


def test_conversion_failure_does_not_fail_subscription(client, contacts, events):
    events.failures["insert_conversion_event"] = StoreWriteError(
        "conversion event insert", "timeout"
    )

    response = client.post("/api/subscribe", json={"email": "a@b.com"})

    assert response.status_code == 200
    assert contacts.subscriptions["a@b.com"]["subscribed"] is True
