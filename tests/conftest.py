# tests/conftest.py
"""
Shared fixtures for the landing API test suite.

The routes are exercised through FastAPI's TestClient with the
LandingService dependency overridden to use in-memory repositories. The
fakes keep the store's invariants (one contact per email, one subscription
per email, append-only event logs) and can be told to fail any operation.
"""
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from app.dependencies import get_landing_service
from app.main import app
from app.services.landing_service import LandingService


class FakeContactRepository:
    """In-memory contacts and email_subscriptions tables"""

    def __init__(self):
        self.contacts: Dict[str, Dict[str, Any]] = {}
        self.subscriptions: Dict[str, Dict[str, Any]] = {}
        self.failures: Dict[str, Exception] = {}
        self.lookups: List[str] = []

    def _maybe_fail(self, method: str):
        if method in self.failures:
            raise self.failures[method]

    async def upsert_contact(
        self,
        email: str,
        name: str,
        source: str,
        company: Optional[str] = None,
        user_agent: Optional[str] = None,
        ip_address: Optional[str] = None,
        updated_at: Optional[datetime] = None,
        include_company: bool = True
    ) -> Optional[str]:
        self._maybe_fail("upsert_contact")
        now = datetime.now(timezone.utc)
        row = self.contacts.get(email)
        if row is None:
            row = {"id": str(uuid.uuid4()), "email": email, "company": None, "created_at": now}
            self.contacts[email] = row

        row.update(
            name=name,
            source=source,
            user_agent=user_agent,
            ip_address=ip_address,
            updated_at=updated_at or now
        )
        if include_company:
            row["company"] = company
        return row["id"]

    async def find_contact_id_by_email(self, email: str) -> Optional[str]:
        self._maybe_fail("find_contact_id_by_email")
        self.lookups.append(email)
        row = self.contacts.get(email)
        return row["id"] if row else None

    async def upsert_subscription(self, email: str, contact_id: Optional[str] = None) -> Optional[str]:
        self._maybe_fail("upsert_subscription")
        row = self.subscriptions.get(email)
        if row is None:
            row = {"id": str(uuid.uuid4()), "email": email, "contact_id": None}
            self.subscriptions[email] = row

        row.update(
            contact_id=contact_id or row["contact_id"],
            subscribed=True,
            unsubscribed_at=None
        )
        return row["id"]


class FakeEventRepository:
    """In-memory button_clicks and conversion_events tables"""

    def __init__(self):
        self.clicks: List[Dict[str, Any]] = []
        self.conversions: List[Dict[str, Any]] = []
        self.failures: Dict[str, Exception] = {}

    async def insert_button_click(self, button_type: str, **fields) -> None:
        if "insert_button_click" in self.failures:
            raise self.failures["insert_button_click"]
        self.clicks.append({"button_type": button_type, **fields})

    async def insert_conversion_event(self, event_type: str, **fields) -> None:
        if "insert_conversion_event" in self.failures:
            raise self.failures["insert_conversion_event"]
        self.conversions.append({"event_type": event_type, **fields})


@pytest.fixture
def contacts():
    return FakeContactRepository()


@pytest.fixture
def events():
    return FakeEventRepository()


@pytest.fixture
def service(contacts, events):
    return LandingService(contacts, events)


@pytest.fixture
def client(service):
    """TestClient wired to the in-memory store (no lifespan, no database)"""
    app.dependency_overrides[get_landing_service] = lambda: service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
