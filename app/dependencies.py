# app/dependencies.py
from typing import AsyncIterator
from fastapi import Depends, Request
from app.database.connection import ConnectionLease, DatabaseConnection
from app.database.contact_repository import ContactRepository
from app.database.event_repository import EventRepository
from app.services.landing_service import LandingService

async def get_connection_lease(request: Request) -> AsyncIterator[ConnectionLease]:
    """Per-request connection lease; the pool is only touched by store operations"""
    database: DatabaseConnection = request.app.state.database
    lease = ConnectionLease(database)
    try:
        yield lease
    finally:
        await lease.release()

def get_contact_repository(
    lease: ConnectionLease = Depends(get_connection_lease)
) -> ContactRepository:
    return ContactRepository(lease)

def get_event_repository(
    lease: ConnectionLease = Depends(get_connection_lease)
) -> EventRepository:
    return EventRepository(lease)

def get_landing_service(
    contacts: ContactRepository = Depends(get_contact_repository),
    events: EventRepository = Depends(get_event_repository)
) -> LandingService:
    return LandingService(contacts, events)
