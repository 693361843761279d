# app/database/__init__.py
from .connection import DatabaseConnection
from .contact_repository import ContactRepository
from .event_repository import EventRepository

__all__ = ["DatabaseConnection", "ContactRepository", "EventRepository"]
