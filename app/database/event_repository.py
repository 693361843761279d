# app/database/event_repository.py
import json
from typing import Optional, Dict, Any
from app.database.connection import ConnectionLease
from app.database.contact_repository import STORE_ERRORS, store_error

class EventRepository:
    """Append-only click and conversion logs"""

    def __init__(self, lease: ConnectionLease):
        self.lease = lease

    async def insert_button_click(
        self,
        button_type: str,
        contact_id: Optional[str] = None,
        page_url: Optional[str] = None,
        session_id: Optional[str] = None,
        user_agent: Optional[str] = None,
        ip_address: Optional[str] = None,
        referrer: Optional[str] = None
    ) -> None:
        query = """
            INSERT INTO button_clicks (
                contact_id, button_type, page_url, session_id,
                user_agent, ip_address, referrer
            ) VALUES ($1, $2, $3, $4, $5, $6, $7)
        """

        try:
            conn = await self.lease.acquire()
            await conn.execute(
                query, contact_id, button_type, page_url, session_id,
                user_agent, ip_address, referrer
            )
        except STORE_ERRORS as e:
            raise store_error("button click insert", e) from e

    async def insert_conversion_event(
        self,
        event_type: str,
        contact_id: Optional[str] = None,
        event_data: Optional[Dict[str, Any]] = None
    ) -> None:
        query = """
            INSERT INTO conversion_events (contact_id, event_type, event_data)
            VALUES ($1, $2, $3)
        """

        try:
            conn = await self.lease.acquire()
            await conn.execute(
                query, contact_id, event_type,
                json.dumps(event_data) if event_data is not None else None
            )
        except STORE_ERRORS as e:
            raise store_error("conversion event insert", e) from e
