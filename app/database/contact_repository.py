# app/database/contact_repository.py
import asyncio
import asyncpg
from typing import Optional, Dict, Any
from datetime import datetime, timezone
from app.database.connection import ConnectionLease
from app.errors import StoreWriteError, DatabaseUnavailableError
import logging

logger = logging.getLogger(__name__)

# asyncio.TimeoutError (command_timeout) is only an OSError from Python 3.11
STORE_ERRORS = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    OSError,
    asyncio.TimeoutError,
    DatabaseUnavailableError,
)


def store_error(operation: str, error: Exception) -> StoreWriteError:
    """Translate a driver error into a StoreWriteError keeping the SQLSTATE"""
    return StoreWriteError(operation, str(error) or type(error).__name__, getattr(error, "sqlstate", None))


class ContactRepository:
    """Contacts keyed by unique email, plus their email subscriptions"""

    def __init__(self, lease: ConnectionLease):
        self.lease = lease

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
        """Insert or update the contact for this email, returning its id"""
        columns: Dict[str, Any] = {
            "email": email,
            "name": name,
            "source": source,
            "user_agent": user_agent,
            "ip_address": ip_address,
            "updated_at": updated_at or datetime.now(timezone.utc),
        }
        # Forms without a company field must not blank an existing one
        if include_company:
            columns["company"] = company

        names = list(columns)
        placeholders = ", ".join(f"${i}" for i in range(1, len(names) + 1))
        updates = ", ".join(f"{column} = EXCLUDED.{column}" for column in names if column != "email")

        query = f"""
            INSERT INTO contacts ({', '.join(names)})
            VALUES ({placeholders})
            ON CONFLICT (email)
            DO UPDATE SET {updates}
            RETURNING id
        """

        try:
            conn = await self.lease.acquire()
            contact_id = await conn.fetchval(query, *columns.values())
        except STORE_ERRORS as e:
            raise store_error("contact upsert", e) from e

        logger.info(f"Upserted contact {contact_id} (source: {source})")
        return str(contact_id) if contact_id else None

    async def find_contact_id_by_email(self, email: str) -> Optional[str]:
        """Get contact id by exact email match"""
        try:
            conn = await self.lease.acquire()
            contact_id = await conn.fetchval(
                "SELECT id FROM contacts WHERE email = $1",
                email
            )
        except STORE_ERRORS as e:
            raise store_error("contact lookup", e) from e

        return str(contact_id) if contact_id else None

    async def upsert_subscription(self, email: str, contact_id: Optional[str] = None) -> Optional[str]:
        """Mark this email as subscribed, creating the row if needed"""
        query = """
            INSERT INTO email_subscriptions (contact_id, email, subscribed, unsubscribed_at)
            VALUES ($1, $2, true, NULL)
            ON CONFLICT (email)
            DO UPDATE SET
                contact_id = COALESCE(EXCLUDED.contact_id, email_subscriptions.contact_id),
                subscribed = true,
                unsubscribed_at = NULL
            RETURNING id
        """

        try:
            conn = await self.lease.acquire()
            subscription_id = await conn.fetchval(query, contact_id, email)
        except STORE_ERRORS as e:
            raise store_error("subscription upsert", e) from e

        logger.info(f"Subscription {subscription_id} active (contact: {contact_id})")
        return str(subscription_id) if subscription_id else None
