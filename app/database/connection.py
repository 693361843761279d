# app/database/connection.py
import asyncpg
from typing import Optional
from app.config import Settings
from app.errors import DatabaseUnavailableError
import logging

logger = logging.getLogger(__name__)

class DatabaseConnection:
    """Owns the asyncpg pool for one application instance"""

    def __init__(self, settings: Settings):
        self.settings = settings
        self._pool: Optional[asyncpg.Pool] = None

    async def get_pool(self) -> asyncpg.Pool:
        """Get or create database connection pool"""
        if self._pool is None:
            try:
                if not self.settings.database_url:
                    raise DatabaseUnavailableError("DATABASE_URL environment variable not set")

                self._pool = await asyncpg.create_pool(
                    self.settings.database_url,
                    min_size=self.settings.db_pool_min_size,
                    max_size=self.settings.db_pool_max_size,
                    command_timeout=self.settings.db_command_timeout
                )
                logger.info("Database connection pool created")
            except Exception as e:
                logger.error(f"Failed to create database pool: {e}")
                raise
        return self._pool

    async def close_pool(self):
        """Close database connection pool"""
        if self._pool:
            await self._pool.close()
            self._pool = None
            logger.info("Database connection pool closed")

    async def acquire(self) -> asyncpg.Connection:
        """Get database connection from pool"""
        pool = await self.get_pool()
        return await pool.acquire()

    async def release(self, connection: asyncpg.Connection):
        """Release database connection back to pool"""
        pool = await self.get_pool()
        await pool.release(connection)


class ConnectionLease:
    """One request's pooled connection, acquired on first use.

    Requests rejected before any store operation never touch the pool.
    """

    def __init__(self, database: DatabaseConnection):
        self.database = database
        self._connection: Optional[asyncpg.Connection] = None

    @property
    def acquired(self) -> bool:
        return self._connection is not None

    async def acquire(self) -> asyncpg.Connection:
        if self._connection is None:
            self._connection = await self.database.acquire()
        return self._connection

    async def release(self):
        if self._connection is not None:
            connection, self._connection = self._connection, None
            await self.database.release(connection)
