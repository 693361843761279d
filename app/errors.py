# app/errors.py
from typing import Optional

UNIQUE_VIOLATION = "23505"


class ValidationError(ValueError):
    """Missing or malformed request input (HTTP 400)"""


class DatabaseUnavailableError(RuntimeError):
    """No database is configured for this process"""


class StoreWriteError(Exception):
    """A datastore operation failed"""

    def __init__(self, operation: str, message: str, sqlstate: Optional[str] = None):
        super().__init__(f"{operation} failed: {message}")
        self.operation = operation
        self.sqlstate = sqlstate

    @property
    def is_unique_violation(self) -> bool:
        return self.sqlstate == UNIQUE_VIOLATION
