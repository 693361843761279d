# app/services/write_policy.py
from enum import Enum
from typing import Any, Awaitable, Callable, Optional, TypeVar
from app.errors import StoreWriteError
import logging

logger = logging.getLogger(__name__)

T = TypeVar("T")


class WritePolicy(str, Enum):
    CRITICAL = "critical"  # failure fails the request
    BEST_EFFORT = "best_effort"  # failure is logged only


async def run_store_operation(
    policy: WritePolicy,
    label: str,
    operation: Callable[[], Awaitable[T]],
    ignore_unique_violation: bool = False
) -> Optional[T]:
    """Await a store operation and apply its failure policy.

    CRITICAL operations re-raise StoreWriteError. BEST_EFFORT operations log
    the failure and return None. With ignore_unique_violation, a unique
    constraint violation is a concurrent insert the store already reconciled,
    so it is logged and reported as a None result under either policy.
    """
    try:
        return await operation()
    except StoreWriteError as e:
        if ignore_unique_violation and e.is_unique_violation:
            logger.warning(f"Ignoring unique constraint violation on {label}: {e}")
            return None
        if policy is WritePolicy.BEST_EFFORT:
            logger.error(f"Best-effort {label} failed: {e}")
            return None
        logger.error(f"{label} failed: {e}")
        raise
