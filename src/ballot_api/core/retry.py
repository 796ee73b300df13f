"""Bounded exponential-backoff retry for transient storage failures.

Only infrastructure hiccups (dropped connections, pool churn, duplicate
prepared statements behind PgBouncer, SQLite lock timeouts) are retried.
Constraint violations are real answers from the database and are always
re-raised untouched.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

from loguru import logger
from sqlalchemy.exc import DBAPIError, IntegrityError, InterfaceError, OperationalError

from ballot_api.core.errors import StorageUnavailableError

T = TypeVar("T")

# SQLSTATE classes/codes treated as transient: connection exceptions (08xxx),
# duplicate prepared statement (42P05), and operator intervention (57Pxx).
_TRANSIENT_SQLSTATE_PREFIXES = ("08", "57P")
_TRANSIENT_SQLSTATES = {"42P05"}
_TRANSIENT_MESSAGE_MARKERS = ("prepared statement", "connection", "database is locked")


def _sqlstate(exc: DBAPIError) -> str | None:
    orig = exc.orig
    for attr in ("sqlstate", "pgcode"):
        value = getattr(orig, attr, None)
        if isinstance(value, str):
            return value
    return None


def is_transient_storage_error(exc: BaseException) -> bool:
    """Return True if ``exc`` is a transient infrastructure failure worth retrying.

    Args:
        exc: The raised exception.

    Returns:
        False for integrity/uniqueness violations, True for connection-level
        and pool-level failures.
    """
    if isinstance(exc, IntegrityError):
        return False
    if isinstance(exc, (ConnectionError, TimeoutError)):
        return True
    if not isinstance(exc, DBAPIError):
        return False
    if exc.connection_invalidated or isinstance(exc, (OperationalError, InterfaceError)):
        return True
    state = _sqlstate(exc)
    if state is not None and (state in _TRANSIENT_SQLSTATES or state.startswith(_TRANSIENT_SQLSTATE_PREFIXES)):
        return True
    text = str(exc.orig if exc.orig is not None else exc).lower()
    return any(marker in text for marker in _TRANSIENT_MESSAGE_MARKERS)


async def with_storage_retry(
    operation: Callable[[], Awaitable[T]],
    *,
    attempts: int = 3,
    base_delay: float = 0.5,
    description: str = "storage operation",
) -> T:
    """Run ``operation`` with bounded exponential backoff on transient errors.

    Args:
        operation: Zero-argument coroutine factory; called once per attempt.
            It must leave its session usable (rolled back) when it raises.
        attempts: Maximum number of attempts (>= 1).
        base_delay: Delay before the second attempt; doubles each retry.
        description: Short label used in log messages.

    Returns:
        The operation's result.

    Raises:
        StorageUnavailableError: If every attempt failed transiently.
        Exception: Any non-transient error is re-raised immediately.
    """
    attempts = max(1, attempts)
    for attempt in range(1, attempts + 1):
        try:
            return await operation()
        except Exception as e:
            if not is_transient_storage_error(e):
                raise
            if attempt == attempts:
                logger.error("{} failed after {} attempt(s): {}", description, attempts, e)
                raise StorageUnavailableError() from e
            delay = base_delay * (2 ** (attempt - 1))
            logger.warning(
                "{} transient failure (attempt {}/{}), retrying in {}s: {}",
                description,
                attempt,
                attempts,
                delay,
                e,
            )
            await asyncio.sleep(delay)
    # attempts >= 1 guarantees the loop returns or raises
    raise StorageUnavailableError()
