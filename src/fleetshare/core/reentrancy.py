"""Mutual exclusion for mutating ledger operations.

Every mutating service entrypoint is wrapped with ``non_reentrant``. The guard:

- serializes operations within the process (one ``asyncio.Lock`` per event loop),
  so two requests never interleave their intermediate states;
- rejects a nested call made from inside a running operation (for example by
  code triggered from a value transfer) with ``ReentrancyError`` instead of
  deadlocking on the lock.

The token is a context variable, so it follows the task that acquired it and
is released on every exit path, including failures.
"""

import asyncio
import functools
import logging
import weakref
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from contextvars import ContextVar
from typing import ParamSpec, TypeVar

from fleetshare.core.exceptions import ReentrancyError

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")

_active_operation: ContextVar[str | None] = ContextVar("fleetshare_active_operation", default=None)
_locks: "weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, asyncio.Lock]" = (
    weakref.WeakKeyDictionary()
)


def _loop_lock() -> asyncio.Lock:
    loop = asyncio.get_running_loop()
    lock = _locks.get(loop)
    if lock is None:
        lock = asyncio.Lock()
        _locks[loop] = lock
    return lock


def current_operation() -> str | None:
    """Name of the guarded operation running in this context, if any."""
    return _active_operation.get()


@asynccontextmanager
async def operation_guard(name: str) -> AsyncIterator[None]:
    """Acquire the operation token for ``name``.

    Args:
        name: Operation name, used in logs and in the re-entrancy error

    Raises:
        ReentrancyError: If called while another guarded operation is running
            in the same context
    """
    running = _active_operation.get()
    if running is not None:
        logger.warning(f"Rejected re-entrant call to {name} from inside {running}")
        raise ReentrancyError(f"Cannot enter {name} while {running} is in progress")

    async with _loop_lock():
        token = _active_operation.set(name)
        try:
            yield
        finally:
            _active_operation.reset(token)


def non_reentrant(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
    """Wrap an async service entrypoint in ``operation_guard``.

    Example:
        >>> @non_reentrant
        ... async def claim(db, gateway, *, asset_id, holder_id): ...
    """

    @functools.wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        async with operation_guard(func.__name__):
            return await func(*args, **kwargs)

    return wrapper
