"""Database session management with transaction utilities.

This module provides:
- AsyncSession factory for dependency injection
- ``transactional``: the all-or-nothing unit every mutating ledger operation runs in
- ``read_only_transaction`` for ledger queries that must never commit
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from fleetshare.core.config import settings
from fleetshare.core.exceptions import AppException

logger = logging.getLogger(__name__)

# Create async engine
engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DB_ECHO,
    pool_size=settings.DB_POOL_SIZE,
    max_overflow=settings.DB_MAX_OVERFLOW,
    pool_timeout=settings.DB_POOL_TIMEOUT,
    pool_recycle=settings.DB_POOL_RECYCLE,
    pool_pre_ping=True,
)

# Create async session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get database session dependency for route handlers.

    Commits whatever the request left pending, rolls back on error and
    always closes the session.

    Yields:
        AsyncSession: Database session for the request
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


def _failure_log_level(exc: Exception) -> int:
    # Rejected operations (4xx) are routine; anything else is a failure
    if isinstance(exc, AppException) and exc.status_code < 500:
        return logging.WARNING
    return logging.ERROR


@asynccontextmanager
async def transactional(
    db: AsyncSession,
    *,
    commit: bool = True,
) -> AsyncGenerator[AsyncSession, None]:
    """Explicit transaction context manager with automatic commit/rollback.

    Ledger operations run their checks, effects and value transfers inside
    one ``transactional`` block: either every change commits or, on any
    exception (including a failed transfer), every change is rolled back.

    Args:
        db: The database session
        commit: Whether to commit on success (default: True)

    Yields:
        AsyncSession: The database session

    Raises:
        Exception: Re-raises any exception after rollback

    Example:
        ```python
        async with transactional(db):
            asset.available_shares -= units
            holding.units += units
            await gateway.pay(holder_id, refund, reason=MovementReason.PURCHASE_REFUND)
        ```
    """
    try:
        yield db
        if commit:
            await db.commit()
            logger.debug("Transaction committed successfully")
    except Exception as e:
        await db.rollback()
        logger.log(
            _failure_log_level(e), f"Transaction rolled back due to error: {type(e).__name__}: {e}"
        )
        raise


@asynccontextmanager
async def read_only_transaction(
    db: AsyncSession,
) -> AsyncGenerator[AsyncSession, None]:
    """Read-only transaction context manager (never commits).

    Used by the pending/portfolio views, which are pure reads.

    Args:
        db: The database session

    Yields:
        AsyncSession: The database session
    """
    try:
        yield db
    except Exception as e:
        logger.log(_failure_log_level(e), f"Read-only transaction error: {type(e).__name__}: {e}")
        raise
