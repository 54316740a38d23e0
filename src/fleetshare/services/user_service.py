"""Service layer for holders and administrators.

Holders are registered users; an administrator is an active superuser.
All data access goes through UserRepository.
"""

import logging
from datetime import timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from fleetshare.core.config import settings
from fleetshare.core.exceptions import AuthenticationError, ValidationError
from fleetshare.core.security import create_access_token, get_password_hash, verify_password
from fleetshare.db.session import transactional
from fleetshare.models.user import User
from fleetshare.repositories.user import UserRepository
from fleetshare.schemas.auth import UserRegister

logger = logging.getLogger(__name__)


async def get_user(db: AsyncSession, user_id: int) -> User | None:
    """Retrieve a user by id."""
    repo = UserRepository(User, db)
    return await repo.get(user_id)


async def get_user_by_username_or_email(db: AsyncSession, identifier: str) -> User | None:
    """Retrieve a user by username or email address.

    Tries username first, then falls back to email lookup if not found.
    This is useful for login flows where users can authenticate with either.

    Args:
        db: Async database session
        identifier: Username or email address

    Returns:
        User model instance if found, None otherwise

    Example:
        >>> # Can use username
        >>> user = await get_user_by_username_or_email(db, "johndoe")
        >>> # Or email
        >>> user = await get_user_by_username_or_email(db, "john@example.com")
    """
    repo = UserRepository(User, db)
    return await repo.get_by_username_or_email(identifier)


async def email_exists(db: AsyncSession, email: str) -> bool:
    """Check if an email address is already registered.

    Example:
        >>> if await email_exists(db, "user@example.com"):
        ...     raise ValidationError("Email already registered")
    """
    repo = UserRepository(User, db)
    return await repo.exists_by_email(email)


async def username_exists(db: AsyncSession, username: str) -> bool:
    """Check if a username is already registered."""
    repo = UserRepository(User, db)
    return await repo.exists_by_username(username)


async def register_user(db: AsyncSession, user_data: UserRegister) -> User:
    """Create a holder account.

    Args:
        db: Async database session
        user_data: Registration data

    Returns:
        The created user (never an administrator)

    Raises:
        ValidationError: If the username or email is already registered
    """
    if await username_exists(db, user_data.username):
        raise ValidationError("Username already registered")
    if await email_exists(db, user_data.email):
        raise ValidationError("Email already registered")

    repo = UserRepository(User, db)
    async with transactional(db):
        user = await repo.create(
            obj_in={
                "email": user_data.email,
                "username": user_data.username,
                "hashed_password": get_password_hash(user_data.password),
                "is_active": True,
                "is_superuser": False,
            }
        )

    logger.info(f"Registered holder {user.username} (id={user.id})")
    return user


async def authenticate_user(
    db: AsyncSession,
    username_or_email: str,
    password: str,
) -> User:
    """Authenticate a user by username/email and password.

    Verifies user credentials and ensures the user is active.

    Args:
        db: Async database session
        username_or_email: Username or email address
        password: Plain text password to verify

    Returns:
        User: Authenticated user instance

    Raises:
        AuthenticationError: If credentials are invalid
        ValidationError: If the user is inactive

    Example:
        >>> user = await authenticate_user(db, "john@example.com", "secret123")
        >>> print(user.username)
        johndoe
    """
    user = await get_user_by_username_or_email(db, username_or_email)

    if not user or not verify_password(password, user.hashed_password):
        raise AuthenticationError("Incorrect username or password")

    if not user.is_active:
        raise ValidationError("Inactive user")

    return user


async def create_user_token(
    db: AsyncSession,
    username_or_email: str,
    password: str,
) -> str:
    """Authenticate a user and issue a JWT access token.

    Raises:
        AuthenticationError: If credentials are invalid
        ValidationError: If the user is inactive
    """
    user = await authenticate_user(db, username_or_email, password)
    return create_access_token(
        data={"sub": user.username},
        expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )


async def is_administrator(db: AsyncSession, user_id: int) -> bool:
    """Whether a user may perform administrative ledger operations.

    Unknown and inactive users are not administrators.
    """
    user = await get_user(db, user_id)
    return user is not None and user.is_active and user.is_superuser
