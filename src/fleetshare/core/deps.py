"""Dependencies for FastAPI routes."""

from typing import Annotated

import jwt
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from fleetshare.core.exceptions import AuthenticationError, PermissionDeniedError, ValidationError
from fleetshare.core.security import decode_token
from fleetshare.db.session import get_db
from fleetshare.models.user import User
from fleetshare.repositories.user import UserRepository
from fleetshare.schemas.auth import TokenData
from fleetshare.services.transfer_service import TransferGateway, get_transfer_gateway

# OAuth2 scheme for extracting token from Authorization header
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login")


async def get_current_user(
    token: Annotated[str, Depends(oauth2_scheme)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """
    Get the current authenticated user from JWT token.

    Args:
        token: JWT token from Authorization header
        db: Database session

    Returns:
        The authenticated user

    Raises:
        AuthenticationError: If credentials are invalid or user not found
    """
    try:
        payload = decode_token(token)
        username: str | None = payload.get("sub")
        if username is None:
            raise AuthenticationError("Could not validate credentials")
        token_data = TokenData(username=username)
    except jwt.InvalidTokenError as e:
        raise AuthenticationError("Could not validate credentials") from e

    user = await UserRepository(User, db).get_by_username(token_data.username)
    if user is None:
        raise AuthenticationError("Could not validate credentials")

    return user


async def get_current_active_user(
    current_user: Annotated[User, Depends(get_current_user)],
) -> User:
    """
    Get the current authenticated and active user.

    Raises:
        ValidationError: If the user is inactive
    """
    if not current_user.is_active:
        raise ValidationError("Inactive user")

    return current_user


async def get_current_administrator(
    current_user: Annotated[User, Depends(get_current_active_user)],
) -> User:
    """
    Get the current authenticated administrator.

    Args:
        current_user: The authenticated active user

    Returns:
        The administrator

    Raises:
        PermissionDeniedError: If the user is not a superuser
    """
    if not current_user.is_superuser:
        raise PermissionDeniedError()

    return current_user


async def get_gateway(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TransferGateway:
    """Transfer primitive bound to the request's session."""
    return get_transfer_gateway(db)


# Type aliases for cleaner dependency injection
CurrentActiveUser = Annotated[User, Depends(get_current_active_user)]
CurrentAdministrator = Annotated[User, Depends(get_current_administrator)]
Gateway = Annotated[TransferGateway, Depends(get_gateway)]
