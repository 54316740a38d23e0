"""Authentication routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.ext.asyncio import AsyncSession

from fleetshare.core.config import settings
from fleetshare.core.deps import CurrentActiveUser
from fleetshare.core.rate_limit import limiter
from fleetshare.db.session import get_db
from fleetshare.models.user import User
from fleetshare.schemas.auth import Token, UserRegister
from fleetshare.schemas.user import UserResponse
from fleetshare.services import user_service

router = APIRouter()


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.AUTH_RATE_LIMIT)
async def register(
    request: Request,
    user_data: UserRegister,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """
    Register a new holder.

    Args:
        user_data: User registration data
        db: Database session

    Returns:
        The created user

    Raises:
        ValidationError: If username or email already exists
    """
    return await user_service.register_user(db, user_data)


@router.post("/login", response_model=Token)
@limiter.limit(settings.AUTH_RATE_LIMIT)
async def login(
    request: Request,
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Token:
    """
    OAuth2 compatible token login.

    Get an access token for future requests using username and password.

    Raises:
        AuthenticationError: If credentials are invalid
    """
    access_token = await user_service.create_user_token(db, form_data.username, form_data.password)
    return Token(access_token=access_token)


@router.get("/me", response_model=UserResponse)
async def read_users_me(current_user: CurrentActiveUser) -> User:
    """Get current authenticated user."""
    return current_user
