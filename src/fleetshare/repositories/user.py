"""User repository for identity lookups."""

from sqlalchemy import select

from fleetshare.models.user import User
from fleetshare.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for User model with lookups by email and username.

    Example:
        >>> repo = UserRepository(User, db)
        >>> user = await repo.get_by_username("alice")
    """

    async def get_by_email(self, email: str) -> User | None:
        """Get user by email address."""
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str) -> User | None:
        """Get user by username."""
        result = await self.db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def get_by_username_or_email(self, identifier: str) -> User | None:
        """Get user by username or email address.

        Tries username first, then falls back to email lookup if not found.

        Args:
            identifier: Username or email address

        Returns:
            User object if found, None otherwise
        """
        user = await self.get_by_username(identifier)
        if not user:
            user = await self.get_by_email(identifier)
        return user

    async def exists_by_email(self, email: str) -> bool:
        """Check if email address is already registered."""
        return await self.get_by_email(email) is not None

    async def exists_by_username(self, username: str) -> bool:
        """Check if username is already registered."""
        return await self.get_by_username(username) is not None
