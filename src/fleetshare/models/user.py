"""User model: holders and administrators."""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from fleetshare.db.base import Base, TimestampMixin


class User(Base, TimestampMixin):
    """Registered account; ``is_superuser`` marks an administrator."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    username: Mapped[str] = mapped_column(String(50), unique=True, index=True)
    hashed_password: Mapped[str] = mapped_column(String(255))
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    is_superuser: Mapped[bool] = mapped_column(Boolean, default=False)
