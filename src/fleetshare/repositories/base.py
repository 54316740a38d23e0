"""Base repository with common persistence operations.

Provides generic database operations that can be inherited by model-specific
repositories. Uses SQLAlchemy 2.0's async API with proper type hints.

Ledger records are never deleted, so there is no delete operation here.
"""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fleetshare.db.base import Base

# Generic type for SQLAlchemy models
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with common create and read operations.

    Repositories do NOT manage transactions - the caller is responsible
    for commit/rollback (see ``fleetshare.db.session.transactional``).

    Type Parameters:
        ModelType: The SQLAlchemy model class

    Example:
        >>> class AssetRepository(BaseRepository[Asset]):
        ...     pass
        >>>
        >>> repo = AssetRepository(Asset, db)
        >>> asset = await repo.get(1)
    """

    def __init__(self, model: type[ModelType], db: AsyncSession):
        """Initialize repository.

        Args:
            model: The SQLAlchemy model class
            db: Async database session
        """
        self.model = model
        self.db = db

    async def get(self, id: Any) -> ModelType | None:
        """Get a single record by primary key.

        Args:
            id: Primary key value

        Returns:
            Model instance if found, None otherwise
        """
        result = await self.db.execute(
            select(self.model).where(self.model.id == id)  # type: ignore[attr-defined]
        )
        return result.scalar_one_or_none()

    async def get_for_update(self, id: Any) -> ModelType | None:
        """Get a record by primary key and lock its row until the transaction ends.

        PostgreSQL issues ``SELECT ... FOR UPDATE``; SQLite ignores the lock
        clause, which is fine because it serializes writers anyway.

        Args:
            id: Primary key value

        Returns:
            Model instance if found, None otherwise
        """
        result = await self.db.execute(
            select(self.model)
            .where(self.model.id == id)  # type: ignore[attr-defined]
            .with_for_update()
        )
        return result.scalar_one_or_none()

    async def create(self, *, obj_in: BaseModel | dict[str, Any]) -> ModelType:
        """Create a new record with Pydantic validation support.

        Args:
            obj_in: Pydantic model or dictionary of field names and values

        Returns:
            Created model instance (flushed, not yet committed)

        Note:
            Caller must commit the transaction.
        """
        if isinstance(obj_in, BaseModel):
            create_data = obj_in.model_dump(exclude_unset=True)
        else:
            create_data = obj_in

        db_obj = self.model(**create_data)
        self.db.add(db_obj)
        await self.db.flush()
        await self.db.refresh(db_obj)
        return db_obj
