"""User endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fleetshare.db.session import get_db
from fleetshare.schemas.user import AdministratorStatus
from fleetshare.services import user_service

router = APIRouter()


@router.get("/{user_id}/is-administrator", response_model=AdministratorStatus)
async def is_administrator(
    user_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AdministratorStatus:
    """
    Whether a user may perform administrative ledger operations.

    Unknown users are reported as not administrators.
    """
    return AdministratorStatus(
        user_id=user_id,
        is_administrator=await user_service.is_administrator(db, user_id),
    )
