"""Treasury endpoints: contract balance, operator withdrawals and incidental receipts."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from fleetshare.core.config import settings
from fleetshare.core.constants import APIConstants
from fleetshare.core.deps import CurrentActiveUser, CurrentAdministrator, Gateway
from fleetshare.core.rate_limit import limiter
from fleetshare.db.session import get_db
from fleetshare.models.treasury import FundMovement
from fleetshare.schemas.treasury import BalanceResponse, FundMovementResponse, FundsTransfer
from fleetshare.services import transfer_service

router = APIRouter()


@router.get("/balance", response_model=BalanceResponse)
async def contract_balance(db: Annotated[AsyncSession, Depends(get_db)]) -> BalanceResponse:
    """Total value currently held by the ledger."""
    return BalanceResponse(balance=await transfer_service.contract_balance(db))


@router.post("/withdrawals", response_model=FundMovementResponse)
@limiter.limit(settings.ADMIN_RATE_LIMIT)
async def withdraw_operator_funds(
    request: Request,
    transfer: FundsTransfer,
    current_user: CurrentAdministrator,
    gateway: Gateway,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> FundMovement:
    """
    Withdraw treasury funds to the calling administrator.

    Raises:
        TransferFailureError: If the treasury cannot cover the amount
    """
    return await transfer_service.withdraw_operator_funds(
        db, gateway, operator_id=current_user.id, amount=transfer.amount
    )


@router.post("/receive", response_model=FundMovementResponse, status_code=status.HTTP_201_CREATED)
async def receive_funds(
    transfer: FundsTransfer,
    current_user: CurrentActiveUser,
    gateway: Gateway,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> FundMovement:
    """Accept value sent without instruction; the ledger itself is untouched."""
    return await transfer_service.receive_funds(
        db, gateway, sender_id=current_user.id, amount=transfer.amount
    )


@router.get("/movements/me", response_model=list[FundMovementResponse])
async def my_movements(
    current_user: CurrentActiveUser,
    db: Annotated[AsyncSession, Depends(get_db)],
    skip: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=APIConstants.MAX_PAGE_SIZE)] = APIConstants.DEFAULT_PAGE_SIZE,
) -> list[FundMovement]:
    """Value movements to or from the current user, newest first."""
    return await transfer_service.movements_of(db, current_user.id, skip=skip, limit=limit)
