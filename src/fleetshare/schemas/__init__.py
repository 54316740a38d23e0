"""Schemas package."""

from fleetshare.schemas.asset import (
    AssetCount,
    AssetCreate,
    AssetResponse,
    AssetStatusUpdate,
    SoldShares,
)
from fleetshare.schemas.auth import Token, TokenData, UserRegister
from fleetshare.schemas.distribution import (
    ClaimAllResult,
    ClaimResult,
    DepositResult,
    ExpenseRecord,
    RevenueDeposit,
)
from fleetshare.schemas.event import LedgerEventResponse
from fleetshare.schemas.holding import HoldingResponse, PendingResponse
from fleetshare.schemas.portfolio import PortfolioPosition, PortfolioResponse
from fleetshare.schemas.trade import BuyRequest, SellRequest, TradeResult
from fleetshare.schemas.treasury import BalanceResponse, FundMovementResponse, FundsTransfer
from fleetshare.schemas.user import AdministratorStatus, UserBase, UserResponse

__all__ = [
    # Authentication schemas
    "Token",
    "TokenData",
    "UserRegister",
    # User schemas
    "UserBase",
    "UserResponse",
    "AdministratorStatus",
    # Asset schemas
    "AssetCreate",
    "AssetCount",
    "AssetResponse",
    "AssetStatusUpdate",
    "SoldShares",
    # Holding schemas
    "HoldingResponse",
    "PendingResponse",
    # Trade schemas
    "BuyRequest",
    "SellRequest",
    "TradeResult",
    # Distribution schemas
    "RevenueDeposit",
    "ExpenseRecord",
    "DepositResult",
    "ClaimResult",
    "ClaimAllResult",
    # Portfolio schemas
    "PortfolioPosition",
    "PortfolioResponse",
    # Treasury schemas
    "FundsTransfer",
    "BalanceResponse",
    "FundMovementResponse",
    # Event schemas
    "LedgerEventResponse",
]
