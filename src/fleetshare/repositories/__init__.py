"""Repository layer for database operations.

This package provides the repository pattern implementation, centralizing
all database access logic and keeping it apart from the ledger rules in
``fleetshare.services``.

Repositories:
    - BaseRepository: Generic create and read operations for any model
    - UserRepository: Holder and administrator identity lookups
    - AssetRepository: Vehicle catalog queries
    - HoldingRepository: Per-(asset, holder) balances
    - TreasuryRepository: Pooled balance row
    - FundMovementRepository: Journal of value transfers
    - LedgerEventRepository: Audit trail queries

Usage:
    >>> from fleetshare.repositories import AssetRepository
    >>> from fleetshare.models.asset import Asset
    >>>
    >>> asset_repo = AssetRepository(Asset, db)
    >>> assets = await asset_repo.list_in_creation_order()
"""

from fleetshare.repositories.asset import AssetRepository
from fleetshare.repositories.base import BaseRepository
from fleetshare.repositories.holding import HoldingRepository
from fleetshare.repositories.ledger_event import LedgerEventRepository
from fleetshare.repositories.treasury import FundMovementRepository, TreasuryRepository
from fleetshare.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "AssetRepository",
    "HoldingRepository",
    "TreasuryRepository",
    "FundMovementRepository",
    "LedgerEventRepository",
]
