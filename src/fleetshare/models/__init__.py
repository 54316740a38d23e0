"""ORM models.

Importing this package registers every table on ``Base.metadata``.
"""

from fleetshare.models.asset import Asset
from fleetshare.models.holding import Holding
from fleetshare.models.ledger_event import LedgerEvent, LedgerEventType
from fleetshare.models.treasury import (
    TREASURY_ID,
    FundMovement,
    MovementDirection,
    MovementReason,
    Treasury,
)
from fleetshare.models.user import User

__all__ = [
    "Asset",
    "FundMovement",
    "Holding",
    "LedgerEvent",
    "LedgerEventType",
    "MovementDirection",
    "MovementReason",
    "TREASURY_ID",
    "Treasury",
    "User",
]
