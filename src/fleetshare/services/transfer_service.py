"""Service layer for moving value in and out of the ledger's treasury.

The ledger never moves money itself; it asks a ``TransferGateway``. The
default ``LedgerTransferGateway`` books every movement against a single
treasury balance in the same database transaction as the ledger change, so a
failed transfer rolls the whole operation back.

Callers follow checks -> effects -> interactions: all ledger mutations are
flushed before ``pay`` runs, because payout hooks may execute arbitrary code
(including calls back into this service) before ``pay`` returns.
"""

import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from fleetshare.core.exceptions import TransferFailureError, ValidationError
from fleetshare.core.reentrancy import non_reentrant
from fleetshare.db.session import transactional
from fleetshare.models.ledger_event import LedgerEventType
from fleetshare.models.treasury import (
    FundMovement,
    MovementDirection,
    MovementReason,
    Treasury,
)
from fleetshare.repositories.treasury import FundMovementRepository, TreasuryRepository
from fleetshare.services.event_log import record_event

logger = logging.getLogger(__name__)

# Code run on the recipient's side of a payout, e.g. a wallet callback
PayoutHook = Callable[[FundMovement], Awaitable[None]]


class TransferGateway(Protocol):
    """The value-transfer primitive the ledger relies on."""

    async def collect(
        self,
        payer_id: int | None,
        amount: int,
        *,
        reason: MovementReason,
        asset_id: int | None = None,
    ) -> FundMovement: ...

    async def pay(
        self,
        recipient_id: int,
        amount: int,
        *,
        reason: MovementReason,
        asset_id: int | None = None,
    ) -> FundMovement: ...

    async def balance(self) -> int: ...


class LedgerTransferGateway:
    """Transfer gateway that books movements against the treasury table.

    Example:
        >>> gateway = LedgerTransferGateway(db)
        >>> await gateway.collect(holder_id, 100, reason=MovementReason.SHARE_PURCHASE)
        >>> await gateway.pay(holder_id, 40, reason=MovementReason.EARNINGS_PAYOUT)
        >>> await gateway.balance()
        60
    """

    def __init__(self, db: AsyncSession, *, payout_hooks: Sequence[PayoutHook] = ()) -> None:
        """Initialize the gateway.

        Args:
            db: Session of the running operation
            payout_hooks: Awaited after each payout is booked; an exception
                from a hook fails the transfer
        """
        self.db = db
        self.payout_hooks = list(payout_hooks)
        self._treasury = TreasuryRepository(Treasury, db)

    async def collect(
        self,
        payer_id: int | None,
        amount: int,
        *,
        reason: MovementReason,
        asset_id: int | None = None,
    ) -> FundMovement:
        """Book value received from ``payer_id``.

        Raises:
            ValidationError: If amount is not positive
        """
        if amount <= 0:
            raise ValidationError(f"Transfer amount must be positive, got {amount}")

        treasury = await self._treasury.get_or_create(for_update=True)
        treasury.balance += amount
        treasury.total_in += amount
        movement = self._book(MovementDirection.IN, reason, payer_id, asset_id, amount)
        await self.db.flush()

        logger.info(f"Collected {amount} from {payer_id} ({reason.value}); balance {treasury.balance}")
        return movement

    async def pay(
        self,
        recipient_id: int,
        amount: int,
        *,
        reason: MovementReason,
        asset_id: int | None = None,
    ) -> FundMovement:
        """Book value sent to ``recipient_id`` and run payout hooks.

        Raises:
            ValidationError: If amount is not positive
            TransferFailureError: If the treasury cannot cover the amount or
                the recipient side rejects the transfer
        """
        if amount <= 0:
            raise ValidationError(f"Transfer amount must be positive, got {amount}")

        treasury = await self._treasury.get_or_create(for_update=True)
        if amount > treasury.balance:
            raise TransferFailureError(
                f"Treasury balance {treasury.balance} cannot cover transfer of {amount}"
            )
        treasury.balance -= amount
        treasury.total_out += amount
        movement = self._book(MovementDirection.OUT, reason, recipient_id, asset_id, amount)
        await self.db.flush()

        for hook in self.payout_hooks:
            try:
                await hook(movement)
            except Exception as e:
                raise TransferFailureError(
                    f"Recipient {recipient_id} rejected transfer of {amount}: {e}"
                ) from e

        logger.info(f"Paid {amount} to {recipient_id} ({reason.value}); balance {treasury.balance}")
        return movement

    async def balance(self) -> int:
        """Current treasury balance."""
        return await self._treasury.current_balance()

    def _book(
        self,
        direction: MovementDirection,
        reason: MovementReason,
        counterparty_id: int | None,
        asset_id: int | None,
        amount: int,
    ) -> FundMovement:
        movement = FundMovement(
            direction=direction,
            reason=reason,
            counterparty_id=counterparty_id,
            asset_id=asset_id,
            amount=amount,
        )
        self.db.add(movement)
        return movement


def get_transfer_gateway(db: AsyncSession) -> TransferGateway:
    """Default gateway for a session."""
    return LedgerTransferGateway(db)


async def contract_balance(db: AsyncSession) -> int:
    """Total value currently held by the ledger."""
    return await TreasuryRepository(Treasury, db).current_balance()


async def movements_of(
    db: AsyncSession,
    user_id: int,
    *,
    skip: int = 0,
    limit: int = 100,
) -> list[FundMovement]:
    """Value movements to or from one user, newest first."""
    repo = FundMovementRepository(FundMovement, db)
    return await repo.list_for_counterparty(user_id, skip=skip, limit=limit)


@non_reentrant
async def receive_funds(
    db: AsyncSession,
    gateway: TransferGateway,
    *,
    sender_id: int | None,
    amount: int,
) -> FundMovement:
    """Accept incidental value sent without instruction.

    The treasury grows; assets, holdings and accumulators are untouched.

    Raises:
        ValidationError: If amount is not positive
    """
    if amount <= 0:
        raise ValidationError("Received amount must be greater than 0")

    async with transactional(db):
        record_event(db, LedgerEventType.FUNDS_RECEIVED, actor_id=sender_id, amount=amount)
        movement = await gateway.collect(
            sender_id, amount, reason=MovementReason.INCIDENTAL_RECEIPT
        )
    return movement


@non_reentrant
async def withdraw_operator_funds(
    db: AsyncSession,
    gateway: TransferGateway,
    *,
    operator_id: int,
    amount: int,
) -> FundMovement:
    """Pay treasury funds out to the operating administrator.

    Administrator identity is verified by the caller.

    Raises:
        ValidationError: If amount is not positive
        TransferFailureError: If the treasury cannot cover the amount
    """
    if amount <= 0:
        raise ValidationError("Withdrawal amount must be greater than 0")

    async with transactional(db):
        record_event(db, LedgerEventType.FUNDS_WITHDRAWN, actor_id=operator_id, amount=amount)
        await db.flush()
        movement = await gateway.pay(
            operator_id, amount, reason=MovementReason.OPERATOR_WITHDRAWAL
        )
    return movement
