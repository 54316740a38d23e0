"""Tests for buying and selling shares."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from fleetshare.core.constants import SCALE
from fleetshare.core.exceptions import (
    InactiveAssetError,
    InsufficientAvailabilityError,
    InsufficientHoldingError,
    InsufficientPaymentError,
    NotFoundError,
    TransferFailureError,
    ValidationError,
)
from fleetshare.models.ledger_event import LedgerEventType
from fleetshare.models.treasury import MovementDirection, MovementReason
from fleetshare.services.asset_registry import get_asset, set_asset_active
from fleetshare.services.distribution_engine import deposit_revenue, pending_of
from fleetshare.services.event_log import list_events
from fleetshare.services.holder_ledger import find_holding, units_outstanding
from fleetshare.services.trade_gateway import buy_shares, sell_shares
from fleetshare.services.transfer_service import (
    contract_balance,
    movements_of,
    withdraw_operator_funds,
)


@pytest.mark.integration
async def test_buy_shares(test_db: AsyncSession, test_user, gateway, make_asset):
    """Test a first purchase opens a holding at the current accumulator."""
    holder_id = test_user.id
    asset = await make_asset(total_shares=100, price_per_unit=1)

    result = await buy_shares(
        test_db, gateway, asset_id=asset.id, holder_id=holder_id, units=10, payment=10
    )

    assert result.units == 10
    assert result.amount == 10
    assert result.refund == 0
    assert result.settled_earnings == 0
    assert result.holding_units == 10
    assert result.available_shares == 90

    holding = await find_holding(test_db, asset.id, holder_id)
    assert holding.units == 10
    assert holding.debt == 0
    assert await contract_balance(test_db) == 10


@pytest.mark.integration
async def test_buy_refunds_overpayment(test_db: AsyncSession, test_user, gateway, make_asset):
    """Test that payment above the cost is returned to the buyer."""
    holder_id = test_user.id
    asset = await make_asset(price_per_unit=3)

    result = await buy_shares(
        test_db, gateway, asset_id=asset.id, holder_id=holder_id, units=2, payment=10
    )

    assert result.amount == 6
    assert result.refund == 4
    assert await contract_balance(test_db) == 6

    movements = await movements_of(test_db, holder_id)
    assert [(m.direction, m.reason, m.amount) for m in movements] == [
        (MovementDirection.OUT, MovementReason.PURCHASE_REFUND, 4),
        (MovementDirection.IN, MovementReason.SHARE_PURCHASE, 10),
    ]


@pytest.mark.integration
async def test_buy_with_insufficient_payment(test_db: AsyncSession, test_user, gateway, make_asset):
    """Scenario: payment below cost fails and transfers no shares."""
    holder_id = test_user.id
    asset = await make_asset(price_per_unit=1)
    asset_id = asset.id

    with pytest.raises(InsufficientPaymentError):
        await buy_shares(test_db, gateway, asset_id=asset_id, holder_id=holder_id, units=10, payment=9)

    asset = await get_asset(test_db, asset_id)
    assert asset.available_shares == 100
    assert await find_holding(test_db, asset_id, holder_id) is None
    assert await contract_balance(test_db) == 0


@pytest.mark.integration
async def test_buy_more_than_available(test_db: AsyncSession, test_user, gateway, make_asset):
    """Test that a purchase cannot exceed available shares."""
    holder_id = test_user.id
    asset = await make_asset(total_shares=5)

    with pytest.raises(InsufficientAvailabilityError):
        await buy_shares(test_db, gateway, asset_id=asset.id, holder_id=holder_id, units=6, payment=6)


@pytest.mark.integration
async def test_buy_inactive_asset(test_db: AsyncSession, test_user, gateway, make_asset):
    """Test that trading is gated by the active flag."""
    holder_id = test_user.id
    asset = await make_asset()
    await set_asset_active(test_db, asset.id, False)

    with pytest.raises(InactiveAssetError):
        await buy_shares(test_db, gateway, asset_id=asset.id, holder_id=holder_id, units=1, payment=1)


@pytest.mark.integration
async def test_buy_argument_checks(test_db: AsyncSession, test_user, gateway, make_asset):
    """Test invalid units, negative payment and unknown asset."""
    holder_id = test_user.id
    asset = await make_asset()

    with pytest.raises(ValidationError):
        await buy_shares(test_db, gateway, asset_id=asset.id, holder_id=holder_id, units=0, payment=0)
    with pytest.raises(ValidationError):
        await buy_shares(test_db, gateway, asset_id=asset.id, holder_id=holder_id, units=1, payment=-1)
    with pytest.raises(NotFoundError):
        await buy_shares(test_db, gateway, asset_id=999, holder_id=holder_id, units=1, payment=1)


@pytest.mark.integration
async def test_buy_settles_before_adding_units(test_db: AsyncSession, test_user, gateway, make_asset):
    """Test that earnings accrued on old units are paid and not extended to new ones."""
    holder_id = test_user.id
    asset = await make_asset()
    await buy_shares(test_db, gateway, asset_id=asset.id, holder_id=holder_id, units=10, payment=10)
    await deposit_revenue(test_db, gateway, asset_id=asset.id, amount=100)
    assert await pending_of(test_db, asset.id, holder_id) == 100

    result = await buy_shares(
        test_db, gateway, asset_id=asset.id, holder_id=holder_id, units=5, payment=5
    )

    assert result.settled_earnings == 100
    assert result.holding_units == 15
    holding = await find_holding(test_db, asset.id, holder_id)
    assert holding.debt == (await get_asset(test_db, asset.id)).accumulator
    assert await pending_of(test_db, asset.id, holder_id) == 0

    # The next deposit is shared by all 15 units
    await deposit_revenue(test_db, gateway, asset_id=asset.id, amount=150)
    assert await pending_of(test_db, asset.id, holder_id) == 150


@pytest.mark.integration
async def test_sell_shares_settles_then_pays_proceeds(
    test_db: AsyncSession, test_user, gateway, make_asset
):
    """Test that a sale pays accrued earnings together with the proceeds."""
    holder_id = test_user.id
    asset = await make_asset(price_per_unit=2)
    await buy_shares(test_db, gateway, asset_id=asset.id, holder_id=holder_id, units=10, payment=20)
    await deposit_revenue(test_db, gateway, asset_id=asset.id, amount=100)

    result = await sell_shares(test_db, gateway, asset_id=asset.id, holder_id=holder_id, units=4)

    assert result.settled_earnings == 100
    assert result.amount == 8
    assert result.holding_units == 6
    assert result.available_shares == 94
    holding = await find_holding(test_db, asset.id, holder_id)
    assert holding.debt == 10 * SCALE
    assert await pending_of(test_db, asset.id, holder_id) == 0
    # 20 + 100 in, 100 + 8 out
    assert await contract_balance(test_db) == 12


@pytest.mark.integration
async def test_sell_more_than_held(test_db: AsyncSession, test_user, gateway, make_asset):
    """Scenario: over-selling fails with no balance changes."""
    holder_id = test_user.id
    asset = await make_asset()
    asset_id = asset.id
    await buy_shares(test_db, gateway, asset_id=asset_id, holder_id=holder_id, units=10, payment=10)

    with pytest.raises(InsufficientHoldingError):
        await sell_shares(test_db, gateway, asset_id=asset_id, holder_id=holder_id, units=11)

    holding = await find_holding(test_db, asset_id, holder_id)
    assert holding.units == 10
    assert (await get_asset(test_db, asset_id)).available_shares == 90


@pytest.mark.integration
async def test_sell_without_holding(test_db: AsyncSession, test_user, gateway, make_asset):
    """Test that a holder who never bought cannot sell."""
    asset = await make_asset()

    with pytest.raises(InsufficientHoldingError):
        await sell_shares(test_db, gateway, asset_id=asset.id, holder_id=test_user.id, units=1)


@pytest.mark.integration
async def test_sell_inactive_asset(test_db: AsyncSession, test_user, gateway, make_asset):
    """Test that selling is gated by the active flag."""
    holder_id = test_user.id
    asset = await make_asset()
    await buy_shares(test_db, gateway, asset_id=asset.id, holder_id=holder_id, units=1, payment=1)
    await set_asset_active(test_db, asset.id, False)

    with pytest.raises(InactiveAssetError):
        await sell_shares(test_db, gateway, asset_id=asset.id, holder_id=holder_id, units=1)


@pytest.mark.integration
async def test_round_trip_restores_balances(test_db: AsyncSession, test_user, gateway, make_asset):
    """Test buying then selling k units returns both sides to their starting values."""
    holder_id = test_user.id
    asset = await make_asset(total_shares=50, price_per_unit=7)

    await buy_shares(test_db, gateway, asset_id=asset.id, holder_id=holder_id, units=12, payment=84)
    result = await sell_shares(test_db, gateway, asset_id=asset.id, holder_id=holder_id, units=12)

    assert result.holding_units == 0
    assert result.available_shares == 50
    assert await contract_balance(test_db) == 0


@pytest.mark.integration
async def test_share_conservation(
    test_db: AsyncSession, test_user, test_other_user, gateway, make_asset
):
    """Test available + held units always equals total shares."""
    a_id, b_id = test_user.id, test_other_user.id
    asset = await make_asset(total_shares=30)
    asset_id = asset.id

    async def assert_conserved():
        current = await get_asset(test_db, asset_id)
        assert current.available_shares + await units_outstanding(test_db, asset_id) == 30

    await buy_shares(test_db, gateway, asset_id=asset_id, holder_id=a_id, units=10, payment=10)
    await assert_conserved()
    await buy_shares(test_db, gateway, asset_id=asset_id, holder_id=b_id, units=20, payment=20)
    await assert_conserved()
    with pytest.raises(InsufficientAvailabilityError):
        await buy_shares(test_db, gateway, asset_id=asset_id, holder_id=a_id, units=1, payment=1)
    await assert_conserved()
    await sell_shares(test_db, gateway, asset_id=asset_id, holder_id=b_id, units=15)
    await assert_conserved()
    await buy_shares(test_db, gateway, asset_id=asset_id, holder_id=a_id, units=15, payment=15)
    await assert_conserved()


@pytest.mark.integration
async def test_failed_sale_proceeds_roll_back_the_sale(
    test_db: AsyncSession, test_user, test_superuser, gateway, make_asset
):
    """Test that a sale the treasury cannot pay leaves every balance unchanged."""
    holder_id, admin_id = test_user.id, test_superuser.id
    asset = await make_asset()
    asset_id = asset.id
    await buy_shares(test_db, gateway, asset_id=asset_id, holder_id=holder_id, units=10, payment=10)
    await withdraw_operator_funds(test_db, gateway, operator_id=admin_id, amount=10)

    with pytest.raises(TransferFailureError):
        await sell_shares(test_db, gateway, asset_id=asset_id, holder_id=holder_id, units=5)

    holding = await find_holding(test_db, asset_id, holder_id)
    assert holding.units == 10
    assert (await get_asset(test_db, asset_id)).available_shares == 90
    assert await list_events(test_db, event_type=LedgerEventType.SHARES_SOLD) == []


@pytest.mark.integration
async def test_trades_emit_events(test_db: AsyncSession, test_user, gateway, make_asset):
    """Test that buys and sells land in the audit trail."""
    holder_id = test_user.id
    asset = await make_asset(price_per_unit=5)
    await buy_shares(test_db, gateway, asset_id=asset.id, holder_id=holder_id, units=3, payment=20)
    await sell_shares(test_db, gateway, asset_id=asset.id, holder_id=holder_id, units=1)

    events = await list_events(test_db, asset_id=asset.id)

    assert [e.event_type for e in events] == [
        LedgerEventType.SHARES_SOLD,
        LedgerEventType.SHARES_BOUGHT,
        LedgerEventType.ASSET_CREATED,
    ]
    bought = events[1]
    assert bought.actor_id == holder_id
    assert bought.payload["units"] == 3
    assert bought.payload["cost"] == 15
    assert bought.payload["refund"] == 5
    assert events[0].payload["proceeds"] == 5
