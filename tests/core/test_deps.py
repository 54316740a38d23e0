"""Tests for core dependencies."""

from datetime import timedelta

import pytest

from fleetshare.core.deps import (
    get_current_active_user,
    get_current_administrator,
    get_current_user,
    get_gateway,
)
from fleetshare.core.exceptions import AuthenticationError, PermissionDeniedError, ValidationError
from fleetshare.core.security import create_access_token
from fleetshare.services.transfer_service import LedgerTransferGateway


@pytest.mark.integration
async def test_get_current_user_from_token(test_db, test_user, user_token):
    """Test that a valid token resolves to its user."""
    user = await get_current_user(token=user_token, db=test_db)

    assert user.id == test_user.id


@pytest.mark.integration
async def test_get_current_user_rejects_bad_tokens(test_db, test_user):
    """Test garbage, expired and unknown-subject tokens."""
    expired = create_access_token({"sub": test_user.username}, expires_delta=timedelta(minutes=-1))
    unknown = create_access_token({"sub": "ghost"})
    no_subject = create_access_token({"role": "holder"})

    for token in ("not-a-jwt", expired, unknown, no_subject):
        with pytest.raises(AuthenticationError):
            await get_current_user(token=token, db=test_db)


@pytest.mark.integration
async def test_inactive_user_is_rejected(test_inactive_user):
    """Test that inactive users cannot act."""
    with pytest.raises(ValidationError):
        await get_current_active_user(current_user=test_inactive_user)


@pytest.mark.integration
async def test_administrator_dependency(test_user, test_superuser):
    """Test only superusers pass the administrator check."""
    assert await get_current_administrator(current_user=test_superuser) is test_superuser
    with pytest.raises(PermissionDeniedError):
        await get_current_administrator(current_user=test_user)


@pytest.mark.integration
async def test_get_gateway_binds_session(test_db):
    """Test the default gateway uses the request session."""
    gateway = await get_gateway(db=test_db)

    assert isinstance(gateway, LedgerTransferGateway)
    assert gateway.db is test_db
