"""Integration tests for treasury endpoints."""

import pytest
from httpx import AsyncClient


@pytest.mark.integration
async def test_receive_and_withdraw(client: AsyncClient, auth_headers, superuser_auth_headers, test_superuser):
    """Test incidental receipts grow the balance and operators can withdraw."""
    admin_id = test_superuser.id

    received = await client.post(
        "/api/v1/treasury/receive", json={"amount": 70}, headers=auth_headers
    )
    withdrawn = await client.post(
        "/api/v1/treasury/withdrawals", json={"amount": 50}, headers=superuser_auth_headers
    )
    balance = await client.get("/api/v1/treasury/balance")

    assert received.status_code == 201
    assert received.json()["direction"] == "in"
    assert received.json()["reason"] == "incidental_receipt"
    assert withdrawn.status_code == 200
    assert withdrawn.json()["counterparty_id"] == admin_id
    assert withdrawn.json()["reason"] == "operator_withdrawal"
    assert balance.json() == {"balance": 20}


@pytest.mark.integration
async def test_withdraw_beyond_balance_fails(client: AsyncClient, superuser_auth_headers):
    """Test an uncovered withdrawal is a transfer failure."""
    response = await client.post(
        "/api/v1/treasury/withdrawals", json={"amount": 1}, headers=superuser_auth_headers
    )

    assert response.status_code == 502
    assert response.json()["error_code"] == "TRANSFER_FAILURE"


@pytest.mark.integration
async def test_withdraw_requires_administrator(client: AsyncClient, auth_headers):
    """Test holders cannot withdraw treasury funds."""
    response = await client.post(
        "/api/v1/treasury/withdrawals", json={"amount": 1}, headers=auth_headers
    )

    assert response.status_code == 403


@pytest.mark.integration
async def test_receive_rejects_non_positive_amount(client: AsyncClient, auth_headers):
    """Test request validation of incidental receipts."""
    response = await client.post("/api/v1/treasury/receive", json={"amount": 0}, headers=auth_headers)

    assert response.status_code == 422


@pytest.mark.integration
async def test_my_movements(client: AsyncClient, superuser_auth_headers, auth_headers):
    """Test the current user's value movements, newest first."""
    created = await client.post(
        "/api/v1/assets",
        json={"name": "Roadster", "total_shares": 5, "price_per_unit": 10},
        headers=superuser_auth_headers,
    )
    asset_id = created.json()["id"]
    await client.post(
        f"/api/v1/assets/{asset_id}/buy", json={"units": 1, "payment": 15}, headers=auth_headers
    )

    response = await client.get("/api/v1/treasury/movements/me", headers=auth_headers)
    paged = await client.get("/api/v1/treasury/movements/me?skip=1&limit=1", headers=auth_headers)

    assert response.status_code == 200
    assert [(m["reason"], m["amount"]) for m in response.json()] == [
        ("purchase_refund", 5),
        ("share_purchase", 15),
    ]
    assert all(m["asset_id"] == asset_id for m in response.json())
    assert [m["reason"] for m in paged.json()] == ["share_purchase"]
