"""Integration tests for portfolio endpoints."""

import pytest
from httpx import AsyncClient


async def _funded_assets(client: AsyncClient, admin: dict[str, str], holder: dict[str, str]) -> list[int]:
    """Two assets, the holder owning units of both, with revenue deposited on each."""
    ids = []
    for name, price in (("Sedan", 10), ("Van", 20)):
        created = await client.post(
            "/api/v1/assets",
            json={"name": name, "total_shares": 10, "price_per_unit": price},
            headers=admin,
        )
        asset_id = created.json()["id"]
        await client.post(
            f"/api/v1/assets/{asset_id}/buy",
            json={"units": 2, "payment": 2 * price},
            headers=holder,
        )
        await client.post(
            f"/api/v1/assets/{asset_id}/revenue", json={"amount": 8}, headers=admin
        )
        ids.append(asset_id)
    return ids


@pytest.mark.integration
async def test_my_portfolio(client: AsyncClient, superuser_auth_headers, auth_headers, test_user):
    """Test positions, values and pending earnings of the current user."""
    user_id = test_user.id
    sedan_id, van_id = await _funded_assets(client, superuser_auth_headers, auth_headers)

    response = await client.get("/api/v1/portfolio/me", headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {
        "holder_id": user_id,
        "positions": [
            {"asset_id": sedan_id, "asset_name": "Sedan", "units": 2, "pending": 8, "value": 20},
            {"asset_id": van_id, "asset_name": "Van", "units": 2, "pending": 8, "value": 40},
        ],
        "total_value": 60,
        "total_pending": 16,
    }


@pytest.mark.integration
async def test_portfolio_of_unknown_holder_is_empty(client: AsyncClient):
    """Test a holder without positions gets an empty portfolio."""
    response = await client.get("/api/v1/portfolio/777")

    assert response.status_code == 200
    assert response.json() == {
        "holder_id": 777,
        "positions": [],
        "total_value": 0,
        "total_pending": 0,
    }


@pytest.mark.integration
async def test_claim_all(client: AsyncClient, superuser_auth_headers, auth_headers, test_user):
    """Test one call claims every asset and leaves nothing pending."""
    user_id = test_user.id
    sedan_id, van_id = await _funded_assets(client, superuser_auth_headers, auth_headers)

    response = await client.post("/api/v1/portfolio/claim", headers=auth_headers)
    again = await client.post("/api/v1/portfolio/claim", headers=auth_headers)
    portfolio = await client.get(f"/api/v1/portfolio/{user_id}")

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 16
    assert [(c["asset_id"], c["amount"]) for c in data["claims"]] == [(sedan_id, 8), (van_id, 8)]
    assert again.status_code == 409
    assert again.json()["error_code"] == "NOTHING_TO_CLAIM"
    assert portfolio.json()["total_pending"] == 0


@pytest.mark.integration
async def test_my_portfolio_requires_authentication(client: AsyncClient):
    """Test the current-user portfolio needs a token."""
    response = await client.get("/api/v1/portfolio/me")

    assert response.status_code == 401
