"""Integration tests for user endpoints."""

import pytest
from httpx import AsyncClient


@pytest.mark.integration
async def test_is_administrator(
    client: AsyncClient, test_user, test_superuser, test_inactive_user
):
    """Test the administrator check for holders, admins and unknown ids."""
    user_id = test_user.id
    admin_id = test_superuser.id
    inactive_id = test_inactive_user.id

    holder = await client.get(f"/api/v1/users/{user_id}/is-administrator")
    admin = await client.get(f"/api/v1/users/{admin_id}/is-administrator")
    inactive = await client.get(f"/api/v1/users/{inactive_id}/is-administrator")
    unknown = await client.get("/api/v1/users/9999/is-administrator")

    assert holder.json() == {"user_id": user_id, "is_administrator": False}
    assert admin.json() == {"user_id": admin_id, "is_administrator": True}
    assert inactive.json()["is_administrator"] is False
    assert unknown.status_code == 200
    assert unknown.json()["is_administrator"] is False
