"""Tests for the exception hierarchy and its HTTP handler."""

import json
import logging

import pytest
from starlette.requests import Request

from fleetshare.core.exceptions import (
    AppException,
    AuthenticationError,
    ConflictError,
    InactiveAssetError,
    InsufficientAvailabilityError,
    InsufficientHoldingError,
    InsufficientPaymentError,
    NotFoundError,
    NothingToClaimError,
    NothingToDistributeError,
    PermissionDeniedError,
    ReentrancyError,
    TransferFailureError,
    ValidationError,
    app_exception_handler,
)


def _request(path: str = "/api/v1/assets/1/buy") -> Request:
    return Request({"type": "http", "method": "POST", "path": path, "headers": []})


@pytest.mark.unit
@pytest.mark.parametrize(
    ("exc_class", "status_code", "error_code"),
    [
        (ValidationError, 400, "INVALID_ARGUMENT"),
        (AuthenticationError, 401, "AUTHENTICATION_ERROR"),
        (InsufficientPaymentError, 402, "INSUFFICIENT_PAYMENT"),
        (PermissionDeniedError, 403, "PERMISSION_DENIED"),
        (NotFoundError, 404, "NOT_FOUND"),
        (InsufficientAvailabilityError, 409, "INSUFFICIENT_AVAILABILITY"),
        (InsufficientHoldingError, 409, "INSUFFICIENT_HOLDING"),
        (InactiveAssetError, 409, "INACTIVE_ASSET"),
        (NothingToDistributeError, 409, "NOTHING_TO_DISTRIBUTE"),
        (NothingToClaimError, 409, "NOTHING_TO_CLAIM"),
        (ReentrancyError, 409, "REENTRANT_CALL"),
        (TransferFailureError, 502, "TRANSFER_FAILURE"),
    ],
)
def test_exception_status_and_code(exc_class, status_code, error_code):
    """Test every ledger error maps to its HTTP status and code."""
    exc = exc_class()

    assert isinstance(exc, AppException)
    assert exc.status_code == status_code
    assert exc.error_code == error_code
    assert exc.detail


@pytest.mark.unit
def test_business_rejections_are_conflicts():
    """Test the 409 family shares one base class."""
    for exc_class in (
        InsufficientAvailabilityError,
        InsufficientHoldingError,
        InactiveAssetError,
        NothingToDistributeError,
        NothingToClaimError,
        ReentrancyError,
    ):
        assert issubclass(exc_class, ConflictError)


@pytest.mark.unit
def test_custom_detail_overrides_default():
    """Test detail and error_code overrides."""
    exc = NotFoundError("Asset 9 not found", error_code="ASSET_NOT_FOUND")

    assert exc.detail == "Asset 9 not found"
    assert exc.error_code == "ASSET_NOT_FOUND"
    assert str(exc) == "Asset 9 not found"


@pytest.mark.unit
async def test_handler_renders_client_error(caplog):
    """Test a 4xx error becomes JSON and is logged as a warning."""
    with caplog.at_level(logging.WARNING):
        response = await app_exception_handler(_request(), InsufficientHoldingError("Owns 1"))

    assert response.status_code == 409
    assert json.loads(response.body) == {"detail": "Owns 1", "error_code": "INSUFFICIENT_HOLDING"}
    assert any(r.levelno == logging.WARNING for r in caplog.records)


@pytest.mark.unit
async def test_handler_logs_server_error(caplog):
    """Test a failed transfer is logged as an error."""
    with caplog.at_level(logging.WARNING):
        response = await app_exception_handler(_request(), TransferFailureError("Treasury empty"))

    assert response.status_code == 502
    assert any(r.levelno == logging.ERROR for r in caplog.records)


@pytest.mark.unit
async def test_handler_adds_bearer_challenge():
    """Test authentication failures carry WWW-Authenticate."""
    response = await app_exception_handler(_request("/api/v1/auth/me"), AuthenticationError())

    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"
