"""Centralized exception hierarchy and handlers for the application.

This module provides a unified exception system that maps every ledger error
to an HTTP status code and response format. Services raise exceptions from
this hierarchy; routes never build HTTPException for domain failures.

Exception Hierarchy:
    AppException (base)
    ├── ValidationError (400)
    ├── AuthenticationError (401)
    ├── InsufficientPaymentError (402)
    ├── PermissionDeniedError (403)
    ├── NotFoundError (404)
    ├── ConflictError (409)
    │   ├── InsufficientAvailabilityError
    │   ├── InsufficientHoldingError
    │   ├── InactiveAssetError
    │   ├── NothingToDistributeError
    │   ├── NothingToClaimError
    │   └── ReentrancyError
    └── TransferFailureError (502)

Every failure is detected before the operation mutates state, or aborts the
surrounding transaction, so a raised exception always means "no side effects".

Usage in Services:
    from fleetshare.core.exceptions import InsufficientHoldingError

    if holding.units < units:
        raise InsufficientHoldingError(f"Holder owns {holding.units} units, cannot sell {units}")

The exception handler automatically converts these to HTTP responses.
"""

import logging
from typing import Any

from fastapi import Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppException(Exception):
    """
    Base exception class for all application errors.

    Provides standard structure for application exceptions that can be
    automatically converted to HTTP responses with appropriate status codes.

    Attributes:
        status_code: HTTP status code for this error type
        detail: User-facing error message
        error_code: Machine-readable error code (optional)
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail: str = "Internal server error"
    error_code: str | None = None

    def __init__(
        self,
        detail: str | None = None,
        *,
        error_code: str | None = None,
    ) -> None:
        """
        Initialize the exception.

        Args:
            detail: Custom error message (overrides class default)
            error_code: Machine-readable error identifier
        """
        self.detail = detail or self.__class__.detail
        self.error_code = error_code or self.__class__.error_code
        super().__init__(self.detail)


class ValidationError(AppException):
    """
    Raised when an argument is invalid.

    Used for zero or negative amounts, empty names, non-positive share
    counts or prices. Maps to HTTP 400 Bad Request.
    """

    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Validation error"
    error_code = "INVALID_ARGUMENT"


class AuthenticationError(AppException):
    """
    Raised when authentication fails.

    Used for invalid credentials, expired tokens, or missing authentication.
    Maps to HTTP 401 Unauthorized.
    """

    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Authentication failed"
    error_code = "AUTHENTICATION_ERROR"


class InsufficientPaymentError(AppException):
    """Raised when the payment supplied with a purchase is below its cost."""

    status_code = status.HTTP_402_PAYMENT_REQUIRED
    detail = "Insufficient payment"
    error_code = "INSUFFICIENT_PAYMENT"


class PermissionDeniedError(AppException):
    """Raised when the caller is authenticated but lacks administrator rights."""

    status_code = status.HTTP_403_FORBIDDEN
    detail = "The user doesn't have enough privileges"
    error_code = "PERMISSION_DENIED"


class NotFoundError(AppException):
    """
    Raised when a requested resource is not found.

    Used when an asset id or user id does not exist.
    Maps to HTTP 404 Not Found.
    """

    status_code = status.HTTP_404_NOT_FOUND
    detail = "Resource not found"
    error_code = "NOT_FOUND"


class ConflictError(AppException):
    """
    Raised when the ledger state does not allow the operation.

    Base class for the business-rule rejections below.
    Maps to HTTP 409 Conflict.
    """

    status_code = status.HTTP_409_CONFLICT
    detail = "Resource conflict"
    error_code = "CONFLICT"


class InsufficientAvailabilityError(ConflictError):
    """Raised when a purchase exceeds the asset's remaining available shares."""

    detail = "Not enough shares available"
    error_code = "INSUFFICIENT_AVAILABILITY"


class InsufficientHoldingError(ConflictError):
    """Raised when a sale exceeds the units owned by the holder."""

    detail = "Not enough units held"
    error_code = "INSUFFICIENT_HOLDING"


class InactiveAssetError(ConflictError):
    """Raised when trading is attempted on a deactivated asset."""

    detail = "Asset is not active"
    error_code = "INACTIVE_ASSET"


class NothingToDistributeError(ConflictError):
    """Raised when revenue is deposited while no shares are outstanding."""

    detail = "No shares outstanding to distribute revenue to"
    error_code = "NOTHING_TO_DISTRIBUTE"


class NothingToClaimError(ConflictError):
    """Raised when a claim finds zero pending earnings in its scope."""

    detail = "Nothing to claim"
    error_code = "NOTHING_TO_CLAIM"


class ReentrancyError(ConflictError):
    """Raised when a mutating operation is entered from inside another one."""

    detail = "Re-entrant call rejected"
    error_code = "REENTRANT_CALL"


class TransferFailureError(AppException):
    """
    Raised when the value-transfer primitive cannot move funds.

    Fatal to the whole operation: the surrounding transaction is rolled back.
    Maps to HTTP 502 Bad Gateway.
    """

    status_code = status.HTTP_502_BAD_GATEWAY
    detail = "Value transfer failed"
    error_code = "TRANSFER_FAILURE"


async def app_exception_handler(
    request: Request,
    exc: AppException,
) -> JSONResponse:
    """
    Handle application exceptions and convert to HTTP responses.

    Args:
        request: FastAPI request object
        exc: The exception instance

    Returns:
        JSONResponse with error details and HTTP status code

    Response Format:
        {
            "detail": "User-facing error message",
            "error_code": "MACHINE_READABLE_CODE"
        }
    """
    if exc.status_code >= 500:
        logger.error(
            f"{exc.__class__.__name__}: {exc.detail}",
            exc_info=True,
            extra={
                "status_code": exc.status_code,
                "error_code": exc.error_code,
                "request_path": request.url.path,
            },
        )
    else:
        logger.warning(
            f"{exc.__class__.__name__}: {exc.detail}",
            extra={
                "status_code": exc.status_code,
                "error_code": exc.error_code,
                "request_path": request.url.path,
            },
        )

    response_body: dict[str, Any] = {"detail": exc.detail}
    if exc.error_code:
        response_body["error_code"] = exc.error_code

    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None

    return JSONResponse(
        status_code=exc.status_code,
        content=response_body,
        headers=headers,
    )
