"""Rate limiting configuration using slowapi.

Limits are applied per client address to the authentication, trading/claim
and administrative endpoints (see ``settings.*_RATE_LIMIT``).
"""

from fastapi import Request
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.responses import JSONResponse

from fleetshare.core.config import settings


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """
    Exception handler for rate limit exceeded errors.

    Responds in the same shape as ledger errors, with the length of the
    limit window as ``Retry-After``.

    Args:
        request: The incoming request
        exc: The RateLimitExceeded exception

    Returns:
        JSONResponse with error details and retry_after
    """
    # slowapi keeps the parsed limit (e.g. "5 per 1 minute") on the exception
    retry_after = exc.limit.limit.get_expiry() if exc.limit is not None else 60

    response = JSONResponse(
        status_code=429,
        content={
            "detail": f"Rate limit exceeded: {exc.detail}",
            "error_code": "RATE_LIMITED",
            "retry_after": retry_after,
        },
    )
    response.headers["Retry-After"] = str(retry_after)
    return response


limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[],  # each endpoint sets its own limit
    enabled=settings.RATE_LIMIT_ENABLED,
    headers_enabled=False,  # incompatible with FastAPI response models
)
