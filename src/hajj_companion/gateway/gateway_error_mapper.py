from dataclasses import dataclass
from typing import Any, Dict

import httpx

from hajj_companion.domain.error_sanitizer import (
    build_exception_details,
    sanitize_error_details,
)
from hajj_companion.domain.exceptions import (
    GatewayConfigError,
    GatewayError,
    QuotaExceededError,
    RateLimitError,
)

RATE_LIMIT_MESSAGE = "Rate limits exceeded, please try again later."
QUOTA_EXCEEDED_MESSAGE = (
    "Payment required, please add funds to your AI gateway workspace."
)
GATEWAY_ERROR_MESSAGE = "AI gateway error"
GATEWAY_CONFIG_MESSAGE = "AI gateway is not configured"
INTERNAL_ERROR_MESSAGE = "Unknown error"


@dataclass(frozen=True)
class GatewayErrorMapping:
    """Normalized, user-facing description of a gateway failure."""

    status_code: int
    reason: str
    message: str
    error_type: type[Exception]
    details: Dict[str, Any]


def error_type_for_status(status_code: int) -> type[GatewayError]:
    """Return the exception type matching an upstream HTTP status.

    Args:
        status_code: Non-2xx status returned by the gateway.

    Returns:
        The GatewayError subclass to raise.
    """

    if status_code == 429:
        return RateLimitError
    if status_code == 402:
        return QuotaExceededError
    return GatewayError


def map_gateway_error(error: Exception) -> GatewayErrorMapping:
    """Map an exception into the status and message shown to users.

    Args:
        error: Exception raised while calling the gateway.

    Returns:
        GatewayErrorMapping describing the failure.
    """

    details: Dict[str, Any] = build_exception_details(error)

    if isinstance(error, httpx.HTTPStatusError):
        status_code = error.response.status_code
        details["status_code"] = status_code
        error = error_type_for_status(status_code)(str(error))

    if isinstance(error, RateLimitError):
        return GatewayErrorMapping(
            status_code=429,
            reason="rate_limit_error",
            message=RATE_LIMIT_MESSAGE,
            error_type=RateLimitError,
            details=details,
        )
    if isinstance(error, QuotaExceededError):
        return GatewayErrorMapping(
            status_code=402,
            reason="quota_exceeded_error",
            message=QUOTA_EXCEEDED_MESSAGE,
            error_type=QuotaExceededError,
            details=details,
        )
    if isinstance(error, GatewayConfigError):
        return GatewayErrorMapping(
            status_code=500,
            reason="gateway_config_error",
            message=GATEWAY_CONFIG_MESSAGE,
            error_type=GatewayConfigError,
            details=details,
        )
    if isinstance(error, (GatewayError, httpx.HTTPError)):
        return GatewayErrorMapping(
            status_code=500,
            reason="gateway_error",
            message=GATEWAY_ERROR_MESSAGE,
            error_type=GatewayError,
            details=sanitize_error_details(details),
        )
    return GatewayErrorMapping(
        status_code=500,
        reason="internal_error",
        message=INTERNAL_ERROR_MESSAGE,
        error_type=type(error),
        details=sanitize_error_details(details),
    )
