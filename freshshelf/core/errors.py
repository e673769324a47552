"""Error types and classification utilities for inventory processing."""

from enum import Enum, StrEnum
from typing import Literal

from pydantic import BaseModel, ValidationError


class InvalidDateError(ValueError):
    """Raised when a value cannot be read as a calendar date."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Invalid date: {value!r}")


class DashboardNotLoadedError(RuntimeError):
    """Raised when the dashboard is used before a snapshot has been loaded."""


class IssueKind(StrEnum):
    """Kinds of data-quality problems found in a snapshot."""

    INVALID_DATE = "invalid_date"
    UNRESOLVED_PRODUCT = "unresolved_product"  # item.product_id has no product
    UNRESOLVED_CATEGORY = "unresolved_category"  # product.category_id has no category
    INVALID_RECORD = "invalid_record"  # raw record failed model validation


UNRESOLVED_KINDS = frozenset({IssueKind.UNRESOLVED_PRODUCT, IssueKind.UNRESOLVED_CATEGORY})


class ErrorSeverity(Enum):
    """Severity levels for errors."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCode:
    """Error codes for specific error conditions."""

    # Store errors
    ERR_NETWORK_ERROR = "ERR_NETWORK_ERROR"
    ERR_PERMISSION_DENIED = "ERR_PERMISSION_DENIED"
    ERR_RECORD_NOT_FOUND = "ERR_RECORD_NOT_FOUND"

    # Input errors
    ERR_INVALID_DATE = "ERR_INVALID_DATE"
    ERR_INVALID_INPUT = "ERR_INVALID_INPUT"

    # Dashboard errors
    ERR_NOT_LOADED = "ERR_NOT_LOADED"

    # Generic errors
    ERR_UNKNOWN = "ERR_UNKNOWN"


class ErrorResponse(BaseModel):
    """Structured error response with user-friendly messaging."""

    code: str
    message: str
    suggestion: str
    severity: ErrorSeverity


_ERROR_PATTERNS: dict[
    Literal["network", "permission", "not_found"],
    dict[str, list[str] | set[str]],
] = {
    "network": {
        "phrases": [
            "connection",
            "timeout",
            "network",
            "503",
            "502",
            "504",
            "unreachable",
        ],
        "exception_types": {"ConnectionError", "TimeoutError"},
    },
    "permission": {
        "phrases": [
            "permission denied",
            "unauthorized",
            "forbidden",
            "row-level security",
            "401",
            "403",
        ],
        "exception_types": {"PermissionError"},
    },
    "not_found": {
        "phrases": ["not found", "no rows", "does not exist"],
        "exception_types": {"KeyError", "LookupError"},
    },
}


def _match_error_pattern(
    *,
    error_str: str,
    exception_type: str,
    pattern_type: Literal["network", "permission", "not_found"],
) -> bool:
    """Return True if the error matches the configured pattern type."""
    patterns = _ERROR_PATTERNS[pattern_type]
    return any(phrase in error_str for phrase in patterns["phrases"]) or exception_type in patterns["exception_types"]


def classify_error_with_response(exception: Exception) -> ErrorResponse:  # noqa: PLR0911
    """Classify an error and return a structured response with recovery suggestions.

    Args:
        exception: The exception raised by a store call or by input validation

    Returns:
        ErrorResponse with code, message, suggestion, and severity
    """
    error_str = str(exception).lower()
    exception_type = type(exception).__name__

    if isinstance(exception, InvalidDateError):
        return ErrorResponse(
            code=ErrorCode.ERR_INVALID_DATE,
            message="That doesn't look like a valid date.",
            suggestion="Use the YYYY-MM-DD format, e.g. 2024-03-15.",
            severity=ErrorSeverity.LOW,
        )

    if isinstance(exception, ValidationError):
        return ErrorResponse(
            code=ErrorCode.ERR_INVALID_INPUT,
            message="Some of the details entered are invalid.",
            suggestion="Check the product and expiry date and try again.",
            severity=ErrorSeverity.LOW,
        )

    if isinstance(exception, DashboardNotLoadedError):
        return ErrorResponse(
            code=ErrorCode.ERR_NOT_LOADED,
            message="The inventory has not been loaded yet.",
            suggestion="Reload the dashboard and try again.",
            severity=ErrorSeverity.MEDIUM,
        )

    if _match_error_pattern(error_str=error_str, exception_type=exception_type, pattern_type="permission"):
        return ErrorResponse(
            code=ErrorCode.ERR_PERMISSION_DENIED,
            message="You don't have permission for this action.",
            suggestion="Sign in again or ask an administrator to check your shop access.",
            severity=ErrorSeverity.HIGH,
        )

    if _match_error_pattern(error_str=error_str, exception_type=exception_type, pattern_type="not_found"):
        return ErrorResponse(
            code=ErrorCode.ERR_RECORD_NOT_FOUND,
            message="That item no longer exists.",
            suggestion="Reload the inventory to see the current items.",
            severity=ErrorSeverity.LOW,
        )

    if _match_error_pattern(error_str=error_str, exception_type=exception_type, pattern_type="network"):
        return ErrorResponse(
            code=ErrorCode.ERR_NETWORK_ERROR,
            message="Network error occurred.",
            suggestion="Please check your connection and try again.",
            severity=ErrorSeverity.MEDIUM,
        )

    return ErrorResponse(
        code=ErrorCode.ERR_UNKNOWN,
        message="An unexpected error occurred.",
        suggestion="Please try again later. If the problem persists, contact support.",
        severity=ErrorSeverity.MEDIUM,
    )
