"""
Ghostwriter RPC Errors - Failure taxonomy and standardized error responses.

Every failure a caller can observe from an RPC call is one of the classes
below. They share a common base (RPCError) so the gateway can render all of
them through a single exception handler, using the APIError response model.

Classification:
- InputValidationError: input rejected before any network call
- TransportError: network failure, unreadable error body, retries exhausted
- RequestTimeoutError: request exceeded its timeout, outcome unknown
- SchemaError: response does not match the envelope or declared output
- ApplicationError: remote API reported {success: false, error: {...}}
"""

import uuid
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

GENERIC_FAILURE_MESSAGE = "Something went wrong. Please try again."
STILL_PROCESSING_MESSAGE = "This request is taking longer than expected and may still be processing."


class ErrorCode(str, Enum):
    """Standardized error codes for gateway responses.

    Error codes are prefixed by category:
    - VALIDATION_*: Input validation errors
    - OPERATION_*: Catalog lookup errors
    - UPSTREAM_*: Errors talking to the Remote Content API
    """

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Catalog errors
    OPERATION_NOT_FOUND = "OPERATION_NOT_FOUND"
    OPERATION_METHOD_NOT_ALLOWED = "OPERATION_METHOD_NOT_ALLOWED"

    # Upstream errors
    UPSTREAM_REJECTED = "UPSTREAM_REJECTED"
    UPSTREAM_UNAVAILABLE = "UPSTREAM_UNAVAILABLE"
    UPSTREAM_TIMEOUT = "UPSTREAM_TIMEOUT"
    UPSTREAM_CONTRACT_MISMATCH = "UPSTREAM_CONTRACT_MISMATCH"

    # Internal errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"


class APIError(BaseModel):
    """Standardized error response model returned by the gateway.

    Attributes:
        error_code: Machine-readable error code from ErrorCode enum.
        message: Human-readable error description, safe to show to users.
        details: Optional additional context (field errors, remote code).
        request_id: Unique identifier for request tracing.
        service: Name of service that generated the error.
    """

    error_code: str = Field(
        ...,
        description="Machine-readable error code",
        examples=["VALIDATION_ERROR", "UPSTREAM_TIMEOUT"],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["Name is required"],
    )
    details: dict[str, Any] | None = Field(
        default=None,
        description="Additional error context",
        examples=[{"remote_code": "GHOSTWRITER_NOT_FOUND"}],
    )
    request_id: str = Field(
        default_factory=lambda: f"req_{uuid.uuid4().hex[:12]}",
        description="Unique request identifier for tracing",
    )
    service: str = Field(
        default="ghostwriter-gateway",
        description="Service that generated the error",
    )


class ValidationErrorDetail(BaseModel):
    """Detail for field-level validation errors.

    Attributes:
        field: Dotted path of the field that failed validation.
        message: Description of what went wrong.
    """

    field: str
    message: str


class RPCError(Exception):
    """Base class for every classified RPC failure.

    Attributes:
        code: ErrorCode for the failure class.
        message: Diagnostic message (may contain internal detail).
        details: Optional structured context.
    """

    code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details
        super().__init__(message)

    @property
    def user_message(self) -> str:
        """Message safe for user-facing display."""
        return GENERIC_FAILURE_MESSAGE

    @property
    def public_details(self) -> dict[str, Any] | None:
        """Details safe to return to the caller."""
        return None

    def to_api_error(self, request_id: str | None = None, service: str = "ghostwriter-gateway") -> APIError:
        """Convert to the APIError response model."""
        error = APIError(
            error_code=self.code.value,
            message=self.user_message,
            details=self.public_details,
            service=service,
        )
        if request_id:
            error.request_id = request_id
        return error


class InputValidationError(RPCError):
    """Input Value failed the operation's input schema. Never reaches the network."""

    code = ErrorCode.VALIDATION_ERROR

    def __init__(self, message: str, field_errors: list[ValidationErrorDetail] | None = None):
        self.field_errors = field_errors or []
        details = {"fields": [e.model_dump() for e in self.field_errors]} if self.field_errors else None
        super().__init__(message, details)

    @property
    def user_message(self) -> str:
        return self.message

    @property
    def public_details(self) -> dict[str, Any] | None:
        return self.details


class TransportError(RPCError):
    """Network failure, unparseable failure body, or retries exhausted."""

    code = ErrorCode.UPSTREAM_UNAVAILABLE

    def __init__(self, message: str = "Request failed", status_code: int | None = None, cause: str | None = None):
        self.status_code = status_code
        details: dict[str, Any] = {}
        if status_code is not None:
            details["status_code"] = status_code
        if cause:
            details["cause"] = cause
        super().__init__(message, details or None)


class RequestTimeoutError(RPCError):
    """Request exceeded its allotted duration. The remote outcome is unknown."""

    code = ErrorCode.UPSTREAM_TIMEOUT

    def __init__(self, message: str, timeout_seconds: float | None = None):
        self.timeout_seconds = timeout_seconds
        super().__init__(message, {"timeout_seconds": timeout_seconds} if timeout_seconds else None)

    @property
    def user_message(self) -> str:
        return STILL_PROCESSING_MESSAGE


class SchemaError(RPCError):
    """Response does not match the envelope shape or the declared output type."""

    code = ErrorCode.UPSTREAM_CONTRACT_MISMATCH


class ApplicationError(RPCError):
    """The remote API explicitly reported a logical failure."""

    code = ErrorCode.UPSTREAM_REJECTED

    def __init__(self, remote_code: str, message: str, remote_details: str | None = None, status_code: int = 200):
        self.remote_code = remote_code
        self.remote_details = remote_details
        self.status_code = status_code
        details: dict[str, Any] = {"remote_code": remote_code}
        if remote_details is not None:
            details["remote_details"] = remote_details
        super().__init__(message, details)

    @property
    def user_message(self) -> str:
        return self.message

    @property
    def public_details(self) -> dict[str, Any] | None:
        return self.details


class ConfigurationError(RPCError):
    """Required process configuration is missing or malformed."""

    code = ErrorCode.CONFIGURATION_ERROR


class OperationNotFoundError(RPCError):
    """No catalog entry exists for the requested operation name."""

    code = ErrorCode.OPERATION_NOT_FOUND

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown operation: {name}", {"operation": name})

    @property
    def user_message(self) -> str:
        return self.message

    @property
    def public_details(self) -> dict[str, Any] | None:
        return self.details


class OperationMethodError(RPCError):
    """Operation was invoked with the wrong HTTP verb for its kind."""

    code = ErrorCode.OPERATION_METHOD_NOT_ALLOWED

    def __init__(self, name: str, kind: str):
        verb = "GET" if kind == "query" else "POST"
        super().__init__(f"Operation {name} is a {kind}; use {verb}", {"operation": name, "kind": kind})

    @property
    def user_message(self) -> str:
        return self.message

    @property
    def public_details(self) -> dict[str, Any] | None:
        return self.details


def field_errors_from_pydantic(errors: list[dict[str, Any]]) -> list[ValidationErrorDetail]:
    """Flatten pydantic error dicts into ValidationErrorDetail entries.

    Args:
        errors: Output of pydantic ValidationError.errors().

    Returns:
        list[ValidationErrorDetail]: One entry per failed location.
    """
    details = []
    for err in errors:
        loc = ".".join(str(part) for part in err.get("loc", ())) or "__root__"
        details.append(ValidationErrorDetail(field=loc, message=err.get("msg", "Invalid value")))
    return details


# HTTP status code mappings
ERROR_STATUS_CODES: dict[str, int] = {
    ErrorCode.VALIDATION_ERROR.value: 400,
    ErrorCode.OPERATION_NOT_FOUND.value: 404,
    ErrorCode.OPERATION_METHOD_NOT_ALLOWED.value: 405,
    ErrorCode.UPSTREAM_REJECTED.value: 400,
    ErrorCode.UPSTREAM_UNAVAILABLE.value: 502,
    ErrorCode.UPSTREAM_CONTRACT_MISMATCH.value: 502,
    ErrorCode.UPSTREAM_TIMEOUT.value: 504,
    ErrorCode.CONFIGURATION_ERROR.value: 503,
    ErrorCode.INTERNAL_ERROR.value: 500,
}


def get_status_code(error_code: str) -> int:
    """Get HTTP status code for error code.

    Args:
        error_code: Error code string.

    Returns:
        int: Appropriate HTTP status code.
    """
    return ERROR_STATUS_CODES.get(error_code, 500)
