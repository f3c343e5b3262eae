"""
Response Envelope Models

Every Remote Content API response is a tagged envelope:

    {"success": true, "data": ..., "message"?: str, "meta"?: {...}}
    {"success": false, "error": {"code": str, "message": str, "details"?: str}}

The ``success`` discriminant must be a real JSON boolean; anything else is a
contract mismatch, not an application error.
"""

from typing import Any, Generic, Literal, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

T = TypeVar("T")


# =============================================================================
# Envelope Parts
# =============================================================================


class PageMeta(BaseModel):
    """Offset pagination metadata. ``hasMore`` is the continuation signal."""

    model_config = ConfigDict(populate_by_name=True)

    page: int | None = None
    limit: int | None = None
    total: int | None = None
    has_more: bool | None = Field(default=None, alias="hasMore")


class ErrorBody(BaseModel):
    """Application-level error reported by the remote API."""

    code: str
    message: str
    details: str | None = None


# =============================================================================
# Envelopes
# =============================================================================


def _require_bool(value: Any) -> Any:
    if type(value) is not bool:
        raise ValueError("success must be a JSON boolean")
    return value


class SuccessEnvelope(BaseModel):
    """Successful response. ``data`` is validated later against the operation output."""

    success: Literal[True]
    data: Any = Field(...)
    message: str | None = None
    meta: PageMeta | None = None

    @field_validator("success", mode="before")
    @classmethod
    def validate_success(cls, v: Any) -> Any:
        return _require_bool(v)


class FailureEnvelope(BaseModel):
    """Logical failure reported by the remote API."""

    success: Literal[False]
    error: ErrorBody

    @field_validator("success", mode="before")
    @classmethod
    def validate_success(cls, v: Any) -> Any:
        return _require_bool(v)


Envelope = Union[SuccessEnvelope, FailureEnvelope]

ENVELOPE_ADAPTER: TypeAdapter[Envelope] = TypeAdapter(Envelope)


class ErrorOnlyBody(BaseModel):
    """Non-200 body carrying an ``error`` object without the ``success`` tag."""

    error: ErrorBody


# =============================================================================
# Paginated Result
# =============================================================================


class Page(BaseModel, Generic[T]):
    """Result of a paginated operation: the items plus the envelope meta."""

    data: list[T]
    meta: PageMeta | None = None

    @property
    def has_more(self) -> bool:
        return bool(self.meta and self.meta.has_more)
