"""
Schemas for the Remote Content API contract.

- envelope: tagged success/failure response wrapper and pagination
- entities: operation output payloads
- inputs: operation Input Values and file-like fields
"""

from .envelope import (
    ENVELOPE_ADAPTER,
    ErrorBody,
    FailureEnvelope,
    Page,
    PageMeta,
    SuccessEnvelope,
)
from .inputs import FileUpload, InputModel, PaginationInput

__all__ = [
    "ENVELOPE_ADAPTER",
    "ErrorBody",
    "FailureEnvelope",
    "FileUpload",
    "InputModel",
    "Page",
    "PageMeta",
    "PaginationInput",
    "SuccessEnvelope",
]
