"""Logging helpers: JSON formatting and credential-safe log descriptors."""

from .safe_logging import token_presence
from .structured import JSONFormatter, setup_logging, setup_structured_logging

__all__ = [
    "JSONFormatter",
    "setup_logging",
    "setup_structured_logging",
    "token_presence",
]
