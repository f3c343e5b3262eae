"""
Ghostwriter RPC - typed proxy and response normalization for the Remote Content API.
"""

from .catalog import GROUPS, OPERATIONS, get_operation
from .config import ClientConfig, RetryPolicy, Settings, get_settings, load_settings
from .errors import (
    ApplicationError,
    ConfigurationError,
    InputValidationError,
    OperationNotFoundError,
    RequestTimeoutError,
    RPCError,
    SchemaError,
    TransportError,
)
from .rpc import GhostwriterRPC

__version__ = "0.1.0"

__all__ = [
    "GROUPS",
    "OPERATIONS",
    "ApplicationError",
    "ClientConfig",
    "ConfigurationError",
    "GhostwriterRPC",
    "InputValidationError",
    "OperationNotFoundError",
    "RPCError",
    "RequestTimeoutError",
    "RetryPolicy",
    "SchemaError",
    "Settings",
    "TransportError",
    "get_operation",
    "get_settings",
    "load_settings",
]
