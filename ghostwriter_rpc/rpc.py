"""
Typed RPC facade over the Remote Content API.

Usage:
    async with GhostwriterRPC(settings.client_config()) as rpc:
        bundle = await rpc.ghostwriter.create(name="Alice Writer", content="a===b")
        page = await rpc.call("resources.list", {"page": 1, "limit": 20})
"""

import logging
from typing import Any

import httpx

from .catalog import OPERATIONS, get_operation
from .clients.base import RemoteAPIClient
from .clients.encoder import encode_request
from .clients.normalizer import normalize_response
from .config import ClientConfig
from .errors import (
    ApplicationError,
    InputValidationError,
    RequestTimeoutError,
    SchemaError,
    TransportError,
)
from .identity import TokenProvider, resolve_identity

logger = logging.getLogger(__name__)


def _invoker(rpc: "GhostwriterRPC", name: str):
    """Coroutine function calling one operation with a mapping or keyword fields."""

    async def _invoke(payload: Any = None, /, token_provider: TokenProvider | None = None, **fields: Any) -> Any:
        if payload is not None and fields:
            raise TypeError(f"{name}() takes a payload or keyword fields, not both")
        return await rpc.call(name, payload if payload is not None else fields, token_provider)

    _invoke.__name__ = name.rsplit(".", 1)[-1]
    _invoke.__qualname__ = name
    return _invoke


class OperationGroup:
    """Attribute access to the operations of one group: ``rpc.persona.get(id=1)``."""

    def __init__(self, rpc: "GhostwriterRPC", group: str):
        self._rpc = rpc
        self._group = group

    def __getattr__(self, name: str):
        full_name = f"{self._group}.{name}"
        if full_name not in self._rpc.operations:
            raise AttributeError(f"No operation named {full_name}")
        return _invoker(self._rpc, full_name)


class GhostwriterRPC:
    """
    Validate, encode, send and normalize calls to the Remote Content API.

    Each call is independent: identity is resolved fresh, the request and
    response are never shared, and no result is cached.
    """

    def __init__(
        self,
        config: ClientConfig,
        token_provider: TokenProvider | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config = config
        self.token_provider = token_provider
        self.operations = OPERATIONS
        self.client = RemoteAPIClient(config, transport=transport)

    def __getattr__(self, name: str):
        # Only reached for names that are not regular attributes
        if name.startswith("_") or "operations" not in self.__dict__:
            raise AttributeError(name)
        if name in self.operations:
            return _invoker(self, name)
        if any(op_name.startswith(f"{name}.") for op_name in self.operations):
            return OperationGroup(self, name)
        raise AttributeError(f"No operation group named {name}")

    async def call(self, name: str, payload: Any = None, token_provider: TokenProvider | None = None) -> Any:
        """
        Invoke one operation.

        Args:
            name: Dotted operation name from the catalog.
            payload: Input Value as a mapping or model instance.
            token_provider: Per-call override of the end-user token provider.

        Returns:
            The validated output value, or a Page for paginated operations.

        Raises:
            OperationNotFoundError: Unknown operation name.
            InputValidationError: Payload rejected; no request was sent.
            RequestTimeoutError: The request exceeded its timeout.
            TransportError: Network failure or unrecognized error response.
            SchemaError: Response does not match the contract.
            ApplicationError: The remote API reported a logical failure.
        """
        operation = get_operation(name)
        try:
            input_value = operation.validate_input(payload)
        except InputValidationError as e:
            logger.warning("Rejected input for %s: %s", name, e.message, extra={"operation": name})
            raise

        identity = await resolve_identity(self.config.user_id, token_provider or self.token_provider)
        request = encode_request(operation, input_value, identity)
        timeout = self.client.timeout_for(operation.long_running)

        logger.debug(
            "Calling %s: %s %s (%s)",
            name,
            request.method,
            request.path,
            request.encoding.value,
            extra={"operation": name},
        )
        try:
            response = await self.client.send(request, timeout=timeout, operation=name)
            return normalize_response(response, operation)
        except ApplicationError as e:
            logger.info(
                "%s rejected by API: [%s] %s",
                name,
                e.remote_code,
                e.message,
                extra={"operation": name, "status_code": e.status_code},
            )
            raise
        except RequestTimeoutError as e:
            logger.warning("%s timed out; it may still be processing: %s", name, e.message, extra={"operation": name})
            raise
        except (TransportError, SchemaError) as e:
            logger.error("%s failed: %s (%s)", name, e.message, e.details, extra={"operation": name})
            raise

    async def close(self) -> None:
        await self.client.close()

    async def __aenter__(self) -> "GhostwriterRPC":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()
