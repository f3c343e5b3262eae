"""
Identity Context - per-call credential material.

The static service identifier comes from configuration and is always sent.
The end-user bearer token is fetched from a token provider on every call and
never cached; when it cannot be obtained the request goes out without it.
"""

import inspect
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from .logging import token_presence

logger = logging.getLogger(__name__)

USER_ID_HEADER = "User-Id"
AUTHORIZATION_HEADER = "Authorization"

TokenProvider = Callable[[], Awaitable[str | None] | str | None]


@dataclass(frozen=True)
class IdentityContext:
    """Credential bundle for one outbound request."""

    user_id: str
    token: str | None = None

    def headers(self) -> dict[str, str]:
        """Identity headers for the outbound request."""
        headers = {USER_ID_HEADER: self.user_id}
        if self.token:
            headers[AUTHORIZATION_HEADER] = f"Bearer {self.token}"
        return headers

    def __repr__(self) -> str:
        return f"IdentityContext(user_id={self.user_id!r}, {token_presence('token', self.token)})"


def static_token(token: str | None) -> TokenProvider:
    """Token provider that always returns the same token (e.g. forwarded from an inbound request)."""

    def _provider() -> str | None:
        return token

    return _provider


async def resolve_identity(user_id: str, token_provider: TokenProvider | None = None) -> IdentityContext:
    """Resolve the identity for one call.

    Args:
        user_id: Static service identifier from configuration.
        token_provider: Optional sync or async callable returning the end-user token.

    Returns:
        IdentityContext: user id plus the token, when one is available.
    """
    if token_provider is None:
        return IdentityContext(user_id=user_id)

    try:
        token = token_provider()
        if inspect.isawaitable(token):
            token = await token
    except Exception as e:
        logger.warning("Failed to resolve end-user token, sending without it: %s", e)
        token = None

    if token is not None and not isinstance(token, str):
        logger.warning("Token provider returned %s, expected str; ignoring", type(token).__name__)
        token = None

    return IdentityContext(user_id=user_id, token=token or None)
