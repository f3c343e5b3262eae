"""
Gateway dependencies for FastAPI ``Depends``.
"""

from fastapi import Request

from ..config import Settings
from ..rpc import GhostwriterRPC


def get_rpc(request: Request) -> GhostwriterRPC:
    """RPC facade owned by the running app."""
    return request.app.state.rpc


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def bearer_token(request: Request) -> str | None:
    """End-user token from the inbound Authorization header, if any."""
    auth = request.headers.get("Authorization", "")
    scheme, _, token = auth.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()
