"""
HTTP gateway exposing the operation catalog to the UI.

The UI calls ``/api/rpc/{operation}``; the gateway validates, forwards to the
Remote Content API, and returns either the typed result or an APIError body.
"""

from .main import create_app

__all__ = ["create_app"]
