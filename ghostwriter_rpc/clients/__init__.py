"""
Remote Content API client components.

- encoder: typed call -> outbound request
- base: HTTP transport with retry and timeout classification
- normalizer: response envelope -> typed value or classified failure
"""

from .base import RemoteAPIClient
from .encoder import EncodedRequest, encode_request
from .normalizer import normalize_response

__all__ = [
    "EncodedRequest",
    "RemoteAPIClient",
    "encode_request",
    "normalize_response",
]
