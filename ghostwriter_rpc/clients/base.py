"""
Remote Content API HTTP client with bounded retry and timeout classification.

One instance per dependency-injection scope (e.g. one per gateway app). The
client holds no per-call state: identity, encoding and normalization are all
resolved per request, so concurrent calls do not interact.
"""

import asyncio
import logging

import httpx

from ..config import RETRY_AFTER_STATUS_CODES, ClientConfig
from ..errors import RequestTimeoutError, TransportError
from .encoder import EncodedRequest

logger = logging.getLogger(__name__)


class RemoteAPIClient:
    """
    HTTP client for the Remote Content API.

    Features:
    - Bounded retry on transient statuses and network errors
    - Separate short/long timeouts
    - Timeouts surfaced as RequestTimeoutError, never retried
    """

    def __init__(self, config: ClientConfig, transport: httpx.AsyncBaseTransport | None = None):
        self.config = config
        self.base_url = config.base_url.rstrip("/") + "/"
        self.retry = config.retry
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.config.timeout,
                transport=self._transport,
            )
        return self._client

    def timeout_for(self, long_running: bool) -> float:
        return self.config.long_timeout if long_running else self.config.timeout

    def _retry_delay(self, response: httpx.Response | None, attempt: int) -> float:
        """Backoff delay, honouring a numeric Retry-After where the API sends one."""
        if response is not None and response.status_code in RETRY_AFTER_STATUS_CODES:
            retry_after = response.headers.get("Retry-After")
            if retry_after:
                try:
                    return min(max(float(retry_after), 0.0), self.retry.max_delay)
                except ValueError:
                    pass
        return self.retry.backoff(attempt)

    async def send(self, request: EncodedRequest, timeout: float | None = None, operation: str = "") -> httpx.Response:
        """
        Send an encoded request with retry.

        Args:
            request: Output of the Request Encoder.
            timeout: Per-call timeout in seconds (defaults to the short timeout).
            operation: Operation name, for logs.

        Returns:
            httpx.Response: The final response. Responses with retryable statuses
            are returned once retries are exhausted.

        Raises:
            RequestTimeoutError: The request exceeded its timeout.
            TransportError: Network failure after exhausting retries.
        """
        client = await self._get_client()
        timeout = timeout or self.config.timeout
        retryable = request.method in self.retry.methods
        attempts = self.retry.limit + 1 if retryable else 1

        for attempt in range(attempts):
            last = attempt == attempts - 1
            try:
                response = await client.request(
                    request.method,
                    request.path,
                    timeout=timeout,
                    **request.httpx_kwargs(),
                )
            except httpx.TimeoutException as e:
                logger.warning(
                    "%s %s timed out after %.1fs",
                    request.method,
                    request.path,
                    timeout,
                    extra={"operation": operation, "attempt": attempt + 1},
                )
                raise RequestTimeoutError(
                    f"{request.method} {request.path} exceeded {timeout:.1f}s", timeout_seconds=timeout
                ) from e
            except httpx.TransportError as e:
                if last:
                    logger.error(
                        "%s %s failed after %d attempts: %s",
                        request.method,
                        request.path,
                        attempt + 1,
                        e,
                        extra={"operation": operation, "attempt": attempt + 1},
                    )
                    raise TransportError("Request failed", cause=type(e).__name__) from e
                delay = self._retry_delay(None, attempt)
                logger.warning(
                    "%s %s network error (attempt %d/%d): %s. Retrying in %.1fs",
                    request.method,
                    request.path,
                    attempt + 1,
                    attempts,
                    e,
                    delay,
                    extra={"operation": operation, "attempt": attempt + 1},
                )
                await asyncio.sleep(delay)
                continue

            if response.status_code in self.retry.status_codes and not last:
                delay = self._retry_delay(response, attempt)
                logger.warning(
                    "%s %s returned %d (attempt %d/%d). Retrying in %.1fs",
                    request.method,
                    request.path,
                    response.status_code,
                    attempt + 1,
                    attempts,
                    delay,
                    extra={"operation": operation, "attempt": attempt + 1, "status_code": response.status_code},
                )
                await asyncio.sleep(delay)
                continue

            return response

        raise RuntimeError("Retry loop exited without a response")

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "RemoteAPIClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()
