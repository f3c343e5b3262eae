"""
Unit tests for the Remote Content API HTTP client (retry and timeouts).
"""

import httpx
import pytest

from ghostwriter_rpc.clients.base import RemoteAPIClient
from ghostwriter_rpc.clients.encoder import EncodedRequest
from ghostwriter_rpc.config import ClientConfig, RetryPolicy
from ghostwriter_rpc.errors import RequestTimeoutError, TransportError
from ghostwriter_rpc.operations import Encoding

from ..fakes import API_URL, MockAPI, ok


def _request(method: str = "GET", path: str = "gw") -> EncodedRequest:
    return EncodedRequest(method=method, path=path, encoding=Encoding.JSON, headers={"User-Id": "svc"})


@pytest.fixture
def make_client(client_config):
    def _make(api: MockAPI, config: ClientConfig | None = None) -> RemoteAPIClient:
        return RemoteAPIClient(config or client_config, transport=api.transport)

    return _make


# ============================================================
# Basics
# ============================================================


@pytest.mark.unit
class TestRequests:
    @pytest.mark.asyncio
    async def test_joins_base_url(self, make_client):
        api = MockAPI(ok([]))
        client = make_client(api)

        await client.send(_request(path="gw/resources"))

        assert str(api.last.url) == f"{API_URL}/gw/resources"
        assert api.last.headers["User-Id"] == "svc"
        await client.close()

    def test_timeout_for(self, client_config):
        client = RemoteAPIClient(client_config)
        assert client.timeout_for(False) == client_config.timeout
        assert client.timeout_for(True) == client_config.long_timeout

    @pytest.mark.asyncio
    async def test_context_manager_closes(self, client_config):
        api = MockAPI(ok([]))
        async with RemoteAPIClient(client_config, transport=api.transport) as client:
            await client.send(_request())
            assert client._client is not None
        assert client._client is None


# ============================================================
# Retry
# ============================================================


@pytest.mark.unit
class TestRetry:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [408, 413, 429, 500, 502, 503, 504])
    async def test_retries_transient_status(self, make_client, no_sleep, status):
        api = MockAPI(httpx.Response(status), ok([]))
        response = await make_client(api).send(_request())

        assert response.status_code == 200
        assert api.call_count == 2

    @pytest.mark.asyncio
    async def test_bounded_retries(self, make_client, no_sleep):
        api = MockAPI(httpx.Response(503))
        response = await make_client(api).send(_request())

        assert response.status_code == 503
        assert api.call_count == 3
        assert len(no_sleep) == 2

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [400, 401, 403, 404, 422])
    async def test_no_retry_on_client_errors(self, make_client, no_sleep, status):
        api = MockAPI(httpx.Response(status))
        response = await make_client(api).send(_request())

        assert response.status_code == status
        assert api.call_count == 1
        assert no_sleep == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["PATCH", "DELETE"])
    async def test_no_retry_for_other_methods(self, make_client, no_sleep, method):
        api = MockAPI(httpx.Response(503), ok([]))
        response = await make_client(api).send(_request(method=method))

        assert response.status_code == 503
        assert api.call_count == 1

    @pytest.mark.asyncio
    async def test_post_is_retried(self, make_client, no_sleep):
        api = MockAPI(httpx.Response(502), ok({}))
        response = await make_client(api).send(_request(method="POST"))

        assert response.status_code == 200
        assert api.call_count == 2

    @pytest.mark.asyncio
    async def test_backoff_delays(self, make_client, no_sleep):
        config = ClientConfig(API_URL, "svc", retry=RetryPolicy(limit=2, delay=0.3, max_delay=5.0))
        api = MockAPI(httpx.Response(500))

        await make_client(api, config).send(_request())

        assert no_sleep == [pytest.approx(0.3), pytest.approx(0.6)]

    @pytest.mark.asyncio
    async def test_retry_after_honoured(self, make_client, no_sleep):
        config = ClientConfig(API_URL, "svc", retry=RetryPolicy(limit=1, delay=0.3, max_delay=5.0))
        api = MockAPI(httpx.Response(429, headers={"Retry-After": "2"}), ok([]))

        await make_client(api, config).send(_request())

        assert no_sleep == [2.0]

    @pytest.mark.asyncio
    async def test_retry_after_capped(self, make_client, no_sleep):
        config = ClientConfig(API_URL, "svc", retry=RetryPolicy(limit=1, delay=0.3, max_delay=5.0))
        api = MockAPI(httpx.Response(503, headers={"Retry-After": "600"}), ok([]))

        await make_client(api, config).send(_request())

        assert no_sleep == [5.0]

    @pytest.mark.asyncio
    async def test_zero_retry_limit(self, make_client, no_sleep):
        config = ClientConfig(API_URL, "svc", retry=RetryPolicy(limit=0))
        api = MockAPI(httpx.Response(503))

        await make_client(api, config).send(_request())

        assert api.call_count == 1


# ============================================================
# Network failures and timeouts
# ============================================================


@pytest.mark.unit
class TestFailures:
    @pytest.mark.asyncio
    async def test_network_error_retried_then_raised(self, make_client, no_sleep):
        api = MockAPI(httpx.ConnectError("connection refused"))

        with pytest.raises(TransportError) as exc_info:
            await make_client(api).send(_request())

        assert api.call_count == 3
        assert exc_info.value.details == {"cause": "ConnectError"}

    @pytest.mark.asyncio
    async def test_network_error_recovers(self, make_client, no_sleep):
        api = MockAPI(httpx.ConnectError("reset"), ok([]))
        response = await make_client(api).send(_request())

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_timeout_is_distinct_and_not_retried(self, make_client, no_sleep):
        api = MockAPI(httpx.ReadTimeout("read timed out"))

        with pytest.raises(RequestTimeoutError) as exc_info:
            await make_client(api).send(_request(), timeout=2.5)

        assert not isinstance(exc_info.value, TransportError)
        assert exc_info.value.timeout_seconds == 2.5
        assert api.call_count == 1
        assert no_sleep == []
