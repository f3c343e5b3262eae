"""
Ghostwriter RPC Test Fixtures
Shared fixtures for all test modules.
"""

import pytest

from ghostwriter_rpc.config import ClientConfig, RetryPolicy, Settings

from .fakes import API_URL, USER_ID


# ============================================================
# Configuration fixtures
# ============================================================


@pytest.fixture
def client_config() -> ClientConfig:
    """Client configuration with zero-delay retries."""
    return ClientConfig(
        base_url=API_URL,
        user_id=USER_ID,
        timeout=1.0,
        long_timeout=5.0,
        retry=RetryPolicy(limit=2, delay=0.0, max_delay=0.0),
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        api_url=API_URL,
        user_id=USER_ID,
        retry_delay_seconds=0.0,
        retry_max_delay_seconds=0.0,
        structured_logging=False,
    )


@pytest.fixture
def no_sleep(monkeypatch):
    """Record retry sleeps instead of waiting."""
    delays: list[float] = []

    async def fake_sleep(delay: float) -> None:
        delays.append(delay)

    monkeypatch.setattr("ghostwriter_rpc.clients.base.asyncio.sleep", fake_sleep)
    return delays
