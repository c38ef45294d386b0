"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import AsyncIterator

import pytest

from cryptocloud.client import CryptocloudClient
from cryptocloud.core.config import get_settings
from cryptocloud.testing import MockCryptocloudGateway


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Ensure each test reads settings from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def webhook_secret() -> str:
    return "s3cr3t"


@pytest.fixture
def gateway() -> MockCryptocloudGateway:
    """Fresh in-memory gateway."""
    return MockCryptocloudGateway()


@pytest.fixture
async def client(gateway: MockCryptocloudGateway) -> AsyncIterator[CryptocloudClient]:
    """Real client wired to the in-memory gateway."""
    async with gateway.client() as client:
        yield client
