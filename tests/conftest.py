"""Pytest fixtures for Nexus client tests"""

import sys
from collections.abc import Callable
from pathlib import Path

import httpx
import pytest
from dotenv import load_dotenv

# =============================================================================
# Global Test Setup
# =============================================================================

# Add src to Python path for all tests
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

env_path = Path(__file__).parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)

from nexus_client.core.config import ClientConfig  # noqa: E402
from nexus_client.infrastructure.http.facade import NexusClient  # noqa: E402

Handler = Callable[[httpx.Request], httpx.Response]

TEST_API_KEY = "nnd_test_key_123"


@pytest.fixture
def client_config() -> ClientConfig:
    """Development configuration with a development-type API key"""
    return ClientConfig(api_key=TEST_API_KEY, environment="development")


@pytest.fixture
def make_client(client_config: ClientConfig):
    """Factory building a NexusClient backed by an httpx MockTransport

    Usage:
        client = make_client(handler)
    """

    def _make(
        handler: Handler, config: ClientConfig | None = None
    ) -> NexusClient:
        return NexusClient(
            config or client_config,
            transport=httpx.MockTransport(handler),
        )

    return _make


@pytest.fixture
def ok_handler() -> Handler:
    """Handler answering every request with a success envelope"""

    def _handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"success": True, "data": {}})

    return _handler
