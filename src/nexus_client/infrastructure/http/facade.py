"""NexusClient - public entry point composing transport, identity and events"""

import copy
from typing import Any

import httpx
from loguru import logger

from nexus_client.application.events.event_bus import EventBus, Listener
from nexus_client.core.config import ClientConfig
from nexus_client.core.logging import install_logging_bridge
from nexus_client.domain.models.event import ClientEvent
from nexus_client.domain.models.payload import (
    FilePathPayload,
    InMemoryPayload,
    MultipartPayload,
)
from nexus_client.shared.exceptions import ClientClosedError, ConfigurationError

from .auth import IdentityManager
from .errors import ErrorNormalizer
from .streaming import FrameConsumer
from .transport import ProgressCallback, TransportClient


class NexusClient:
    """Client for the Neural Nexus platform API (facade pattern)

    A lightweight facade that delegates to IdentityManager, TransportClient,
    ErrorNormalizer and EventBus. Each instance owns its own identity and
    listener registry.

    Once closed the client is terminal: requests and emissions raise
    ClientClosedError and a new client must be constructed.
    """

    def __init__(
        self,
        config: ClientConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client

        Args:
            config: Validated client configuration
            transport: Optional httpx transport (for testing)

        Raises:
            ConfigurationError: If config is missing
        """
        if config is None:
            raise ConfigurationError(
                "Configuration is required to initialize the Nexus client",
                "INVALID_CONFIG",
            )

        install_logging_bridge()

        self._config = config
        self._closed = False
        self._event_bus = EventBus()
        self._identity = IdentityManager(config.api_key)
        self._normalizer = ErrorNormalizer(self._event_bus)
        self._transport = TransportClient(
            base_url=config.api_url,
            timeout=config.timeout_seconds,
            identity=self._identity,
            normalizer=self._normalizer,
            transport=transport,
        )

        logger.info(
            f"Nexus client initialized: environment={config.environment.value} "
            f"url={config.api_url}"
        )
        self._event_bus.emit(ClientEvent.CONNECTED)

    @classmethod
    def from_env(
        cls, transport: httpx.AsyncBaseTransport | None = None
    ) -> "NexusClient":
        """Create a client configured from NEXUS_* environment variables"""
        return cls(ClientConfig.from_env(), transport=transport)

    async def __aenter__(self) -> "NexusClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def http_client(self) -> httpx.AsyncClient:
        """Get the underlying httpx client"""
        return self._transport.http_client

    def get_config(self) -> ClientConfig:
        """Get a copy of the client configuration"""
        return copy.copy(self._config)

    # Identity

    def set_identity(self, token: str) -> None:
        """Authorize subsequent requests with a session token"""
        self._identity.set_identity(token)
        self._event_bus.emit(
            ClientEvent.AUTH_STATE_CHANGED, {"authenticated": True}
        )

    def clear_identity(self) -> None:
        """Restore the configured API key as the bearer identity"""
        self._identity.clear_identity()
        self._event_bus.emit(
            ClientEvent.AUTH_STATE_CHANGED, {"authenticated": False}
        )

    # Events

    def on(self, event: ClientEvent | str, listener: Listener) -> None:
        self._event_bus.on(event, listener)

    def off(self, event: ClientEvent | str, listener: Listener) -> None:
        self._event_bus.off(event, listener)

    def emit(self, event: ClientEvent | str, payload: Any = None) -> bool:
        self._ensure_open()
        return self._event_bus.emit(event, payload)

    # Requests

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict | None = None,
        json: Any = None,
    ) -> Any:
        self._ensure_open()
        return await self._transport.request(
            method, path, params=params, json=json
        )

    async def get(self, path: str, params: dict | None = None) -> Any:
        """Make GET request

        Args:
            path: API endpoint path
            params: Query parameters

        Returns:
            Parsed response envelope
        """
        self._ensure_open()
        return await self._transport.get(path, params)

    async def post(self, path: str, body: Any = None) -> Any:
        """Make POST request with a JSON body"""
        self._ensure_open()
        return await self._transport.post(path, body)

    async def put(self, path: str, body: Any = None) -> Any:
        """Make PUT request with a JSON body"""
        self._ensure_open()
        return await self._transport.put(path, body)

    async def delete(self, path: str, params: dict | None = None) -> Any:
        """Make DELETE request"""
        self._ensure_open()
        return await self._transport.delete(path, params)

    async def upload(
        self,
        path: str,
        payload: MultipartPayload | FilePathPayload | InMemoryPayload,
        on_progress: ProgressCallback | None = None,
    ) -> Any:
        """Upload files as a multipart form

        Args:
            path: API endpoint path
            payload: Multipart form, or a single file sent as field "file"
            on_progress: Called with percent complete while sending

        Returns:
            Parsed response envelope
        """
        self._ensure_open()
        if not isinstance(payload, MultipartPayload):
            payload = MultipartPayload(files={"file": payload})
        return await self._transport.upload(path, payload, on_progress)

    async def stream(
        self, path: str, body: Any, on_frame: FrameConsumer
    ) -> int:
        """POST a request and deliver each streamed frame to on_frame

        Returns once the stream has ended (sentinel or transport end).

        Returns:
            Number of frames delivered
        """
        self._ensure_open()
        return await self._transport.stream(path, body, on_frame)

    async def close(self) -> None:
        """Close the client and release its connection pool

        Listeners are removed and the registered disconnected listeners are
        notified once. Closing twice is a no-op.
        """
        if self._closed:
            return
        self._closed = True
        self._event_bus.close()
        await self._transport.aclose()
        logger.info("Nexus client closed")

    def _ensure_open(self) -> None:
        if self._closed:
            raise ClientClosedError(
                "Client has been closed, construct a new client",
                "CLIENT_CLOSED",
            )
