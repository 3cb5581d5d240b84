"""Nexus client - async client for the Neural Nexus platform API"""

from nexus_client._version import __version__
from nexus_client.application.events import EventBus
from nexus_client.core.config import ClientConfig, Environment, StorageProvider
from nexus_client.core.logging import configure_logging
from nexus_client.domain.models import (
    ClientEvent,
    FilePathPayload,
    InMemoryPayload,
    MultipartPayload,
    ResponseEnvelope,
)
from nexus_client.infrastructure.http import NexusClient
from nexus_client.shared.exceptions import (
    ClientClosedError,
    ConfigurationError,
    NexusError,
    StreamError,
    TransportError,
    UnsupportedOperationError,
    ValidationError,
)

__all__ = [
    "__version__",
    "ClientClosedError",
    "ClientConfig",
    "ClientEvent",
    "ConfigurationError",
    "Environment",
    "EventBus",
    "FilePathPayload",
    "InMemoryPayload",
    "MultipartPayload",
    "NexusClient",
    "NexusError",
    "ResponseEnvelope",
    "StorageProvider",
    "StreamError",
    "TransportError",
    "UnsupportedOperationError",
    "ValidationError",
    "configure_logging",
]
