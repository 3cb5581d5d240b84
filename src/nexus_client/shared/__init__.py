"""Shared primitives used across the Nexus client"""

from .exceptions import (
    ClientClosedError,
    ConfigurationError,
    NexusError,
    StreamError,
    TransportError,
    UnsupportedOperationError,
    ValidationError,
)

__all__ = [
    "ClientClosedError",
    "ConfigurationError",
    "NexusError",
    "StreamError",
    "TransportError",
    "UnsupportedOperationError",
    "ValidationError",
]
