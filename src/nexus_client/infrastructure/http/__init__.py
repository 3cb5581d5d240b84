"""HTTP infrastructure module

IdentityManager - Bearer identity attached to requests
ErrorNormalizer - Failed exchange to NexusError conversion
TransportClient - HTTP requests, uploads and streams
StreamDecoder - Data-framed stream decoding
NexusClient - Facade composing the above
"""

from .auth import IdentityManager
from .errors import ErrorNormalizer
from .facade import NexusClient
from .streaming import StreamDecoder, StreamState
from .transport import TransportClient

__all__ = [
    "ErrorNormalizer",
    "IdentityManager",
    "NexusClient",
    "StreamDecoder",
    "StreamState",
    "TransportClient",
]
