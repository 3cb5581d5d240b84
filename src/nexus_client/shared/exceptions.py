"""Consolidated exceptions for the Nexus client.

Every failure that crosses a public method boundary is a NexusError (or a
subclass) carrying a stable, machine-matchable code.
"""

from typing import Any


class NexusError(Exception):
    """Base exception for Nexus client errors

    Attributes:
        message: Human-readable description
        code: Stable machine-matchable identifier
        details: Opaque structured payload
        http_status: HTTP status of the failed exchange, if any
        request_id: Server request id (x-request-id), if any
    """

    default_code = "API_ERROR"
    _announced = False

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: Any = None,
        http_status: int | None = None,
        request_id: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.details = details
        self.http_status = http_status
        self.request_id = request_id

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(code={self.code!r}, "
            f"message={self.message!r}, http_status={self.http_status})"
        )


class ConfigurationError(NexusError):
    """Raised when client configuration is invalid or missing"""

    default_code = "INVALID_CONFIG"


class TransportError(NexusError):
    """Raised when a request fails (network, timeout or non-2xx)"""

    pass


class StreamError(NexusError):
    """Raised when a streamed response fails mid-stream"""

    default_code = "STREAM_ERROR"


class ValidationError(NexusError):
    """Raised when a required call argument is missing or invalid"""

    default_code = "VALIDATION_ERROR"


class UnsupportedOperationError(NexusError):
    """Raised for an unrecognized capability request"""

    default_code = "UNSUPPORTED_OPERATION"


class ClientClosedError(NexusError):
    """Raised when a closed client is used"""

    default_code = "CLIENT_CLOSED"
