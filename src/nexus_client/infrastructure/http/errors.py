"""ErrorNormalizer - converts failed exchanges into NexusError"""

from typing import Any

import httpx
from loguru import logger

from nexus_client.application.events.event_bus import EventBus
from nexus_client.domain.models.envelope import ResponseEnvelope
from nexus_client.domain.models.event import ClientEvent
from nexus_client.shared.exceptions import NexusError, TransportError

UNKNOWN_ERROR_MESSAGE = "Unknown error occurred"
REQUEST_ID_HEADER = "x-request-id"


class ErrorNormalizer:
    """Builds one NexusError from whatever a failed exchange produced

    Extraction order for each field, first non-empty wins:
    - message: error.message, error (bare string), message, the failure's
      own text, "Unknown error occurred"
    - code: error.code, code, the error class default ("API_ERROR" for
      transport failures)
    - details: error.details, details, {status, request_id}

    Every normalized error is announced once on the event bus.
    """

    def __init__(self, event_bus: EventBus) -> None:
        self._event_bus = event_bus

    def normalize(
        self,
        error: BaseException | None = None,
        response: httpx.Response | None = None,
        *,
        error_cls: type[NexusError] = TransportError,
    ) -> NexusError:
        """Normalize a failure

        Args:
            error: Raw exception raised by the transport, if any
            response: Failed HTTP response, if any
            error_cls: NexusError subclass to build

        Returns:
            The normalized error (never raises)
        """
        if isinstance(error, NexusError):
            return self._announce(error)

        try:
            normalized = self._build(error, response, error_cls)
        except Exception as e:
            logger.warning(f"Error extraction failed: {e}")
            normalized = error_cls(UNKNOWN_ERROR_MESSAGE)

        if error is not None and normalized.__cause__ is None:
            normalized.__cause__ = error

        return self._announce(normalized)

    def _announce(self, error: NexusError) -> NexusError:
        if error._announced:
            return error
        error._announced = True
        logger.error(
            f"Request failed [{error.code}] "
            f"status={error.http_status}: {error.message}"
        )
        self._event_bus.emit(ClientEvent.ERROR, error)
        return error

    def _build(
        self,
        error: BaseException | None,
        response: httpx.Response | None,
        error_cls: type[NexusError],
    ) -> NexusError:
        if response is None and isinstance(error, httpx.HTTPStatusError):
            response = error.response

        status = response.status_code if response is not None else None
        request_id = (
            response.headers.get(REQUEST_ID_HEADER)
            if response is not None
            else None
        )

        envelope = _parse_envelope(response)
        info = envelope.error_info if envelope is not None else None
        flat_error = envelope.error_text if envelope is not None else None

        message = (
            (info.message if info else None)
            or flat_error
            or (envelope.message if envelope else None)
            or _failure_message(error, status)
            or UNKNOWN_ERROR_MESSAGE
        )
        code = (
            (info.code if info else None)
            or (envelope.code if envelope else None)
            or error_cls.default_code
        )
        details: Any = (
            (info.details if info else None)
            or (envelope.details if envelope else None)
            or {"status": status, "request_id": request_id}
        )

        return error_cls(
            message,
            code,
            details=details,
            http_status=status,
            request_id=request_id,
        )


def _parse_envelope(response: httpx.Response | None) -> ResponseEnvelope | None:
    """Parse a response body into the envelope model, None if impossible"""
    if response is None:
        return None
    try:
        body = response.json()
    except (httpx.ResponseNotRead, ValueError, UnicodeDecodeError):
        return None
    if not isinstance(body, dict):
        logger.debug("Error body is not a JSON object")
        return None
    return ResponseEnvelope.model_validate(body)


def _failure_message(error: BaseException | None, status: int | None) -> str:
    if error is not None:
        text = str(error)
        if text:
            return text
        return type(error).__name__
    if status is not None:
        return f"Request failed with status code {status}"
    return ""
