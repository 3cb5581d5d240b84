"""TransportClient - one HTTP exchange per call against the platform API"""

from collections.abc import AsyncIterator, Callable
from typing import Any

import httpx
from loguru import logger

from nexus_client._version import __version__
from nexus_client.domain.models.payload import MultipartPayload
from nexus_client.shared.exceptions import (
    NexusError,
    UnsupportedOperationError,
    ValidationError,
)

from .auth import IdentityManager
from .errors import ErrorNormalizer
from .streaming import FrameConsumer, StreamDecoder

SUPPORTED_METHODS = ("GET", "POST", "PUT", "DELETE")
UPLOAD_CHUNK_SIZE = 64 * 1024

# Raised by httpx while building or sending a request: bad URLs, bodies
# that cannot be encoded, network faults
REQUEST_FAILURES = (httpx.HTTPError, httpx.InvalidURL, TypeError, ValueError)

ProgressCallback = Callable[[int], Any]


def upload_percent(sent: int, total: int) -> int:
    """round(sent * 100 / total), halves rounded up"""
    return (sent * 200 + total) // (2 * total)


class TransportClient:
    """Low-level HTTP client for the platform API

    Responsibilities:
    - Request execution against the configured base URL
    - Authorization header from the current identity at send time
    - Routing every failure through the ErrorNormalizer
    - Multipart uploads with progress reporting
    - Streamed responses via StreamDecoder

    No request is retried; failures surface immediately.
    """

    USER_AGENT = f"nexus-client/{__version__}"

    def __init__(
        self,
        base_url: str,
        timeout: float,
        identity: IdentityManager,
        normalizer: ErrorNormalizer,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize transport client

        Args:
            base_url: Base endpoint, every path is resolved against it
            timeout: Request timeout in seconds
            identity: Source of the bearer value
            normalizer: Converts failures into NexusError
            transport: Optional httpx transport (for testing)
        """
        self._base_url = base_url.rstrip("/") + "/"
        self._timeout = timeout
        self._identity = identity
        self._normalizer = normalizer
        self._http_client = self._build_http_client(transport)

    def _build_http_client(
        self, transport: httpx.AsyncBaseTransport | None
    ) -> httpx.AsyncClient:
        """Create an AsyncClient with request/response logging hooks."""
        return httpx.AsyncClient(
            base_url=self._base_url,
            timeout=httpx.Timeout(self._timeout),
            transport=transport,
            headers={
                "User-Agent": self.USER_AGENT,
                "Accept": "application/json",
            },
            event_hooks={
                "request": [self._log_httpx_request],
                "response": [self._log_httpx_response],
            },
        )

    async def _log_httpx_request(self, request: httpx.Request) -> None:
        """Log outbound requests with the authorization header masked."""
        headers = {
            k: ("***" if k.lower() == "authorization" else v)
            for k, v in request.headers.items()
        }
        logger.debug(f"HTTPX request: {request.method} {request.url} {headers}")

    async def _log_httpx_response(self, response: httpx.Response) -> None:
        logger.debug(
            f"HTTPX response: status={response.status_code} url={response.url}"
        )

    @property
    def http_client(self) -> httpx.AsyncClient:
        return self._http_client

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict | None = None,
        json: Any = None,
    ) -> Any:
        """Send one request and return the parsed response body

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            path: Endpoint path relative to the base URL
            params: Query parameters
            json: JSON request body

        Returns:
            Parsed JSON response ({} for an empty body)

        Raises:
            UnsupportedOperationError: If method is not supported
            ValidationError: If path is empty
            TransportError: If the request fails
        """
        method = method.upper()
        if method not in SUPPORTED_METHODS:
            raise UnsupportedOperationError(
                f"Unsupported HTTP method: {method}", "UNSUPPORTED_METHOD"
            )
        _require_path(path)

        logger.debug(f"{method} {path}")
        try:
            response = await self._http_client.request(
                method,
                path.lstrip("/"),
                params=params,
                json=json,
                headers=self._json_headers(),
            )
        except REQUEST_FAILURES as e:
            raise self._normalizer.normalize(e) from e

        return self._handle_response(response)

    async def get(self, path: str, params: dict | None = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, body: Any = None) -> Any:
        return await self.request("POST", path, json=body)

    async def put(self, path: str, body: Any = None) -> Any:
        return await self.request("PUT", path, json=body)

    async def delete(self, path: str, params: dict | None = None) -> Any:
        return await self.request("DELETE", path, params=params)

    async def upload(
        self,
        path: str,
        payload: MultipartPayload,
        on_progress: ProgressCallback | None = None,
    ) -> Any:
        """POST a multipart form, reporting progress as the body is sent

        on_progress receives non-decreasing integer percentages and ends at
        100 once the whole body has been handed to the connection. It is
        never called for an empty body.

        Raises:
            ValidationError: If path is empty, no file is given or a file
                cannot be read
            TransportError: If the request fails
        """
        _require_path(path)
        if not payload.files:
            raise ValidationError("File is required", "INVALID_FILE")

        try:
            files = await payload.read_files()
        except OSError as e:
            raise ValidationError(
                f"File could not be read: {e}",
                "INVALID_FILE",
                details={"error": str(e)},
            ) from e

        logger.debug(f"UPLOAD {path} ({len(files)} file(s))")
        try:
            request = self._http_client.build_request(
                "POST",
                path.lstrip("/"),
                data=payload.fields or None,
                files=files,
                headers=self._identity.authorization_header(),
            )

            if on_progress is not None:
                body = request.read()
                request = httpx.Request(
                    request.method,
                    request.url,
                    headers=request.headers,
                    content=_progress_stream(body, on_progress),
                    extensions=request.extensions,
                )

            response = await self._http_client.send(request)
        except REQUEST_FAILURES as e:
            raise self._normalizer.normalize(e) from e

        return self._handle_response(response)

    async def stream(
        self,
        path: str,
        body: Any,
        on_frame: FrameConsumer,
    ) -> int:
        """POST a request and decode its data-framed response body

        Args:
            path: Endpoint path
            body: JSON request body
            on_frame: Called with each decoded frame, in arrival order

        Returns:
            Number of frames delivered

        Raises:
            ValidationError: If path is empty or on_frame is not callable
            TransportError: If the request fails before streaming starts
            StreamError: If the stream fails part way
        """
        _require_path(path)
        if not callable(on_frame):
            raise ValidationError(
                "A frame callback is required", "INVALID_CALLBACK"
            )

        decoder = StreamDecoder(on_frame)
        logger.debug(f"STREAM {path}")
        try:
            async with self._http_client.stream(
                "POST",
                path.lstrip("/"),
                json=body,
                headers=self._json_headers(),
            ) as response:
                if not response.is_success:
                    await response.aread()
                    raise self._normalizer.normalize(response=response)
                await decoder.decode(response.aiter_bytes())
        except NexusError as e:
            self._normalizer.normalize(e)
            raise
        except REQUEST_FAILURES as e:
            raise self._normalizer.normalize(e) from e

        logger.debug(f"Stream {path} complete: {decoder.frames_decoded} frames")
        return decoder.frames_decoded

    async def aclose(self) -> None:
        """Close the underlying connection pool"""
        await self._http_client.aclose()

    def _json_headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            **self._identity.authorization_header(),
        }

    def _handle_response(self, response: httpx.Response) -> Any:
        if not response.is_success:
            raise self._normalizer.normalize(response=response)

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise self._normalizer.normalize(e, response) from e


def _require_path(path: str) -> None:
    if not path or not path.strip("/ "):
        raise ValidationError("Endpoint path is required", "INVALID_ENDPOINT")


async def _progress_stream(
    body: bytes, on_progress: ProgressCallback
) -> AsyncIterator[bytes]:
    """Yield body in chunks, reporting progress after each is consumed"""
    total = len(body)
    sent = 0
    last = -1
    for start in range(0, total, UPLOAD_CHUNK_SIZE):
        chunk = body[start : start + UPLOAD_CHUNK_SIZE]
        yield chunk
        sent += len(chunk)
        percent = upload_percent(sent, total)
        if percent > last:
            last = percent
            try:
                on_progress(percent)
            except Exception:
                logger.exception("Upload progress callback failed")
