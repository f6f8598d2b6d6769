"""HTTP transport to the Docker engine over a Unix domain socket.

Requests are described by ``EngineRequest`` rather than raw URLs so the
client can attach meaning (which operation, which container) to a failure
without parsing paths back apart.
"""

from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, AsyncIterator, Dict, FrozenSet, Optional, Tuple

import httpx
import structlog

from ...config import settings
from ...models.errors import ContainerRuntimeError

logger = structlog.get_logger(__name__)

# Local limit on collected response bodies, not a protocol rule
MAX_RESPONSE_SIZE = 10 * 1024 * 1024


@dataclass(frozen=True)
class EngineRequest:
    """Structured description of one engine API call."""

    method: str
    path: str
    operation: str
    container_id: Optional[str] = None
    params: Tuple[Tuple[str, str], ...] = ()
    body: Optional[Dict[str, Any]] = None
    accepted_statuses: FrozenSet[int] = frozenset()
    timeout: Optional[float] = None


@dataclass(frozen=True)
class EngineResponse:
    """Status and fully collected body of an engine response."""

    status_code: int
    body: bytes

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


class DockerTransport:
    """Sends versioned API requests to the engine socket.

    Transport failures (missing socket, refused connection, timeouts) are
    raised as ContainerRuntimeError; HTTP status handling is left to the
    caller.
    """

    def __init__(
        self,
        socket_path: Optional[str] = None,
        api_version: Optional[str] = None,
        timeout: Optional[float] = None,
        max_response_size: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the transport.

        Args:
            socket_path: Engine socket, defaults to the configured path
            api_version: Version segment such as ``v1.47``
            timeout: Default request timeout in seconds
            max_response_size: Body cap in bytes
            transport: Replacement httpx transport, used by tests
        """
        docker_config = settings.docker
        self.socket_path = socket_path or docker_config.socket_path()
        self.api_version = api_version or docker_config.docker_api_version
        self.timeout = timeout or docker_config.docker_request_timeout
        self.max_response_size = max_response_size or docker_config.max_response_bytes()

        self._client = httpx.AsyncClient(
            transport=transport or httpx.AsyncHTTPTransport(uds=self.socket_path),
            base_url="http://localhost",
            headers={"Host": "localhost"},
            timeout=httpx.Timeout(self.timeout),
        )

    def url_for(self, path: str) -> str:
        """Prefix an API path with the version segment."""
        return f"/{self.api_version}{path}"

    def _build_request(self, request: EngineRequest) -> httpx.Request:
        return self._client.build_request(
            request.method,
            self.url_for(request.path),
            params=list(request.params) or None,
            json=request.body,
            timeout=request.timeout or self.timeout,
        )

    @asynccontextmanager
    async def stream(self, request: EngineRequest) -> AsyncIterator[httpx.Response]:
        """Open a streaming response; the body is read by the caller.

        Args:
            request: Request descriptor

        Yields:
            The httpx response with its body not yet consumed
        """
        http_request = self._build_request(request)
        logger.debug(
            "Engine request",
            operation=request.operation,
            method=request.method,
            path=http_request.url.path,
        )
        try:
            response = await self._client.send(http_request, stream=True)
        except httpx.TransportError as e:
            raise ContainerRuntimeError(
                f"{request.operation} failed: {str(e) or type(e).__name__}"
            ) from e

        try:
            yield response
        except httpx.TransportError as e:
            raise ContainerRuntimeError(
                f"{request.operation} failed while reading response: {str(e) or type(e).__name__}"
            ) from e
        finally:
            await response.aclose()

    async def send(self, request: EngineRequest) -> EngineResponse:
        """Send a request and collect its bounded body."""
        async with self.stream(request) as response:
            body = await self.read_body(response, request)
        return EngineResponse(status_code=response.status_code, body=body)

    async def read_body(self, response: httpx.Response, request: EngineRequest) -> bytes:
        """Collect a streamed body, failing once it passes the size cap."""
        body = bytearray()
        async for chunk in response.aiter_bytes():
            body += chunk
            if len(body) > self.max_response_size:
                raise ContainerRuntimeError(
                    f"{request.operation} response exceeds {self.max_response_size} bytes"
                )
        return bytes(body)

    async def iter_lines(
        self, response: httpx.Response, request: EngineRequest
    ) -> AsyncIterator[str]:
        """Yield body lines, applying the same byte cap as ``read_body``.

        The cap counts raw bytes received, so a single unterminated line
        cannot grow past it either.
        """
        consumed = 0
        pending = bytearray()
        async for chunk in response.aiter_bytes():
            consumed += len(chunk)
            if consumed > self.max_response_size:
                raise ContainerRuntimeError(
                    f"{request.operation} response exceeds {self.max_response_size} bytes"
                )
            pending += chunk
            while True:
                end = pending.find(b"\n")
                if end < 0:
                    break
                line = bytes(pending[:end])
                del pending[: end + 1]
                yield line.decode("utf-8", errors="replace")
        if pending:
            yield pending.decode("utf-8", errors="replace")

    async def close(self) -> None:
        """Close the underlying connection pool."""
        await self._client.aclose()
