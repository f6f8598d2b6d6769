"""Docker Engine API client.

Translates lifecycle calls into versioned REST requests and normalises
every failure into the ContainerError taxonomy at this one boundary.
"""

from typing import Optional, Tuple, Type, TypeVar

import httpx
import structlog
from pydantic import BaseModel, ValidationError

from ...config import settings
from ...models.errors import (
    ContainerNotFound,
    ContainerRuntimeError,
    ImagePullFailed,
)
from .api_types import (
    CreateContainerRequest,
    CreateContainerResponse,
    ErrorResponse,
    InspectContainerResponse,
    PullImageProgress,
)
from .logs import demultiplex_logs
from .transport import DockerTransport, EngineRequest, EngineResponse

logger = structlog.get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

# 304 from start/stop means the container is already in the requested state
NOT_MODIFIED = frozenset({304})


def parse_image_reference(reference: str) -> Tuple[str, str]:
    """Split an image reference into (repository, tag).

    The last ``:`` separates the tag unless the text after it contains a
    ``/``, in which case it is a registry port and the tag is ``latest``:

    - ``nginx`` -> ``("nginx", "latest")``
    - ``nginx:1.25`` -> ``("nginx", "1.25")``
    - ``registry:5000/myimage`` -> ``("registry:5000/myimage", "latest")``
    - ``registry:5000/myimage:v2`` -> ``("registry:5000/myimage", "v2")``
    """
    image, sep, tag = reference.rpartition(":")
    if not sep or "/" in tag:
        return reference, "latest"
    return image, tag


def extract_error_message(body: bytes) -> Optional[str]:
    """Return the ``message`` of a Docker JSON error body, if there is one."""
    try:
        return ErrorResponse.model_validate_json(body).message
    except ValidationError:
        return None


class DockerAPIClient:
    """Async client for the Docker Engine API over a Unix socket."""

    def __init__(
        self,
        transport: Optional[DockerTransport] = None,
        pull_timeout: Optional[float] = None,
    ):
        """Initialize the client.

        Args:
            transport: Engine transport, created from settings when omitted
            pull_timeout: Timeout in seconds for the streamed image pull
        """
        self._transport = transport or DockerTransport()
        self._pull_timeout = pull_timeout or settings.docker_pull_timeout

    @property
    def transport(self) -> DockerTransport:
        return self._transport

    async def pull_image(self, reference: str) -> None:
        """Pull an image, consuming the NDJSON progress stream.

        Raises:
            ImagePullFailed: on the first record carrying an ``error``, or
                when the final status is not 2xx
        """
        logger.info("Pulling image", image=reference)

        image, tag = parse_image_reference(reference)
        request = EngineRequest(
            method="POST",
            path="/images/create",
            operation="pull_image",
            params=(("fromImage", image), ("tag", tag)),
            timeout=self._pull_timeout,
        )

        async with self._transport.stream(request) as response:
            async for line in self._transport.iter_lines(response, request):
                line = line.strip()
                if not line:
                    continue
                try:
                    progress = PullImageProgress.model_validate_json(line)
                except ValidationError:
                    continue
                if progress.error:
                    logger.warning(
                        "Image pull reported an error", image=reference, error=progress.error
                    )
                    raise ImagePullFailed(image=reference, reason=progress.error)
            status_code = response.status_code

        if not 200 <= status_code < 300:
            raise ImagePullFailed(image=reference, reason=f"HTTP {status_code}")

        logger.info("Pulled image", image=reference)

    async def create_container(
        self, request: CreateContainerRequest, name: Optional[str] = None
    ) -> CreateContainerResponse:
        """Create a container from a request body.

        Args:
            request: Engine create body
            name: Optional container name

        Returns:
            The new container id and any engine warnings
        """
        logger.info("Creating container", image=request.Image, name=name)

        response = await self._execute(
            EngineRequest(
                method="POST",
                path="/containers/create",
                operation="create_container",
                params=(("name", name),) if name else (),
                body=request.to_body(),
            )
        )
        created = self._decode(response, CreateContainerResponse, "create_container")
        for warning in created.Warnings or []:
            logger.warning("Engine warning on create", id=created.Id[:12], warning=warning)
        return created

    async def start_container(self, container_id: str) -> None:
        """Start a created container. Already running is not an error."""
        logger.info("Starting container", id=container_id[:12])
        await self._execute(
            EngineRequest(
                method="POST",
                path=f"/containers/{container_id}/start",
                operation="start_container",
                container_id=container_id,
                accepted_statuses=NOT_MODIFIED,
            )
        )

    async def stop_container(self, container_id: str, timeout: Optional[int] = None) -> None:
        """Stop a container. Already stopped is not an error.

        Args:
            container_id: Container to stop
            timeout: Grace period in seconds before the engine kills it
        """
        if timeout is None:
            timeout = settings.docker_stop_timeout
        logger.info("Stopping container", id=container_id[:12], timeout=timeout)
        await self._execute(
            EngineRequest(
                method="POST",
                path=f"/containers/{container_id}/stop",
                operation="stop_container",
                container_id=container_id,
                params=(("t", str(timeout)),),
                accepted_statuses=NOT_MODIFIED,
                # The engine holds the response for the whole grace period
                timeout=self._transport.timeout + timeout,
            )
        )

    async def remove_container(self, container_id: str, force: bool = False) -> None:
        """Remove a container."""
        logger.info("Removing container", id=container_id[:12], force=force)
        await self._execute(
            EngineRequest(
                method="DELETE",
                path=f"/containers/{container_id}",
                operation="remove_container",
                container_id=container_id,
                params=(("force", "true" if force else "false"),),
            )
        )

    async def inspect_container(self, container_id: str) -> InspectContainerResponse:
        """Read the container's current state and network settings."""
        logger.debug("Inspecting container", id=container_id[:12])
        response = await self._execute(
            EngineRequest(
                method="GET",
                path=f"/containers/{container_id}/json",
                operation="inspect_container",
                container_id=container_id,
            )
        )
        return self._decode(response, InspectContainerResponse, "inspect_container")

    async def container_logs(self, container_id: str) -> str:
        """Fetch stdout and stderr as plain text."""
        logger.debug("Fetching container logs", id=container_id[:12])
        response = await self._execute(
            EngineRequest(
                method="GET",
                path=f"/containers/{container_id}/logs",
                operation="container_logs",
                container_id=container_id,
                params=(("stdout", "1"), ("stderr", "1")),
            )
        )
        return demultiplex_logs(response.body)

    async def close(self) -> None:
        await self._transport.close()

    async def _execute(self, request: EngineRequest) -> EngineResponse:
        """Send a request and map unaccepted statuses to errors.

        Raises:
            ContainerNotFound: 404 on a request addressed to a container
            ContainerRuntimeError: any other non-2xx status, carrying the
                engine's message or ``HTTP <status>``
        """
        response = await self._transport.send(request)
        status = response.status_code
        if response.is_success or status in request.accepted_statuses:
            return response

        if status == httpx.codes.NOT_FOUND and request.container_id:
            raise ContainerNotFound(request.container_id)

        message = extract_error_message(response.body) or f"HTTP {status}"
        logger.debug(
            "Engine request failed",
            operation=request.operation,
            status_code=status,
            error=message,
        )
        raise ContainerRuntimeError(message, status_code=status)

    def _decode(self, response: EngineResponse, model: Type[ModelT], operation: str) -> ModelT:
        try:
            return model.model_validate_json(response.body)
        except ValidationError as e:
            raise ContainerRuntimeError(
                f"Malformed {operation} response: {e}", status_code=response.status_code
            ) from e
