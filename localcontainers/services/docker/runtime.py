"""ContainerRuntime backed by the Docker Engine REST API.

Works with Docker and with Podman's Docker-compatible socket.
"""

from typing import Dict, List, Optional

import structlog

from ...config import settings
from ...models.container import (
    ContainerConfiguration,
    ContainerInspection,
    HealthStatus,
    RunningContainer,
)
from ...models.errors import StartFailed
from ..interfaces import ContainerRuntime
from .api_types import (
    CreateContainerRequest,
    HealthcheckBody,
    HostConfigBody,
    PortBinding,
)
from .client import DockerAPIClient
from .ports import resolve_ports

logger = structlog.get_logger(__name__)

NANOSECONDS_PER_SECOND = 1_000_000_000

# Published ports bind on every host interface
WILDCARD_HOST_IP = "0.0.0.0"

# Engine states that mean the process is already gone
TERMINAL_STATES = frozenset({"exited", "dead"})


def _to_nanoseconds(seconds: float) -> int:
    return int(round(seconds * NANOSECONDS_PER_SECOND))


def build_create_request(configuration: ContainerConfiguration) -> CreateContainerRequest:
    """Translate a configuration into the engine's create body."""
    env = [f"{key}={value}" for key, value in configuration.environment.items()]

    exposed_ports: Dict[str, Dict] = {}
    port_bindings: Dict[str, List[PortBinding]] = {}
    for mapping in configuration.ports:
        key = mapping.key
        exposed_ports[key] = {}
        binding = PortBinding(
            HostIp=WILDCARD_HOST_IP,
            HostPort=str(mapping.host_port) if mapping.host_port is not None else "",
        )
        port_bindings.setdefault(key, []).append(binding)

    binds = []
    for volume in configuration.volumes:
        bind = f"{volume.host_path}:{volume.container_path}"
        binds.append(f"{bind}:ro" if volume.read_only else bind)

    healthcheck = None
    hc = configuration.health_check
    if hc is not None:
        healthcheck = HealthcheckBody(
            Test=list(hc.test),
            Interval=_to_nanoseconds(hc.interval),
            Timeout=_to_nanoseconds(hc.timeout),
            Retries=hc.retries,
            StartPeriod=_to_nanoseconds(hc.start_period),
        )

    return CreateContainerRequest(
        Image=configuration.image,
        Env=env or None,
        Cmd=list(configuration.command) if configuration.command is not None else None,
        ExposedPorts=exposed_ports or None,
        HostConfig=HostConfigBody(
            PortBindings=port_bindings or None,
            Binds=binds or None,
        ),
        Healthcheck=healthcheck,
    )


class DockerContainerRuntime(ContainerRuntime):
    """Manages containers through a Docker-compatible engine socket."""

    def __init__(
        self,
        client: Optional[DockerAPIClient] = None,
        host: Optional[str] = None,
        stop_timeout: Optional[int] = None,
    ):
        """Initialize the runtime.

        Args:
            client: Engine client, created from settings when omitted
            host: Address stamped on RunningContainer snapshots
            stop_timeout: Grace period in seconds used when stopping
        """
        self._client = client or DockerAPIClient()
        self._host = host or settings.container_host
        self._stop_timeout = (
            stop_timeout if stop_timeout is not None else settings.docker_stop_timeout
        )

    @property
    def client(self) -> DockerAPIClient:
        return self._client

    async def pull_image(self, reference: str) -> None:
        await self._client.pull_image(reference)

    async def start_container(self, configuration: ContainerConfiguration) -> RunningContainer:
        """Create, start and inspect a container.

        The created container is force-removed if any step after create
        fails or the call is cancelled.

        Returns:
            Snapshot with the resolved name and published host ports

        Raises:
            StartFailed: if the container has already exited when inspected
        """
        logger.info("Starting container", image=configuration.image, name=configuration.name)

        request = build_create_request(configuration)
        created = await self._client.create_container(request, name=configuration.name)
        try:
            await self._client.start_container(created.Id)
            inspection = await self._client.inspect_container(created.Id)
            state = inspection.State
            if not state.Running and state.Status in TERMINAL_STATES:
                raise StartFailed(
                    reason=f"container {created.Id[:12]} is {state.Status} right after start"
                )
        except BaseException:
            await self._discard(created.Id)
            raise

        container = RunningContainer(
            id=created.Id,
            name=inspection.Name.lstrip("/"),
            image=configuration.image,
            host=self._host,
            ports=resolve_ports(inspection.NetworkSettings.Ports),
        )
        logger.info(
            "Container started",
            id=container.id[:12],
            name=container.name,
            ports=[f"{p.container_port}/{p.protocol.value}->{p.host_port}" for p in container.ports],
        )
        return container

    async def stop_container(self, container: RunningContainer) -> None:
        await self._client.stop_container(container.id, timeout=self._stop_timeout)

    async def remove_container(self, container: RunningContainer) -> None:
        await self._client.remove_container(container.id, force=True)

    async def inspect_container(self, container: RunningContainer) -> ContainerInspection:
        inspection = await self._client.inspect_container(container.id)
        health = inspection.State.Health
        return ContainerInspection(
            is_running=inspection.State.Running,
            health_status=HealthStatus.from_engine(health.Status if health else None),
        )

    async def container_logs(self, container: RunningContainer) -> str:
        return await self._client.container_logs(container.id)

    async def close(self) -> None:
        await self._client.close()

    async def _discard(self, container_id: str) -> None:
        """Best-effort removal of a container that failed to start."""
        try:
            await self._client.remove_container(container_id, force=True)
        except Exception as e:
            logger.warning(
                "Failed to remove container after failed start",
                id=container_id[:12],
                error=str(e),
            )
