"""Backend-selecting runtime."""

from typing import Optional

from ..models.container import (
    ContainerConfiguration,
    ContainerInspection,
    RunningContainer,
)
from .docker.runtime import DockerContainerRuntime
from .interfaces import ContainerRuntime


class PlatformRuntime(ContainerRuntime):
    """Delegates every call to a backend chosen at construction.

    Without an explicit ``runtime`` the Docker backend is used, so test code
    stays the same wherever a Docker-compatible socket is available.
    """

    def __init__(self, runtime: Optional[ContainerRuntime] = None):
        self._underlying = runtime if runtime is not None else DockerContainerRuntime()

    @property
    def underlying(self) -> ContainerRuntime:
        return self._underlying

    async def pull_image(self, reference: str) -> None:
        await self._underlying.pull_image(reference)

    async def start_container(self, configuration: ContainerConfiguration) -> RunningContainer:
        return await self._underlying.start_container(configuration)

    async def stop_container(self, container: RunningContainer) -> None:
        await self._underlying.stop_container(container)

    async def remove_container(self, container: RunningContainer) -> None:
        await self._underlying.remove_container(container)

    async def inspect_container(self, container: RunningContainer) -> ContainerInspection:
        return await self._underlying.inspect_container(container)

    async def container_logs(self, container: RunningContainer) -> str:
        return await self._underlying.container_logs(container)

    async def close(self) -> None:
        await self._underlying.close()
