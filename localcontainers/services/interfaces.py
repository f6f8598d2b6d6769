"""Service interfaces.

Backends implement ContainerRuntime; orchestration code and the readiness
engine depend only on this interface.
"""

from abc import ABC, abstractmethod

from ..models.container import (
    ContainerConfiguration,
    ContainerInspection,
    RunningContainer,
)


class ContainerRuntime(ABC):
    """A backend that can pull images and manage container lifecycles."""

    @abstractmethod
    async def pull_image(self, reference: str) -> None:
        """Pull an OCI image so it is available locally."""

    @abstractmethod
    async def start_container(self, configuration: ContainerConfiguration) -> RunningContainer:
        """Create and start a container from the given configuration."""

    @abstractmethod
    async def stop_container(self, container: RunningContainer) -> None:
        """Stop a running container."""

    @abstractmethod
    async def remove_container(self, container: RunningContainer) -> None:
        """Remove a container and its associated resources."""

    @abstractmethod
    async def inspect_container(self, container: RunningContainer) -> ContainerInspection:
        """Return the container's current state."""

    @abstractmethod
    async def container_logs(self, container: RunningContainer) -> str:
        """Return the container's log output as plain text."""

    async def close(self) -> None:
        """Release backend resources. No-op by default."""
        return None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()
