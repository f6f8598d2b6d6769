"""Container definitions used by the test-scoping helpers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar, Sequence

from .container import ContainerConfiguration, RunningContainer


class ContainerSetup(ABC):
    """A post-start step run once the container is ready.

    Implementations can seed data, run migrations or deploy fixtures.
    """

    @abstractmethod
    async def set_up(self, container: RunningContainer) -> None:
        """Prepare the running container."""

    async def tear_down(self, container: RunningContainer) -> None:
        """Undo ``set_up`` before the container is stopped. No-op by default."""
        return None


@dataclass(frozen=True)
class ContainerSpec:
    """A configuration bundled with its setup steps."""

    configuration: ContainerConfiguration
    setups: Sequence[ContainerSetup] = ()

    def __post_init__(self):
        object.__setattr__(self, "setups", tuple(self.setups))


class ContainerKey:
    """Base class for type-safe container definitions.

    Subclasses declare a ``spec`` and are used as lookup keys::

        class Postgres(ContainerKey):
            spec = ContainerSpec(
                ContainerConfiguration(
                    image="postgres:16",
                    ports=[PortMapping(5432)],
                    environment={"POSTGRES_PASSWORD": "test"},
                )
            )
    """

    spec: ClassVar[ContainerSpec]
