"""Container value types.

Everything here is an immutable snapshot. A RunningContainer is not a
handle: the runtime (and ultimately the engine) owns the real container,
and later calls refer to it by id.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Sequence, Tuple

from ..config import settings
from .errors import PortNotFound
from .wait import PortWait, WaitStrategy

MAX_PORT = 65535


def _check_port(value: int, name: str) -> None:
    if not 0 <= value <= MAX_PORT:
        raise ValueError(f"{name} must be between 0 and {MAX_PORT}, got {value}")


class TransportProtocol(str, Enum):
    """Transport protocol for port mappings."""

    TCP = "tcp"
    UDP = "udp"


class HealthStatus(str, Enum):
    """Health status of a container as reported by the runtime."""

    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
    STARTING = "starting"
    NOT_CONFIGURED = "not_configured"

    @classmethod
    def from_engine(cls, value: Optional[str]) -> "HealthStatus":
        """Translate the engine's health string; unknown or missing means not configured."""
        if value in ("healthy", "unhealthy", "starting"):
            return cls(value)
        return cls.NOT_CONFIGURED


@dataclass(frozen=True)
class PortMapping:
    """A container port to publish. ``host_port=None`` lets the engine pick one."""

    container_port: int
    host_port: Optional[int] = None
    protocol: TransportProtocol = TransportProtocol.TCP

    def __post_init__(self):
        _check_port(self.container_port, "container_port")
        if self.host_port is not None:
            _check_port(self.host_port, "host_port")
        object.__setattr__(self, "protocol", TransportProtocol(self.protocol))

    @property
    def key(self) -> str:
        """Engine port key, e.g. ``8080/tcp``."""
        return f"{self.container_port}/{self.protocol.value}"


@dataclass(frozen=True)
class ResolvedPortMapping:
    """The host port the engine actually bound for a container port."""

    container_port: int
    host_port: int
    protocol: TransportProtocol = TransportProtocol.TCP


@dataclass(frozen=True)
class VolumeMount:
    """A bind mount from a host path into the container."""

    host_path: str
    container_path: str
    read_only: bool = False


@dataclass(frozen=True)
class HealthCheckConfig:
    """Health check definition. Durations are in seconds."""

    test: Tuple[str, ...]
    interval: float = 10.0
    timeout: float = 5.0
    retries: int = 3
    start_period: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, "test", tuple(self.test))
        if self.retries < 0:
            raise ValueError("retries must not be negative")
        for name in ("interval", "timeout", "start_period"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")


@dataclass(frozen=True)
class ContainerConfiguration:
    """Desired state of a container before it is started.

    Collections are copied into read-only forms on construction so one
    configuration can be shared by concurrent polling tasks.
    """

    image: str
    ports: Sequence[PortMapping] = ()
    environment: Mapping[str, str] = field(default_factory=dict)
    volumes: Sequence[VolumeMount] = ()
    name: Optional[str] = None
    command: Optional[Sequence[str]] = None
    wait_strategy: WaitStrategy = field(default_factory=PortWait)
    health_check: Optional[HealthCheckConfig] = None
    wait_timeout: float = field(default_factory=lambda: settings.wait_timeout)

    def __post_init__(self):
        if not self.image:
            raise ValueError("image must not be empty")
        if self.wait_timeout <= 0:
            raise ValueError("wait_timeout must be positive")

        # Ordered set: drop repeated mappings, keep first occurrence
        ports = tuple(dict.fromkeys(self.ports))
        object.__setattr__(self, "ports", ports)
        object.__setattr__(
            self, "environment", MappingProxyType(dict(self.environment))
        )
        object.__setattr__(self, "volumes", tuple(self.volumes))
        if self.command is not None:
            object.__setattr__(self, "command", tuple(self.command))

    def __hash__(self):
        # MappingProxyType is unhashable; hash the items instead
        return hash(
            (
                self.image,
                self.ports,
                frozenset(self.environment.items()),
                self.volumes,
                self.name,
                self.command,
                self.wait_strategy,
                self.health_check,
                self.wait_timeout,
            )
        )


@dataclass(frozen=True)
class RunningContainer:
    """Snapshot of a started container. Equality is by value."""

    id: str
    name: str
    image: str
    host: str = "127.0.0.1"
    ports: Tuple[ResolvedPortMapping, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "ports", tuple(self.ports))

    def mapped_port(self, container_port: int) -> int:
        """Return the host port bound to ``container_port``.

        Raises:
            PortNotFound: if the container port was not published
        """
        for mapping in self.ports:
            if mapping.container_port == container_port:
                return mapping.host_port
        raise PortNotFound(container_port)


@dataclass(frozen=True)
class ContainerInspection:
    """Current state read from the runtime. Never cached."""

    is_running: bool
    health_status: HealthStatus
