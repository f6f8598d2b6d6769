"""localcontainers: OCI container lifecycles for test dependencies.

Start a container, wait until it is ready and tear it down again, through
a Docker-compatible engine socket.
"""

from .config import settings
from .localstack import LocalStackContainer, LocalStackEndpoint
from .models import (
    ContainerConfiguration,
    ContainerError,
    ContainerErrorType,
    ContainerInspection,
    ContainerKey,
    ContainerNotFound,
    ContainerRuntimeError,
    ContainerSetup,
    ContainerSpec,
    CustomWait,
    FixedDelayWait,
    HealthCheckConfig,
    HealthCheckFailed,
    HealthCheckWait,
    HealthStatus,
    ImagePullFailed,
    LogWait,
    PortMapping,
    PortNotFound,
    PortWait,
    ResolvedPortMapping,
    RunningContainer,
    SetupFailed,
    StartFailed,
    TransportProtocol,
    VolumeMount,
    WaitStrategy,
    WaitStrategyTimedOut,
)
from .services import (
    ContainerRuntime,
    DockerContainerRuntime,
    PlatformRuntime,
    WaitStrategyExecutor,
    wait_until_ready,
)
from .testing import (
    ContainerTestContext,
    SharedContainerManager,
    container_scope,
    shared_container_scope,
)
from .utils import setup_logging

__version__ = "0.1.0"

__all__ = [
    "settings",
    "setup_logging",
    # Models
    "ContainerConfiguration",
    "ContainerInspection",
    "ContainerKey",
    "ContainerSetup",
    "ContainerSpec",
    "HealthCheckConfig",
    "HealthStatus",
    "PortMapping",
    "ResolvedPortMapping",
    "RunningContainer",
    "TransportProtocol",
    "VolumeMount",
    # Wait strategies
    "CustomWait",
    "FixedDelayWait",
    "HealthCheckWait",
    "LogWait",
    "PortWait",
    "WaitStrategy",
    # Errors
    "ContainerError",
    "ContainerErrorType",
    "ContainerNotFound",
    "ContainerRuntimeError",
    "HealthCheckFailed",
    "ImagePullFailed",
    "PortNotFound",
    "SetupFailed",
    "StartFailed",
    "WaitStrategyTimedOut",
    # Runtimes
    "ContainerRuntime",
    "DockerContainerRuntime",
    "PlatformRuntime",
    "WaitStrategyExecutor",
    "wait_until_ready",
    # Test scoping
    "ContainerTestContext",
    "SharedContainerManager",
    "container_scope",
    "shared_container_scope",
    # LocalStack
    "LocalStackContainer",
    "LocalStackEndpoint",
]
