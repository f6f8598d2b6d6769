"""Data models for localcontainers."""

from .container import (
    ContainerConfiguration,
    ContainerInspection,
    HealthCheckConfig,
    HealthStatus,
    PortMapping,
    ResolvedPortMapping,
    RunningContainer,
    TransportProtocol,
    VolumeMount,
)
from .wait import (
    CustomWait,
    FixedDelayWait,
    HealthCheckWait,
    LogWait,
    PortWait,
    WaitStrategy,
)
from .errors import (
    ContainerError,
    ContainerErrorType,
    ContainerNotFound,
    ContainerRuntimeError,
    HealthCheckFailed,
    ImagePullFailed,
    PortNotFound,
    SetupFailed,
    StartFailed,
    WaitStrategyTimedOut,
)
from .spec import ContainerKey, ContainerSetup, ContainerSpec

__all__ = [
    # Container models
    "ContainerConfiguration",
    "ContainerInspection",
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
    # Definitions
    "ContainerKey",
    "ContainerSetup",
    "ContainerSpec",
]
