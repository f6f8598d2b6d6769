"""Error taxonomy for container lifecycle operations."""

from enum import Enum
from typing import Optional


class ContainerErrorType(str, Enum):
    """Error type enumeration."""

    IMAGE_PULL_FAILED = "image_pull_failed"
    START_FAILED = "start_failed"
    HEALTH_CHECK_FAILED = "health_check_failed"
    WAIT_TIMED_OUT = "wait_timed_out"
    PORT_NOT_FOUND = "port_not_found"
    RUNTIME_ERROR = "runtime_error"
    SETUP_FAILED = "setup_failed"
    CONTAINER_NOT_FOUND = "container_not_found"


class ContainerError(Exception):
    """Base exception for container lifecycle failures."""

    def __init__(
        self,
        message: str,
        error_type: ContainerErrorType = ContainerErrorType.RUNTIME_ERROR,
    ):
        self.message = message
        self.error_type = error_type
        super().__init__(message)


class ImagePullFailed(ContainerError):
    """The requested image could not be pulled."""

    def __init__(self, image: str, reason: str):
        self.image = image
        self.reason = reason
        super().__init__(
            message=f"Failed to pull image {image}: {reason}",
            error_type=ContainerErrorType.IMAGE_PULL_FAILED,
        )


class StartFailed(ContainerError):
    """The container failed to start."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(
            message=f"Container failed to start: {reason}",
            error_type=ContainerErrorType.START_FAILED,
        )


class HealthCheckFailed(ContainerError):
    """The container's health check reported unhealthy."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(
            message=f"Health check failed: {reason}",
            error_type=ContainerErrorType.HEALTH_CHECK_FAILED,
        )


class WaitStrategyTimedOut(ContainerError):
    """A wait strategy condition was not met before its deadline."""

    def __init__(self, strategy: str, timeout: float):
        self.strategy = strategy
        self.timeout = timeout
        super().__init__(
            message=f"Wait strategy '{strategy}' timed out after {timeout:g}s",
            error_type=ContainerErrorType.WAIT_TIMED_OUT,
        )


class PortNotFound(ContainerError):
    """No resolved mapping exists for the requested container port."""

    def __init__(self, container_port: int):
        self.container_port = container_port
        super().__init__(
            message=f"No mapping found for container port {container_port}",
            error_type=ContainerErrorType.PORT_NOT_FOUND,
        )


class ContainerRuntimeError(ContainerError):
    """The engine or its transport failed unexpectedly."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message=message, error_type=ContainerErrorType.RUNTIME_ERROR)


class SetupFailed(ContainerError):
    """A post-start setup step failed."""

    def __init__(self, step: str, reason: str):
        self.step = step
        self.reason = reason
        super().__init__(
            message=f"Setup step '{step}' failed: {reason}",
            error_type=ContainerErrorType.SETUP_FAILED,
        )


class ContainerNotFound(ContainerError):
    """The container does not exist (e.g. it was already removed)."""

    def __init__(self, container_id: str):
        self.container_id = container_id
        super().__init__(
            message=f"Container not found: {container_id}",
            error_type=ContainerErrorType.CONTAINER_NOT_FOUND,
        )
