"""Container runtime services."""

from .docker import DockerAPIClient, DockerContainerRuntime, DockerTransport
from .interfaces import ContainerRuntime
from .platform import PlatformRuntime
from .wait import WaitStrategyExecutor, check_tcp_port, wait_until_ready

__all__ = [
    "ContainerRuntime",
    "DockerAPIClient",
    "DockerContainerRuntime",
    "DockerTransport",
    "PlatformRuntime",
    "WaitStrategyExecutor",
    "check_tcp_port",
    "wait_until_ready",
]
