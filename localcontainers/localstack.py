"""LocalStack helpers.

LocalStack serves every AWS service through one gateway port, so all
endpoint helpers resolve to the same URL.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Sequence

from .models.container import ContainerConfiguration, PortMapping, RunningContainer
from .models.wait import LogWait

DEFAULT_IMAGE = "localstack/localstack:latest"
DEFAULT_GATEWAY_PORT = 4566
READY_MESSAGE = "Ready."


@dataclass(frozen=True)
class LocalStackContainer:
    """Builds a ContainerConfiguration for a LocalStack instance."""

    image: str = DEFAULT_IMAGE
    services: Sequence[str] = ()
    environment: Mapping[str, str] = field(default_factory=dict)
    gateway_port: int = DEFAULT_GATEWAY_PORT

    def __post_init__(self):
        object.__setattr__(self, "services", tuple(self.services))
        object.__setattr__(
            self, "environment", MappingProxyType(dict(self.environment))
        )

    def __hash__(self):
        return hash(
            (
                self.image,
                self.services,
                frozenset(self.environment.items()),
                self.gateway_port,
            )
        )

    def configuration(self) -> ContainerConfiguration:
        env: Dict[str, str] = dict(self.environment)
        if self.services:
            env["SERVICES"] = ",".join(self.services)
        # Pro images configure themselves from the auth token
        if "LOCALSTACK_AUTH_TOKEN" not in env:
            env.setdefault("DEBUG", "1")

        return ContainerConfiguration(
            image=self.image,
            ports=[PortMapping(self.gateway_port)],
            environment=env,
            wait_strategy=LogWait(READY_MESSAGE),
        )


class LocalStackEndpoint:
    """AWS endpoint URLs for a running LocalStack container."""

    def __init__(self, container: RunningContainer, gateway_port: int = DEFAULT_GATEWAY_PORT):
        self.container = container
        self.gateway_port = gateway_port

    def gateway_endpoint(self) -> str:
        """Return e.g. ``http://127.0.0.1:49153``.

        Raises:
            PortNotFound: if the gateway port was not published
        """
        host_port = self.container.mapped_port(self.gateway_port)
        return f"http://{self.container.host}:{host_port}"

    def aws_endpoint(self) -> str:
        """Endpoint URL for AWS SDK or CLI configuration."""
        return self.gateway_endpoint()

    def endpoint(self, service: str) -> str:
        """Endpoint URL for ``service``."""
        return self.gateway_endpoint()
