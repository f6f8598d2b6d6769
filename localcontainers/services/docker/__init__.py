"""Docker engine backend.

- transport.py: HTTP over the engine's Unix socket
- client.py: versioned API calls and error mapping
- api_types.py: engine JSON bodies
- logs.py: multiplexed log stream decoding
- ports.py: published port resolution
- runtime.py: ContainerRuntime implementation
"""

from .client import DockerAPIClient, parse_image_reference
from .logs import demultiplex_logs
from .ports import resolve_ports
from .runtime import DockerContainerRuntime, build_create_request
from .transport import DockerTransport, EngineRequest, EngineResponse, MAX_RESPONSE_SIZE

__all__ = [
    "DockerAPIClient",
    "DockerContainerRuntime",
    "DockerTransport",
    "EngineRequest",
    "EngineResponse",
    "MAX_RESPONSE_SIZE",
    "build_create_request",
    "demultiplex_logs",
    "parse_image_reference",
    "resolve_ports",
]
