"""Pytest configuration and shared fixtures."""

import inspect
import os
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple, Union
from unittest.mock import AsyncMock

import httpx
import pytest

# Set test environment before importing config. Only unix:// engines are
# supported, so a remote DOCKER_HOST from the shell is ignored here.
if not os.environ.get("DOCKER_HOST", "unix://").startswith("unix://"):
    os.environ.pop("DOCKER_HOST")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from localcontainers.models import (
    ContainerInspection,
    HealthStatus,
    ResolvedPortMapping,
    RunningContainer,
)
from localcontainers.services.docker import DockerAPIClient, DockerTransport
from localcontainers.services.interfaces import ContainerRuntime
from localcontainers.services.wait import WaitStrategyExecutor

API_VERSION = "v1.47"

Responder = Callable[
    [httpx.Request], Union[httpx.Response, Awaitable[httpx.Response]]
]


class FakeEngine:
    """In-memory Docker engine for httpx.MockTransport.

    Routes are registered per (method, unversioned path); every request is
    recorded for later assertions.
    """

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self._routes: Dict[Tuple[str, str], Responder] = {}

    def on(
        self,
        method: str,
        path: str,
        status: int = 200,
        json: Any = None,
        content: Optional[bytes] = None,
        handler: Optional[Responder] = None,
    ) -> None:
        """Answer ``method path`` with a fixed response or a handler."""
        if handler is None:
            def handler(request, status=status, json=json, content=content):
                if json is not None:
                    return httpx.Response(status, json=json)
                return httpx.Response(status, content=content or b"")

        self._routes[(method, f"/{API_VERSION}{path}")] = handler

    async def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self._routes.get((request.method, request.url.path))
        if handler is None:
            return httpx.Response(
                500, json={"message": f"unexpected {request.method} {request.url.path}"}
            )
        response = handler(request)
        if inspect.isawaitable(response):
            response = await response
        return response

    def requests_to(self, method: str, path: str) -> List[httpx.Request]:
        return [
            r
            for r in self.requests
            if r.method == method and r.url.path == f"/{API_VERSION}{path}"
        ]

    def transport(self, **kwargs) -> DockerTransport:
        kwargs.setdefault("socket_path", "/tmp/localcontainers-test.sock")
        kwargs.setdefault("api_version", API_VERSION)
        return DockerTransport(transport=httpx.MockTransport(self.handle), **kwargs)

    def client(self, **kwargs) -> DockerAPIClient:
        return DockerAPIClient(transport=self.transport(**kwargs))


@pytest.fixture
def engine():
    """Fake engine; build clients with ``engine.client()``."""
    return FakeEngine()


@pytest.fixture
def running_container():
    """A started container with one published TCP port."""
    return RunningContainer(
        id="3f4e1c2b9a8d7e6f5a4b3c2d1e0f9a8b7c6d5e4f3a2b1c0d9e8f7a6b5c4d3e2f",
        name="test-container",
        image="nginx:latest",
        host="127.0.0.1",
        ports=[ResolvedPortMapping(container_port=80, host_port=32768)],
    )


@pytest.fixture
def mock_runtime(running_container):
    """ContainerRuntime double whose calls all succeed."""
    runtime = AsyncMock(spec=ContainerRuntime)
    runtime.pull_image = AsyncMock(return_value=None)
    runtime.start_container = AsyncMock(return_value=running_container)
    runtime.stop_container = AsyncMock(return_value=None)
    runtime.remove_container = AsyncMock(return_value=None)
    runtime.inspect_container = AsyncMock(
        return_value=ContainerInspection(
            is_running=True, health_status=HealthStatus.NOT_CONFIGURED
        )
    )
    runtime.container_logs = AsyncMock(return_value="")
    runtime.close = AsyncMock(return_value=None)
    return runtime


@pytest.fixture
def fast_executor():
    """Readiness engine with short poll intervals."""
    return WaitStrategyExecutor(
        port_poll_interval=0.01, poll_interval=0.01, tcp_connect_timeout=0.2
    )
