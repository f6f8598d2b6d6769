"""Fixtures for tests against a real Docker-compatible engine."""

import os

import pytest
import pytest_asyncio

from localcontainers.config import settings
from localcontainers.services.docker import (
    DockerAPIClient,
    DockerContainerRuntime,
    DockerTransport,
)

SOCKET_PATH = settings.docker.socket_path()


def pytest_collection_modifyitems(config, items):
    if os.path.exists(SOCKET_PATH):
        return
    skip = pytest.mark.skip(reason=f"no container engine socket at {SOCKET_PATH}")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip)


@pytest_asyncio.fixture
async def docker_runtime():
    """DockerContainerRuntime talking to the local engine."""
    transport = DockerTransport(socket_path=SOCKET_PATH)
    runtime = DockerContainerRuntime(client=DockerAPIClient(transport=transport))
    yield runtime
    await runtime.close()
