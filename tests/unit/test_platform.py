"""Unit tests for PlatformRuntime."""

from unittest.mock import AsyncMock

import pytest

from localcontainers.models import ContainerConfiguration
from localcontainers.services import DockerContainerRuntime, PlatformRuntime


class TestPlatformRuntime:
    """Test backend selection and delegation."""

    def test_defaults_to_docker(self):
        """Test the Docker backend is used when none is given."""
        runtime = PlatformRuntime()
        assert isinstance(runtime.underlying, DockerContainerRuntime)

    @pytest.mark.asyncio
    async def test_delegates_every_call(self, mock_runtime, running_container):
        """Test each operation is forwarded to the backend."""
        runtime = PlatformRuntime(runtime=mock_runtime)
        mock_runtime.container_logs = AsyncMock(return_value="hello")
        configuration = ContainerConfiguration(image="nginx")

        await runtime.pull_image("nginx")
        assert await runtime.start_container(configuration) is running_container
        inspection = await runtime.inspect_container(running_container)
        assert await runtime.container_logs(running_container) == "hello"
        await runtime.stop_container(running_container)
        await runtime.remove_container(running_container)
        await runtime.close()

        mock_runtime.pull_image.assert_awaited_once_with("nginx")
        mock_runtime.start_container.assert_awaited_once_with(configuration)
        assert inspection is mock_runtime.inspect_container.return_value
        mock_runtime.stop_container.assert_awaited_once_with(running_container)
        mock_runtime.remove_container.assert_awaited_once_with(running_container)
        mock_runtime.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_async_context_manager(self, mock_runtime):
        """Test leaving the context closes the backend."""
        async with PlatformRuntime(runtime=mock_runtime):
            pass
        mock_runtime.close.assert_awaited_once()
