"""Readiness engine.

Blocks until a started container satisfies its configuration's wait
strategy. Polling strategies race a condition loop against a wall-clock
deadline measured from the start of the wait; whichever task finishes
first decides the outcome and the other is cancelled.
"""

import asyncio
from typing import Any, Awaitable, Callable, Optional

import structlog

from ...config import settings
from ...models.container import ContainerConfiguration, HealthStatus, RunningContainer
from ...models.errors import (
    ContainerRuntimeError,
    HealthCheckFailed,
    PortNotFound,
    WaitStrategyTimedOut,
)
from ...models.wait import (
    CustomWait,
    FixedDelayWait,
    HealthCheckWait,
    LogWait,
    PortWait,
)
from ..interfaces import ContainerRuntime
from .tcp import check_tcp_port

logger = structlog.get_logger(__name__)

Condition = Callable[[], Awaitable[bool]]


class WaitStrategyExecutor:
    """Runs a container's wait strategy to completion or failure.

    Holds no per-wait state; one executor can serve concurrent waits.
    """

    def __init__(
        self,
        port_poll_interval: Optional[float] = None,
        poll_interval: Optional[float] = None,
        tcp_connect_timeout: Optional[float] = None,
    ):
        """Initialize the executor.

        Args:
            port_poll_interval: Seconds between TCP probes (default 0.5)
            poll_interval: Seconds between inspect/logs polls (default 1.0)
            tcp_connect_timeout: Bounded wait for each TCP connect (default 0.5)
        """
        wait_config = settings.wait
        self.port_poll_interval = port_poll_interval or wait_config.wait_port_poll_interval
        self.poll_interval = poll_interval or wait_config.wait_poll_interval
        self.tcp_connect_timeout = (
            tcp_connect_timeout or wait_config.wait_tcp_connect_timeout
        )

    async def wait_until_ready(
        self,
        container: RunningContainer,
        configuration: ContainerConfiguration,
        runtime: ContainerRuntime,
    ) -> Any:
        """Wait for the container according to ``configuration.wait_strategy``.

        Args:
            container: Snapshot returned by ``runtime.start_container``
            configuration: Configuration the container was started from
            runtime: Backend used for inspect and logs calls

        Returns:
            The custom check's return value for CustomWait, otherwise None

        Raises:
            WaitStrategyTimedOut: a polling strategy missed its deadline
            PortNotFound: the port strategy found no published port
            HealthCheckFailed: the engine reported the container unhealthy
        """
        strategy = configuration.wait_strategy
        timeout = configuration.wait_timeout
        name = getattr(strategy, "strategy_name", type(strategy).__name__)
        logger.info(
            "Waiting for container",
            id=container.id[:12],
            strategy=name,
            timeout=timeout,
        )

        result = None
        if isinstance(strategy, PortWait):
            await self._wait_for_port(container, timeout)
        elif isinstance(strategy, HealthCheckWait):
            await self._wait_for_health_check(container, timeout, runtime)
        elif isinstance(strategy, LogWait):
            await self._wait_for_log(container, strategy.message, timeout, runtime)
        elif isinstance(strategy, FixedDelayWait):
            await asyncio.sleep(strategy.duration)
        elif isinstance(strategy, CustomWait):
            result = await strategy.check(container)
        else:
            raise TypeError(f"Unsupported wait strategy: {strategy!r}")

        logger.info("Container ready", id=container.id[:12], strategy=name)
        return result

    # Port strategy

    async def _wait_for_port(self, container: RunningContainer, timeout: float) -> None:
        if not container.ports:
            raise PortNotFound(0)
        first = container.ports[0]

        async def port_open() -> bool:
            return await check_tcp_port(
                container.host, first.host_port, timeout=self.tcp_connect_timeout
            )

        await self._poll_with_timeout("port", timeout, self.port_poll_interval, port_open)

    # Health check strategy

    async def _wait_for_health_check(
        self, container: RunningContainer, timeout: float, runtime: ContainerRuntime
    ) -> None:
        async def healthy() -> bool:
            inspection = await runtime.inspect_container(container)
            if inspection.health_status is HealthStatus.HEALTHY:
                return True
            if inspection.health_status is HealthStatus.UNHEALTHY:
                raise HealthCheckFailed(reason="Container health check reported unhealthy")
            return False

        await self._poll_with_timeout("healthCheck", timeout, self.poll_interval, healthy)

    # Log strategy

    async def _wait_for_log(
        self,
        container: RunningContainer,
        message: str,
        timeout: float,
        runtime: ContainerRuntime,
    ) -> None:
        async def logged() -> bool:
            try:
                logs = await runtime.container_logs(container)
            except ContainerRuntimeError as e:
                logger.debug("Log poll failed", id=container.id[:12], error=str(e))
                return False
            return message in logs

        await self._poll_with_timeout("log", timeout, self.poll_interval, logged)

    # Polling

    async def _poll_with_timeout(
        self,
        strategy: str,
        timeout: float,
        poll_interval: float,
        condition: Condition,
    ) -> None:
        """Race ``condition`` polling against a deadline.

        A condition that raises fails the wait immediately; the loop only
        retries a condition that returned False.
        """

        async def deadline() -> None:
            await asyncio.sleep(timeout)
            raise WaitStrategyTimedOut(strategy=strategy, timeout=timeout)

        async def poll() -> None:
            attempt = 0
            while True:
                attempt += 1
                if await condition():
                    return
                logger.debug("Condition not met", strategy=strategy, attempt=attempt)
                await asyncio.sleep(poll_interval)

        deadline_task = asyncio.create_task(deadline())
        poll_task = asyncio.create_task(poll())
        tasks = (deadline_task, poll_task)
        try:
            done, _ = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

        if poll_task in done:
            poll_task.result()
        else:
            deadline_task.result()


async def wait_until_ready(
    container: RunningContainer,
    configuration: ContainerConfiguration,
    runtime: ContainerRuntime,
) -> Any:
    """Module-level shortcut using an executor built from the current settings."""
    return await WaitStrategyExecutor().wait_until_ready(container, configuration, runtime)
