"""Process-wide shared containers.

Use these for expensive containers where per-suite start-up is too slow.
The first request for a key starts its container; later requests reuse it.
Everything still running is stopped and removed when the process exits.
"""

import asyncio
import atexit
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator, Dict, Iterable, Optional, Type

import structlog

from ..models.container import RunningContainer
from ..models.spec import ContainerKey
from ..services.interfaces import ContainerRuntime
from ..services.platform import PlatformRuntime
from ..services.wait.executor import WaitStrategyExecutor
from .context import ContainerTestContext
from .lifecycle import provision, remove_quietly

logger = structlog.get_logger(__name__)


@dataclass
class _SharedEntry:
    container: RunningContainer
    runtime: ContainerRuntime
    owned_runtime: bool


class SharedContainerManager:
    """Caches one running container per ContainerKey subclass.

    Concurrent first requests for the same key start it once. The cache is
    tied to the event loop that started the containers; share it across
    tests with a session-scoped loop.
    """

    def __init__(
        self,
        executor: Optional[WaitStrategyExecutor] = None,
        register_atexit: bool = True,
    ):
        self._executor = executor
        self._register_atexit = register_atexit
        self._entries: Dict[Type[ContainerKey], _SharedEntry] = {}
        self._locks: Dict[Type[ContainerKey], asyncio.Lock] = {}
        self._default_runtime: Optional[PlatformRuntime] = None
        self._cleanup_registered = False

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    async def container(
        self, key: Type[ContainerKey], runtime: Optional[ContainerRuntime] = None
    ) -> RunningContainer:
        """Return the shared container for ``key``, starting it if needed."""
        entry = self._entries.get(key)
        if entry is not None:
            return entry.container

        lock = self._locks.setdefault(key, asyncio.Lock())
        async with lock:
            entry = self._entries.get(key)
            if entry is not None:
                return entry.container

            owned = runtime is None
            if owned:
                runtime = self._get_default_runtime()
            self._register_cleanup_if_needed()

            logger.info("Starting shared container", key=key.__name__)
            container = await provision(key, runtime, self._executor)
            self._entries[key] = _SharedEntry(container, runtime, owned)
            return container

    async def context(
        self,
        keys: Iterable[Type[ContainerKey]],
        runtime: Optional[ContainerRuntime] = None,
    ) -> ContainerTestContext:
        """Resolve every key and return them as a ContainerTestContext."""
        resolved = {}
        for key in keys:
            resolved[key] = await self.container(key, runtime)
        return ContainerTestContext(resolved)

    async def shutdown_all(self) -> None:
        """Stop and remove every shared container. Failures are logged."""
        entries = list(self._entries.items())
        self._entries.clear()
        for key, entry in entries:
            logger.info(
                "Stopping shared container", key=key.__name__, id=entry.container.id[:12]
            )
            await remove_quietly(entry.container, entry.runtime)

        if self._default_runtime is not None:
            await self._default_runtime.close()
            self._default_runtime = None

    def _get_default_runtime(self) -> PlatformRuntime:
        if self._default_runtime is None:
            self._default_runtime = PlatformRuntime()
        return self._default_runtime

    def _register_cleanup_if_needed(self) -> None:
        if self._cleanup_registered or not self._register_atexit:
            return
        atexit.register(self._shutdown_at_exit)
        self._cleanup_registered = True

    def _shutdown_at_exit(self) -> None:
        if not self._entries:
            return
        # The default runtime's HTTP pool belongs to a loop that has closed
        self._default_runtime = None
        fresh = None
        for entry in self._entries.values():
            if entry.owned_runtime:
                fresh = fresh or self._get_default_runtime()
                entry.runtime = fresh
        asyncio.run(self.shutdown_all())


shared_containers = SharedContainerManager()


@asynccontextmanager
async def shared_container_scope(
    *keys: Type[ContainerKey],
    runtime: Optional[ContainerRuntime] = None,
    manager: Optional[SharedContainerManager] = None,
) -> AsyncIterator[ContainerTestContext]:
    """Bind a context of shared containers without releasing them on exit."""
    manager = manager or shared_containers
    context = await manager.context(keys, runtime)
    with context.bind():
        yield context
