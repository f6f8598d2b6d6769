"""Readiness strategies.

A configuration carries exactly one of these. Each variant is a small frozen
dataclass; ``strategy_name`` is what timeouts and logs report.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Union

if TYPE_CHECKING:
    from .container import RunningContainer


@dataclass(frozen=True)
class PortWait:
    """Wait until the first published port accepts a TCP connection."""

    strategy_name = "port"


@dataclass(frozen=True)
class HealthCheckWait:
    """Wait until the engine reports the container healthy."""

    strategy_name = "healthCheck"


@dataclass(frozen=True)
class LogWait:
    """Wait until the container output contains ``message`` (plain substring)."""

    message: str
    strategy_name = "log"


@dataclass(frozen=True)
class FixedDelayWait:
    """Sleep for ``duration`` seconds, then report ready."""

    duration: float
    strategy_name = "fixedDelay"

    def __post_init__(self):
        if self.duration < 0:
            raise ValueError("duration must not be negative")


@dataclass(frozen=True)
class CustomWait:
    """Await a caller-supplied coroutine function once with the container."""

    check: Callable[["RunningContainer"], Awaitable[Any]]
    strategy_name = "custom"


WaitStrategy = Union[PortWait, HealthCheckWait, LogWait, FixedDelayWait, CustomWait]
