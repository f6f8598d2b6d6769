"""Readiness checks for started containers."""

from .executor import WaitStrategyExecutor, wait_until_ready
from .tcp import check_tcp_port

__all__ = ["WaitStrategyExecutor", "check_tcp_port", "wait_until_ready"]
