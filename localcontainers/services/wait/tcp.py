"""TCP reachability probe."""

import asyncio
from typing import Optional

import structlog

from ...config import settings

logger = structlog.get_logger(__name__)


async def check_tcp_port(host: str, port: int, timeout: Optional[float] = None) -> bool:
    """Return True if a TCP connection to (host, port) completes in time.

    The connect runs on the event loop's non-blocking socket and is abandoned
    after ``timeout`` seconds, so the caller is never blocked indefinitely.
    Connection errors of any kind count as unreachable.

    Args:
        host: Address to connect to
        port: TCP port
        timeout: Bounded wait for the connect, defaults to the configured value
    """
    if timeout is None:
        timeout = settings.wait_tcp_connect_timeout

    try:
        _, writer = await asyncio.wait_for(
            asyncio.open_connection(host, port), timeout=timeout
        )
    except (OSError, asyncio.TimeoutError) as e:
        logger.debug("TCP probe failed", host=host, port=port, error=str(e) or type(e).__name__)
        return False

    writer.close()
    try:
        await writer.wait_closed()
    except OSError:
        pass
    return True
