"""Internet connectivity probe."""

import asyncio
import logging

logger = logging.getLogger(__name__)


async def check_connectivity(host: str = "github.com", port: int = 443, timeout: float = 3.0) -> bool:
    """
    Resolve and connect to a well-known host.

    Args:
        host: Hostname to probe
        port: TCP port to connect to
        timeout: Seconds allowed for resolve + connect

    Returns:
        True if a TCP connection could be established
    """
    try:
        _, writer = await asyncio.wait_for(
            asyncio.open_connection(host, port),
            timeout=timeout
        )
    except (OSError, asyncio.TimeoutError) as e:
        logger.debug(f"Connectivity check to {host}:{port} failed: {e}")
        return False

    writer.close()
    try:
        await writer.wait_closed()
    except OSError:
        pass
    return True
