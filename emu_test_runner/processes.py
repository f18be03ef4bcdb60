"""Helpers for awaiting child processes with bounded waits."""

import asyncio
import logging
from contextlib import suppress

log = logging.getLogger(__name__)


async def kill(process: asyncio.subprocess.Process) -> None:
    """Forcibly terminate a child process and reap it."""
    with suppress(ProcessLookupError):
        process.kill()
    await process.wait()


async def wait_bounded(
    process: asyncio.subprocess.Process, timeout: float | None = None
) -> int | None:
    """Wait for a child process to exit.

    Args:
        process: Running child process
        timeout: Wall-clock bound in seconds, None to wait indefinitely

    Returns:
        The exit code, or None if the bound expired and the child was killed

    Raises:
        asyncio.CancelledError: After killing the child, if the wait is cancelled

    """
    try:
        return await asyncio.wait_for(process.wait(), timeout)
    except TimeoutError:
        log.debug("Process %d exceeded %ss, killing", process.pid, timeout)
        await kill(process)
        return None
    except asyncio.CancelledError:
        log.debug("Wait on process %d cancelled, killing", process.pid)
        await kill(process)
        raise
