"""Execution of suite artifacts inside the hardware emulator."""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from emu_test_runner.config import EmulatorConfig
from emu_test_runner.models.result import RawOutcome
from emu_test_runner.processes import wait_bounded

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class Emulator:
    """Boots a suite artifact as the kernel image of an emulated machine."""

    config: EmulatorConfig

    def command(self, artifact: Path) -> Sequence[str]:
        """Build the emulator command line for an artifact."""
        return [
            self.config.binary,
            "-machine",
            self.config.machine,
            "-cpu",
            self.config.cpu,
            "-smp",
            str(self.config.cores),
            "-m",
            self.config.memory,
            "-serial",
            "stdio",
            "-display",
            "none",
            *self.config.extra_args,
            "-kernel",
            str(artifact),
        ]

    async def run(self, artifact: Path, timeout: float) -> RawOutcome:
        """Run an artifact until it exits or its timeout expires.

        The serial console is inherited from this process, so suite output
        appears live on stdout.

        Args:
            artifact: Path to the built suite image
            timeout: Wall-clock bound in seconds

        Returns:
            The exit code, or timed_out=True if the child had to be killed

        """
        command = self.command(artifact)
        log.debug("Starting emulator: %s", " ".join(command))

        process = await asyncio.create_subprocess_exec(
            *command,
            stdin=asyncio.subprocess.DEVNULL,
            stderr=asyncio.subprocess.DEVNULL,
        )
        exit_code = await wait_bounded(process, timeout)

        if exit_code is None:
            return RawOutcome(exit_code=process.returncode, timed_out=True)
        return RawOutcome(exit_code=exit_code)
