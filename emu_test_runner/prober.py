"""Pre-flight checks for the emulator and toolchain."""

import logging
import shutil
from dataclasses import dataclass

from emu_test_runner.toolchains.base import Toolchain

log = logging.getLogger(__name__)


class MissingDependencyError(Exception):
    """Raised when a required executable or component is unavailable."""

    def __init__(self, name: str, hint: str | None = None) -> None:
        self.name = name
        message = f"{name} not found"
        if hint:
            message = f"{message}. {hint}"
        super().__init__(message)


@dataclass(frozen=True, kw_only=True)
class DependencyProber:
    """Verifies everything a run needs is present before any suite starts."""

    emulator_binary: str
    toolchain: Toolchain

    async def probe(self) -> None:
        """Check the emulator, toolchain executables and components, in order.

        Raises:
            MissingDependencyError: On the first dependency that cannot be
                found or installed

        """
        log.info("Checking dependencies...")

        if shutil.which(self.emulator_binary) is None:
            raise MissingDependencyError(
                self.emulator_binary, "Please install the emulator for the target"
            )

        for executable in self.toolchain.executables:
            if shutil.which(executable) is None:
                raise MissingDependencyError(executable)

        for component in self.toolchain.required_components:
            if not await self.toolchain.ensure_component(component):
                raise MissingDependencyError(str(component))

        log.info("All dependencies satisfied")
