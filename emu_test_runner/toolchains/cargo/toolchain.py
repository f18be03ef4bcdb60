"""Cargo and rustup toolchain implementation."""

import asyncio
import logging
import re
from collections.abc import AsyncGenerator, Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path

from emu_test_runner.models.suite import SuiteDescriptor
from emu_test_runner.processes import kill, wait_bounded
from emu_test_runner.toolchains.base import (
    BuildFailedError,
    Component,
    ComponentInstallError,
    Toolchain,
)
from emu_test_runner.toolchains.cargo.config import CargoConfig

log = logging.getLogger(__name__)

# rustup lists host components as "<name>-<host triple>"
HOST_TRIPLE = re.compile(
    r"(?:x86_64|i[3-6]86|aarch64|arm\w*|powerpc\w*|riscv\w+|s390x|loongarch64)"
    r"-\w+-\w+(?:-\w+)?"
)


def is_listed(component: Component, line: str) -> bool:
    """Match one line of `rustup target|component list --installed`."""
    if line == component.name:
        return True
    if component.kind == "target":
        return False
    prefix = f"{component.name}-"
    return (
        line.startswith(prefix)
        and HOST_TRIPLE.fullmatch(line.removeprefix(prefix)) is not None
    )


@dataclass(frozen=True, kw_only=True)
class CargoToolchain(Toolchain):
    """Builds suites with Cargo and manages components with rustup."""

    config: CargoConfig

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: CargoConfig
    ) -> AsyncGenerator["CargoToolchain", None]:
        """Create toolchain for the given configuration."""
        yield cls(config=config)

    @property
    def executables(self) -> Sequence[str]:
        return [self.config.cargo, self.config.rustup]

    @property
    def required_components(self) -> Sequence[Component]:
        return [
            Component(kind="target", name=self.config.target),
            *(
                Component(kind="component", name=name)
                for name in self.config.components
            ),
        ]

    @property
    def auto_install(self) -> bool:
        return self.config.auto_install

    async def is_installed(self, component: Component) -> bool:
        """Check the rustup list of installed targets or components."""
        returncode, output = await self._rustup(component.kind, "list", "--installed")
        if returncode != 0:
            log.warning(
                "rustup %s list failed with exit code %d", component.kind, returncode
            )
            return False

        return any(is_listed(component, line.strip()) for line in output.splitlines())

    async def install(self, component: Component) -> None:
        """Install a target or component through rustup."""
        returncode, output = await self._rustup(component.kind, "add", component.name)
        if returncode != 0:
            raise ComponentInstallError(
                f"rustup {component.kind} add {component.name} exited with "
                f"{returncode}: {output.strip()}"
            )

    def artifact_path(self, descriptor: SuiteDescriptor) -> Path:
        relative = self.config.artifact_template.format(
            target=self.config.target,
            profile=self.config.profile,
            binary=descriptor.binary,
        )
        return self.config.project_root / relative

    async def build(self, descriptor: SuiteDescriptor) -> None:
        """Run cargo build for the suite binary, streaming its output."""
        command = [
            self.config.cargo,
            "build",
            "--target",
            self.config.target,
            "--bin",
            descriptor.binary,
        ]
        if self.config.profile == "release":
            command.append("--release")

        log.debug("Running %s", " ".join(command))
        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                cwd=self.config.project_root,
                stdin=asyncio.subprocess.DEVNULL,
            )
        except OSError as e:
            raise BuildFailedError(descriptor, str(e)) from e

        returncode = await wait_bounded(process)
        if returncode != 0:
            raise BuildFailedError(descriptor, f"cargo exited with {returncode}")

    async def _rustup(self, *args: str) -> tuple[int, str]:
        """Run a rustup subcommand and capture its combined output."""
        process = await asyncio.create_subprocess_exec(
            self.config.rustup,
            *args,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.STDOUT,
        )
        try:
            stdout, _ = await process.communicate()
        except asyncio.CancelledError:
            await kill(process)
            raise
        return await process.wait(), stdout.decode(errors="replace")
