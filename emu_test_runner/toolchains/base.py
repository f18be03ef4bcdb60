"""Toolchain plugin interface: the build and installer ABC and its manifest."""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ValidationError

from emu_test_runner.config import describe_errors
from emu_test_runner.models.suite import SuiteDescriptor

log = logging.getLogger(__name__)


class BuildFailedError(Exception):
    """Raised when the build step for a suite fails."""

    def __init__(self, descriptor: SuiteDescriptor, reason: str) -> None:
        self.descriptor = descriptor
        super().__init__(f"Failed to build {descriptor.binary}: {reason}")


class ComponentInstallError(Exception):
    """Raised when a toolchain component cannot be installed."""


class ToolchainLoadError(Exception):
    """Raised when a toolchain cannot be set up before any suite runs."""


class ToolchainConfigError(ToolchainLoadError):
    """Raised when a toolchain's JSON configuration does not validate."""

    def __init__(self, name: str, error: ValidationError) -> None:
        self.name = name
        super().__init__(
            f"Invalid {name} toolchain configuration: {describe_errors(error)}"
        )


@dataclass(frozen=True)
class Component:
    """A toolchain component that must be present before building."""

    kind: Literal["target", "component"]
    name: str

    def __str__(self) -> str:
        return f"{self.kind} {self.name}"


@dataclass(frozen=True, kw_only=True)
class Toolchain(ABC):
    """Abstract build system and component installer for suite artifacts."""

    @property
    @abstractmethod
    def executables(self) -> Sequence[str]:
        """Executables that must be on PATH for this toolchain to work."""

    @property
    @abstractmethod
    def required_components(self) -> Sequence[Component]:
        """Components that must be installed before building."""

    @property
    def auto_install(self) -> bool:
        """Whether missing components may be installed on demand."""
        return False

    @abstractmethod
    async def is_installed(self, component: Component) -> bool:
        """Check if a component is installed."""

    @abstractmethod
    async def install(self, component: Component) -> None:
        """Install a component.

        Raises:
            ComponentInstallError: If the installer reports failure

        """

    @abstractmethod
    def artifact_path(self, descriptor: SuiteDescriptor) -> Path:
        """Deterministic location of a suite's built artifact."""

    @abstractmethod
    async def build(self, descriptor: SuiteDescriptor) -> None:
        """Build the artifact for a suite.

        Raises:
            BuildFailedError: If the build system reports failure

        """

    async def ensure_component(self, component: Component) -> bool:
        """Make sure a component is present, installing it at most once.

        Returns:
            True if the component is present after the optional install

        """
        if await self.is_installed(component):
            return True

        if not self.auto_install:
            return False

        log.warning("%s not installed. Installing...", component)
        try:
            await self.install(component)
        except ComponentInstallError as e:
            log.error("Installation of %s failed: %s", component, e)
            return False

        return await self.is_installed(component)


@dataclass(frozen=True, kw_only=True)
class ToolchainManifest[ConfigT: BaseModel]:
    """Entry-point payload of a toolchain plugin.

    Plugins register one manifest under the `emu_test_runner.toolchains`
    entry-point group. The CLI parses `--toolchain-config` with
    `parse_config` and opens the toolchain for the duration of a run.
    """

    name: str
    description: str
    config_cls: type[ConfigT]
    toolchain_factory: Callable[[ConfigT], AbstractAsyncContextManager[Toolchain]]

    def parse_config(self, raw: str) -> ConfigT:
        """Validate a JSON configuration document for this toolchain.

        Raises:
            ToolchainConfigError: If the document is not valid JSON or does not
                match the configuration model

        """
        try:
            return self.config_cls.model_validate_json(raw)
        except ValidationError as e:
            raise ToolchainConfigError(self.name, e) from e

    def open(self, config: ConfigT) -> AbstractAsyncContextManager[Toolchain]:
        """Create the toolchain, releasing it when the context exits."""
        return self.toolchain_factory(config)
