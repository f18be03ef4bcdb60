"""Cargo toolchain module."""

from emu_test_runner.toolchains.cargo.config import CargoConfig
from emu_test_runner.toolchains.cargo.manifest import cargo_manifest
from emu_test_runner.toolchains.cargo.toolchain import CargoToolchain

__all__ = ["CargoConfig", "CargoToolchain", "cargo_manifest"]
