"""Cargo toolchain manifest."""

from emu_test_runner.toolchains.base import ToolchainManifest
from emu_test_runner.toolchains.cargo.config import CargoConfig
from emu_test_runner.toolchains.cargo.toolchain import CargoToolchain

cargo_manifest = ToolchainManifest(
    name="cargo",
    description="Rust bare-metal builds with cargo, components managed by rustup",
    config_cls=CargoConfig,
    toolchain_factory=CargoToolchain.from_config,
)
