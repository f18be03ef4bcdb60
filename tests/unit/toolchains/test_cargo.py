"""Tests for Cargo toolchain configuration and paths."""

from pathlib import Path

import pytest

from emu_test_runner.testing.factories import SuiteDescriptorFactory
from emu_test_runner.toolchains.base import Component
from emu_test_runner.toolchains.cargo import CargoConfig, CargoToolchain
from emu_test_runner.toolchains.cargo.toolchain import is_listed


def test_artifact_path_debug() -> None:
    """Places debug artifacts under target/<triple>/debug."""
    toolchain = CargoToolchain(config=CargoConfig(project_root=Path("/src/os")))
    descriptor = SuiteDescriptorFactory.build(binary="kernel_tests")

    assert toolchain.artifact_path(descriptor) == Path(
        "/src/os/target/aarch64-unknown-none-softfloat/debug/kernel_tests"
    )


def test_artifact_path_custom_template() -> None:
    """Honours a custom template and profile."""
    config = CargoConfig(
        project_root=Path("/src/os"),
        target="riscv64gc-unknown-none-elf",
        profile="release",
        artifact_template="out/{profile}/{target}-{binary}.elf",
    )
    toolchain = CargoToolchain(config=config)
    descriptor = SuiteDescriptorFactory.build(binary="stress_tests")

    assert toolchain.artifact_path(descriptor) == Path(
        "/src/os/out/release/riscv64gc-unknown-none-elf-stress_tests.elf"
    )


def test_required_components() -> None:
    """Requires the compilation target first, then each component."""
    config = CargoConfig(components=["rust-src", "llvm-tools-preview"])
    toolchain = CargoToolchain(config=config)

    assert toolchain.required_components == [
        Component(kind="target", name="aarch64-unknown-none-softfloat"),
        Component(kind="component", name="rust-src"),
        Component(kind="component", name="llvm-tools-preview"),
    ]


def test_executables_and_auto_install() -> None:
    """Exposes configured executables and install policy."""
    config = CargoConfig(cargo="/opt/cargo", rustup="/opt/rustup", auto_install=False)
    toolchain = CargoToolchain(config=config)

    assert toolchain.executables == ["/opt/cargo", "/opt/rustup"]
    assert toolchain.auto_install is False


async def test_from_config_yields_toolchain() -> None:
    """Creates a toolchain inside the managed context."""
    config = CargoConfig()

    async with CargoToolchain.from_config(config) as toolchain:
        assert toolchain.config is config


@pytest.mark.parametrize(
    ("component", "line", "expected"),
    [
        (Component("target", "aarch64-unknown-none"), "aarch64-unknown-none", True),
        (
            Component("target", "aarch64-unknown-none"),
            "aarch64-unknown-none-softfloat",
            False,
        ),
        (Component("component", "rust-src"), "rust-src", True),
        (Component("component", "cargo"), "cargo-x86_64-unknown-linux-gnu", True),
        (Component("component", "rustc"), "rustc-aarch64-apple-darwin", True),
        (Component("component", "rust"), "rust-src", False),
        (
            Component("component", "rust"),
            "rust-analysis-x86_64-unknown-linux-gnu",
            False,
        ),
        (Component("component", "llvm-tools"), "llvm-tools-preview", False),
    ],
)
def test_is_listed(component: Component, line: str, expected: bool) -> None:
    """Matches names exactly, allowing only a host triple after components."""
    assert is_listed(component, line) is expected
