"""Tests for build coordination."""

from pathlib import Path
from unittest.mock import Mock

import pytest

from emu_test_runner.builder import ensure_artifact
from emu_test_runner.testing.factories import SuiteDescriptorFactory
from emu_test_runner.toolchains.base import BuildFailedError, Toolchain


@pytest.fixture
def toolchain_mock() -> Mock:
    """Create mock toolchain."""
    return Mock(spec=Toolchain)


async def test_returns_artifact_path(toolchain_mock: Mock, tmp_path: Path) -> None:
    """Returns the artifact path when the build produced it."""
    descriptor = SuiteDescriptorFactory.build()
    artifact = tmp_path / "kernel_tests"
    artifact.write_bytes(b"")
    toolchain_mock.artifact_path.return_value = artifact

    result = await ensure_artifact(toolchain_mock, descriptor)

    assert result == artifact
    toolchain_mock.build.assert_called_once_with(descriptor)
    toolchain_mock.artifact_path.assert_called_once_with(descriptor)


async def test_returns_none_when_artifact_missing(
    toolchain_mock: Mock, tmp_path: Path
) -> None:
    """Returns None when the build succeeded without producing a file."""
    toolchain_mock.artifact_path.return_value = tmp_path / "missing"

    result = await ensure_artifact(toolchain_mock, SuiteDescriptorFactory.build())

    assert result is None


async def test_propagates_build_failure(toolchain_mock: Mock) -> None:
    """Lets BuildFailedError escape to the caller."""
    descriptor = SuiteDescriptorFactory.build(binary="stress_tests")
    toolchain_mock.build.side_effect = BuildFailedError(descriptor, "exit 101")

    with pytest.raises(BuildFailedError, match="Failed to build stress_tests"):
        await ensure_artifact(toolchain_mock, descriptor)

    toolchain_mock.artifact_path.assert_not_called()
