"""Build coordination for suite artifacts."""

import logging
from pathlib import Path

from emu_test_runner.models.suite import SuiteDescriptor
from emu_test_runner.toolchains.base import Toolchain

log = logging.getLogger(__name__)


async def ensure_artifact(
    toolchain: Toolchain, descriptor: SuiteDescriptor
) -> Path | None:
    """Build a suite and locate its artifact.

    Args:
        toolchain: Toolchain that knows how to build the suite
        descriptor: Suite to build

    Returns:
        Path to the artifact, or None if the build produced no file

    Raises:
        BuildFailedError: If the build step fails

    """
    log.info("Building %s (%s)...", descriptor.title, descriptor.binary)
    await toolchain.build(descriptor)

    artifact = toolchain.artifact_path(descriptor)
    if not artifact.is_file():
        log.error("%s: artifact not found at %s", descriptor.title, artifact)
        return None

    log.info("%s built", descriptor.title)
    return artifact
