"""Discovery of toolchain plugins registered as entry points."""

import logging
from importlib.metadata import EntryPoint, entry_points
from typing import Any

from emu_test_runner.toolchains.base import ToolchainLoadError, ToolchainManifest

log = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "emu_test_runner.toolchains"


class ToolchainNotFoundError(ToolchainLoadError):
    """Raised when no installed plugin provides the requested toolchain."""

    def __init__(self, key: str, available: list[str]) -> None:
        self.key = key
        self.available = available
        super().__init__(
            f"Unknown toolchain: '{key}'. "
            f"Available: {', '.join(available) or 'none installed'}"
        )


def available_toolchains() -> list[str]:
    """Keys of every installed toolchain plugin, sorted."""
    return sorted({entry.name for entry in entry_points(group=ENTRY_POINT_GROUP)})


def _load(entry: EntryPoint) -> ToolchainManifest[Any]:
    try:
        manifest = entry.load()
    except (ImportError, AttributeError) as e:
        raise ToolchainLoadError(
            f"Toolchain '{entry.name}' could not be imported from {entry.value}: {e}"
        ) from e

    if not isinstance(manifest, ToolchainManifest):
        raise ToolchainLoadError(
            f"Toolchain '{entry.name}' ({entry.value}) is not a ToolchainManifest"
        )
    return manifest


def load_toolchain_manifest(key: str) -> ToolchainManifest[Any]:
    """Load the manifest of an installed toolchain plugin.

    Args:
        key: Entry point name in the `emu_test_runner.toolchains` group

    Raises:
        ToolchainNotFoundError: If no plugin is registered under the key
        ToolchainLoadError: If the plugin cannot be imported or does not
            provide a ToolchainManifest

    """
    matches = entry_points(group=ENTRY_POINT_GROUP, name=key)
    if not matches:
        raise ToolchainNotFoundError(key, available_toolchains())

    entry = next(iter(matches))
    log.debug("Loading toolchain '%s' from %s", key, entry.value)
    return _load(entry)
