"""Fixtures for integration tests."""

from pathlib import Path
from typing import Protocol

import pytest


class MakeScriptFn(Protocol):
    """Protocol for executable script creation function."""

    def __call__(self, name: str, body: str) -> Path:
        """Create an executable shell script and return its path."""


@pytest.fixture
def bin_dir(tmp_path: Path) -> Path:
    """Directory holding stand-in executables."""
    path = tmp_path / "bin"
    path.mkdir()
    return path


@pytest.fixture
def make_script(bin_dir: Path) -> MakeScriptFn:
    """Return a function to create executable shell scripts."""

    def _make(name: str, body: str) -> Path:
        script = bin_dir / name
        script.write_text(f"#!/bin/sh\n{body}\n")
        script.chmod(0o755)
        return script

    return _make
