"""Configuration for the Cargo toolchain."""

from collections.abc import Sequence
from pathlib import Path
from typing import Literal

from pydantic import BaseModel


class CargoConfig(BaseModel):
    """Configuration for the Cargo toolchain.

    Suites are built with ``cargo build --target <target> --bin <binary>``
    and their artifacts located through ``artifact_template``, which may
    reference ``{target}``, ``{profile}`` and ``{binary}``.
    """

    project_root: Path = Path(".")
    target: str = "aarch64-unknown-none-softfloat"
    profile: Literal["debug", "release"] = "debug"
    components: Sequence[str] = ("rust-src",)
    auto_install: bool = True
    cargo: str = "cargo"
    rustup: str = "rustup"
    artifact_template: str = "target/{target}/{profile}/{binary}"
