"""Configuration for the emulator and suite timeouts."""

from collections.abc import Mapping, Sequence

from pydantic import BaseModel, Field, PositiveFloat, ValidationError

from emu_test_runner.models.suite import SuiteId


class EmulatorConfig(BaseModel):
    """Hardware profile the emulator boots every suite artifact with."""

    binary: str = "qemu-system-aarch64"
    machine: str = "virt"
    cpu: str = "cortex-a72"
    cores: int = Field(default=4, ge=1)
    memory: str = "2G"
    # Exit status reported when a suite signals clean termination
    success_exit_code: int = 0
    extra_args: Sequence[str] = ()


class RunnerConfig(BaseModel):
    """Top-level runner configuration, loaded from JSON on the command line."""

    emulator: EmulatorConfig = Field(default_factory=EmulatorConfig)
    functional_timeout: float = Field(default=60, gt=0)
    stress_timeout: float = Field(default=300, gt=0)
    timeout_overrides: Mapping[SuiteId, PositiveFloat] = Field(default_factory=dict)


def describe_errors(error: ValidationError) -> str:
    """Flatten a validation error into one log-friendly line."""
    return "; ".join(
        f"{'.'.join(map(str, detail['loc'])) or '(root)'}: {detail['msg']}"
        for detail in error.errors()
    )
