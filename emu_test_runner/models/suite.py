"""Models describing the test suites known to the runner."""

from enum import StrEnum
from typing import Literal

from pydantic import Field

from emu_test_runner.models.base import Model

type SuiteCategory = Literal["functional", "stress"]


class SuiteId(StrEnum):
    """Identifiers of every suite the runner knows, in canonical order."""

    KERNEL = "kernel"
    SYSCALLS = "syscalls"
    STRESS = "stress"


class SuiteDescriptor(Model):
    """Static description of a single test suite."""

    id: SuiteId = Field(..., description="Unique suite identifier")
    title: str = Field(..., description="Human-readable suite name")
    binary: str = Field(..., description="Build target (binary) producing the suite")
    category: SuiteCategory = Field(
        default="functional", description="Stress suites are skipped by 'quick'"
    )
    timeout: float = Field(..., gt=0, description="Wall-clock budget in seconds")
