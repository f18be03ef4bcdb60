"""Models for suite execution outcomes."""

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from emu_test_runner.models.suite import SuiteId

type Classification = Literal["passed", "failed", "timed_out", "artifact_missing"]


@dataclass(frozen=True, kw_only=True)
class RawOutcome:
    """How the emulator child process terminated.

    When ``timed_out`` is set the child was killed and ``exit_code`` carries
    no meaning.
    """

    exit_code: int | None
    timed_out: bool = False


@dataclass(frozen=True, kw_only=True)
class RunRecord:
    """Result of one suite execution attempt."""

    suite_id: SuiteId
    title: str
    started_at: datetime
    finished_at: datetime
    classification: Classification
    exit_code: int | None = None
    timed_out: bool = False
    message: str | None = None

    @property
    def duration(self) -> float:
        """Elapsed wall-clock seconds."""
        return (self.finished_at - self.started_at).total_seconds()
