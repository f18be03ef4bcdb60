"""Tests for result classification."""

import pytest

from emu_test_runner.classifier import classify
from emu_test_runner.models.result import RawOutcome


def test_missing_outcome_is_artifact_missing() -> None:
    """No outcome means the artifact was never produced."""
    assert classify(None) == "artifact_missing"


def test_clean_exit_passes() -> None:
    """Exit code 0 is a pass."""
    assert classify(RawOutcome(exit_code=0)) == "passed"


@pytest.mark.parametrize("exit_code", [1, 2, 3, 255, -9])
def test_nonzero_exit_fails(exit_code: int) -> None:
    """Any other exit code is a failure."""
    assert classify(RawOutcome(exit_code=exit_code)) == "failed"


@pytest.mark.parametrize("exit_code", [None, 0, 1, -9])
def test_timeout_wins_over_exit_code(exit_code: int | None) -> None:
    """A forced termination is a timeout whatever the exit code."""
    assert classify(RawOutcome(exit_code=exit_code, timed_out=True)) == "timed_out"


def test_custom_success_exit_code() -> None:
    """Honours a non-zero clean termination value."""
    assert classify(RawOutcome(exit_code=33), success_exit_code=33) == "passed"
    assert classify(RawOutcome(exit_code=0), success_exit_code=33) == "failed"
