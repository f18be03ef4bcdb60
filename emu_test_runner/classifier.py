"""Classification of raw emulator outcomes."""

from emu_test_runner.models.result import Classification, RawOutcome


def classify(outcome: RawOutcome | None, success_exit_code: int = 0) -> Classification:
    """Map how a suite ended to its verdict.

    A missing outcome means the artifact was never produced. A forced
    termination wins over any exit code the child may have reported.
    """
    if outcome is None:
        return "artifact_missing"
    if outcome.timed_out:
        return "timed_out"
    if outcome.exit_code == success_exit_code:
        return "passed"
    return "failed"
