"""Aggregation and reporting of suite results."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Literal

from emu_test_runner.models.result import Classification, RunRecord


type AbortReason = Literal["missing_dependency", "build_failed", "interrupted"]

STATUS_SYMBOLS: dict[Classification, str] = {
    "passed": "✓",
    "failed": "✗",
    "timed_out": "⏱",
    "artifact_missing": "!",
}


@dataclass
class RunSummary:
    """Running counters for one invocation of the runner.

    Timed out suites and suites without an artifact count as failed and
    are also tracked separately.
    """

    total: int = 0
    passed: int = 0
    failed: int = 0
    timed_out: int = 0
    artifact_missing: int = 0


@dataclass(frozen=True, kw_only=True)
class SummaryReport:
    """Final view of a run's counters."""

    total: int
    passed: int
    failed: int
    timed_out: int
    artifact_missing: int

    @property
    def overall_success(self) -> bool:
        """True if at least one suite ran and none failed."""
        return self.failed == 0 and self.total > 0


@dataclass
class Aggregator:
    """Sole owner of the run summary, fed one record per suite in order."""

    _summary: RunSummary = field(default_factory=RunSummary)
    _records: list[RunRecord] = field(default_factory=list)

    @property
    def records(self) -> Sequence[RunRecord]:
        return tuple(self._records)

    def record(self, run_record: RunRecord) -> None:
        """Append a finished suite's record and update the counters."""
        self._records.append(run_record)
        self._summary.total += 1

        match run_record.classification:
            case "passed":
                self._summary.passed += 1
            case "timed_out":
                self._summary.failed += 1
                self._summary.timed_out += 1
            case "artifact_missing":
                self._summary.failed += 1
                self._summary.artifact_missing += 1
            case "failed":
                self._summary.failed += 1

    def summarize(self) -> SummaryReport:
        """Snapshot the counters."""
        return SummaryReport(
            total=self._summary.total,
            passed=self._summary.passed,
            failed=self._summary.failed,
            timed_out=self._summary.timed_out,
            artifact_missing=self._summary.artifact_missing,
        )


@dataclass(frozen=True, kw_only=True)
class RunOutcome:
    """Everything a finished (or aborted) run produced."""

    records: Sequence[RunRecord]
    report: SummaryReport
    abort_reason: AbortReason | None = None
    abort_message: str | None = None

    @property
    def success(self) -> bool:
        return self.abort_reason is None and self.report.overall_success


def log_record(log: logging.Logger, record: RunRecord) -> None:
    """Log a single suite's result as soon as it is known."""
    match record.classification:
        case "passed":
            log.info(
                "[PASS] %s completed successfully (%.2fs)",
                record.title,
                record.duration,
            )
        case "timed_out":
            log.warning(
                "[WARN] %s timed out after %.2fs", record.title, record.duration
            )
        case "artifact_missing":
            log.error("[FAIL] %s: Binary not found", record.title)
        case "failed":
            log.error(
                "[FAIL] %s failed with exit code %s", record.title, record.exit_code
            )


def log_results_summary(
    log: logging.Logger, outcome: RunOutcome, target: str | None = None
) -> None:
    """Log a formatted summary of every suite's result and the totals."""
    report = outcome.report

    log.info("=" * 80)
    log.info("Test Results Summary:")
    if target:
        log.info("Target: %s", target)
    log.info("=" * 80)

    for record in outcome.records:
        symbol = STATUS_SYMBOLS.get(record.classification, "?")
        log.info(
            "%s %s: %s (%.2fs)",
            symbol,
            record.suite_id,
            record.classification,
            record.duration,
        )
        if record.message:
            log.info("  Message: %s", record.message)

    log.info("Total tests: %d", report.total)
    log.info("Passed: %d", report.passed)
    log.info("Failed: %d", report.failed)
    if report.timed_out:
        log.info("  of which timed out: %d", report.timed_out)
    if report.artifact_missing:
        log.info("  of which missing artifact: %d", report.artifact_missing)
    log.info("=" * 80)

    match outcome.abort_reason:
        case "interrupted":
            log.warning("Test execution interrupted by user")
        case "build_failed":
            log.error("Run aborted, build failed: %s", outcome.abort_message)
        case "missing_dependency":
            log.error("Run aborted, missing dependency: %s", outcome.abort_message)
        case None if report.overall_success:
            log.info("ALL TESTS PASSED!")
        case None if report.total == 0:
            log.error("No test suites were run")
        case None:
            log.error("Some tests failed. Please review the output above.")


def format_output(outcome: RunOutcome) -> dict[str, Any]:
    """Format a run's results for JSON output."""
    report = outcome.report
    return {
        "total": report.total,
        "passed": report.passed,
        "failed": report.failed,
        "timed_out": report.timed_out,
        "artifact_missing": report.artifact_missing,
        "aborted": outcome.abort_reason,
        "abort_message": outcome.abort_message,
        "results": [
            {
                "suite": record.suite_id.value,
                "title": record.title,
                "status": record.classification,
                "duration": record.duration,
                "exit_code": record.exit_code,
                "message": record.message,
            }
            for record in outcome.records
        ],
    }
