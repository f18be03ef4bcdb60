"""Sequential driver for building, running and judging test suites."""

import asyncio
import logging
from collections.abc import Coroutine, Sequence
from contextlib import suppress
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from emu_test_runner.builder import ensure_artifact
from emu_test_runner.classifier import classify
from emu_test_runner.emulator import Emulator
from emu_test_runner.models.result import RawOutcome, RunRecord
from emu_test_runner.models.suite import SuiteDescriptor
from emu_test_runner.prober import DependencyProber, MissingDependencyError
from emu_test_runner.summary import (
    AbortReason,
    Aggregator,
    RunOutcome,
    log_record,
)
from emu_test_runner.toolchains.base import BuildFailedError, Toolchain

log = logging.getLogger(__name__)


class RunInterruptedError(Exception):
    """Raised when the cancellation event fires during a run."""


async def until_cancelled[T](
    coro: Coroutine[Any, Any, T], cancel: asyncio.Event
) -> T:
    """Await a coroutine unless the cancellation event fires first.

    Raises:
        RunInterruptedError: If cancel is set by the time the wait ends, even
            when the coroutine finished in the same step; an unfinished task
            is cancelled and awaited first

    """
    if cancel.is_set():
        coro.close()
        raise RunInterruptedError

    task = asyncio.ensure_future(coro)
    waiter = asyncio.ensure_future(cancel.wait())
    try:
        await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
    except asyncio.CancelledError:
        task.cancel()
        raise
    finally:
        waiter.cancel()

    if not cancel.is_set():
        return task.result()

    if task.done():
        if not task.cancelled():
            task.exception()  # mark retrieved
    else:
        task.cancel()
        with suppress(asyncio.CancelledError):
            await task
    raise RunInterruptedError


@dataclass(frozen=True, kw_only=True)
class SuiteOrchestrator:
    """Runs selected suites one after another and aggregates their results."""

    toolchain: Toolchain
    emulator: Emulator
    prober: DependencyProber

    async def run(
        self,
        suites: Sequence[SuiteDescriptor],
        cancel: asyncio.Event | None = None,
    ) -> RunOutcome:
        """Probe dependencies, then build, run and classify every suite in order.

        Per-suite failures are recorded and the run continues. A missing
        dependency, a failed build or the cancellation event stop the run;
        whatever was recorded until then is still summarized.

        Args:
            suites: Suites to run, in execution order
            cancel: Event that interrupts the run when set

        Returns:
            Records, summary counters and the abort reason, if any

        """
        cancel = cancel or asyncio.Event()
        aggregator = Aggregator()

        try:
            await until_cancelled(self.prober.probe(), cancel)

            log.info("Starting test execution...")
            for descriptor in suites:
                record = await until_cancelled(self._run_suite(descriptor), cancel)
                aggregator.record(record)
                log_record(log, record)
        except MissingDependencyError as e:
            log.error("%s", e)
            return self._outcome(aggregator, "missing_dependency", str(e))
        except BuildFailedError as e:
            log.error("%s", e)
            return self._outcome(aggregator, "build_failed", str(e))
        except RunInterruptedError:
            log.warning("Test execution interrupted by user")
            return self._outcome(aggregator, "interrupted", "Interrupted by user")

        return self._outcome(aggregator)

    async def _run_suite(self, descriptor: SuiteDescriptor) -> RunRecord:
        """Build, run and classify a single suite."""
        artifact = await ensure_artifact(self.toolchain, descriptor)

        started_at = datetime.now(UTC)
        outcome: RawOutcome | None = None
        if artifact is not None:
            log.info("Running %s...", descriptor.title)
            outcome = await self.emulator.run(artifact, descriptor.timeout)
        finished_at = datetime.now(UTC)

        classification = classify(outcome, self.emulator.config.success_exit_code)

        message: str | None = None
        match classification, outcome:
            case "artifact_missing", _:
                message = (
                    f"Artifact not found at {self.toolchain.artifact_path(descriptor)}"
                )
            case "timed_out", _:
                message = f"Exceeded timeout of {descriptor.timeout:g}s"
            case "failed", RawOutcome(exit_code=exit_code):
                message = f"Exited with code {exit_code}"

        return RunRecord(
            suite_id=descriptor.id,
            title=descriptor.title,
            started_at=started_at,
            finished_at=finished_at,
            classification=classification,
            exit_code=outcome.exit_code if outcome else None,
            timed_out=outcome.timed_out if outcome else False,
            message=message,
        )

    @staticmethod
    def _outcome(
        aggregator: Aggregator,
        abort_reason: AbortReason | None = None,
        abort_message: str | None = None,
    ) -> RunOutcome:
        return RunOutcome(
            records=aggregator.records,
            report=aggregator.summarize(),
            abort_reason=abort_reason,
            abort_message=abort_message,
        )
