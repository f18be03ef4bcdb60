"""Test factories for generating test data."""

from datetime import UTC, datetime, timedelta

from polyfactory import Use
from polyfactory.factories import DataclassFactory
from polyfactory.factories.pydantic_factory import ModelFactory

from emu_test_runner.models.result import RawOutcome, RunRecord
from emu_test_runner.models.suite import SuiteDescriptor


class SuiteDescriptorFactory(ModelFactory[SuiteDescriptor]):
    """Factory for SuiteDescriptor."""

    category = "functional"
    timeout = 60.0


class RawOutcomeFactory(DataclassFactory[RawOutcome]):
    """Factory for RawOutcome."""

    exit_code = 0
    timed_out = False


class RunRecordFactory(DataclassFactory[RunRecord]):
    """Factory for RunRecord."""

    started_at = Use(lambda: datetime(2024, 1, 1, tzinfo=UTC))
    finished_at = Use(lambda: datetime(2024, 1, 1, tzinfo=UTC) + timedelta(seconds=2))
    classification = "passed"
    exit_code = 0
    timed_out = False
    message = None
