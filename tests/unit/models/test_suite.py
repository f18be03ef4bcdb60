"""Tests for suite and result models."""

from datetime import UTC, datetime, timedelta

import pytest
from pydantic import ValidationError

from emu_test_runner.models.suite import SuiteDescriptor, SuiteId
from emu_test_runner.testing.factories import RunRecordFactory


def test_descriptor_is_immutable() -> None:
    """Descriptors cannot be changed after creation."""
    descriptor = SuiteDescriptor(
        id=SuiteId.KERNEL, title="Kernel Unit Tests", binary="kernel_tests", timeout=60
    )

    with pytest.raises(ValidationError):
        descriptor.timeout = 5  # type: ignore[misc]


@pytest.mark.parametrize("timeout", [0, -1])
def test_descriptor_requires_positive_timeout(timeout: float) -> None:
    """Rejects non-positive timeouts."""
    with pytest.raises(ValidationError):
        SuiteDescriptor(
            id=SuiteId.STRESS, title="Stress", binary="stress_tests", timeout=timeout
        )


def test_descriptor_rejects_unknown_suite() -> None:
    """Only known suite identifiers are accepted."""
    with pytest.raises(ValidationError):
        SuiteDescriptor.model_validate(
            {"id": "cosmic", "title": "COSMIC", "binary": "cosmic_tests", "timeout": 60}
        )


def test_record_duration() -> None:
    """Derives duration from the timestamps."""
    started = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)
    record = RunRecordFactory.build(
        started_at=started, finished_at=started + timedelta(seconds=61.5)
    )

    assert record.duration == 61.5
