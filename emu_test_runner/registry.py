"""Suite registry and selection of suites from a command-line token."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from emu_test_runner.config import RunnerConfig
from emu_test_runner.models.suite import SuiteDescriptor, SuiteId

HELP_TOKEN = "help"


class UnknownSelectionError(Exception):
    """Raised when a selection token matches no suite or group."""

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(
            f"Unknown test suite: '{token}'. Available: {', '.join(selection_tokens())}"
        )


@dataclass(frozen=True)
class HelpRequested:
    """Marker returned when the user asked for usage information."""


def build_registry(config: RunnerConfig) -> Mapping[SuiteId, SuiteDescriptor]:
    """Build the suite descriptors, in canonical order, for the given config."""
    overrides = config.timeout_overrides
    descriptors = [
        SuiteDescriptor(
            id=SuiteId.KERNEL,
            title="Kernel Unit Tests",
            binary="kernel_tests",
            timeout=overrides.get(SuiteId.KERNEL, config.functional_timeout),
        ),
        SuiteDescriptor(
            id=SuiteId.SYSCALLS,
            title="System Call Integration Tests",
            binary="syscall_tests",
            timeout=overrides.get(SuiteId.SYSCALLS, config.functional_timeout),
        ),
        SuiteDescriptor(
            id=SuiteId.STRESS,
            title="Stress and Stability Tests",
            binary="stress_tests",
            category="stress",
            timeout=overrides.get(SuiteId.STRESS, config.stress_timeout),
        ),
    ]
    return {descriptor.id: descriptor for descriptor in descriptors}


def selection_groups(
    registry: Mapping[SuiteId, SuiteDescriptor],
) -> Mapping[str, Sequence[SuiteId]]:
    """Return the named aliases and the suites each one expands to."""
    return {
        "all": tuple(registry),
        "quick": tuple(
            suite_id
            for suite_id, descriptor in registry.items()
            if descriptor.category != "stress"
        ),
    }


def selection_tokens() -> Sequence[str]:
    """Every token accepted on the command line."""
    return ("all", *(suite_id.value for suite_id in SuiteId), "quick", HELP_TOKEN)


def resolve(
    token: str, registry: Mapping[SuiteId, SuiteDescriptor]
) -> Sequence[SuiteDescriptor] | HelpRequested:
    """Resolve a selection token to the ordered suites it names.

    Args:
        token: Group alias ("all", "quick"), suite id, or "help"
        registry: Descriptors keyed by suite id, in canonical order

    Returns:
        The selected descriptors in execution order, or HelpRequested

    Raises:
        UnknownSelectionError: If the token names nothing known

    """
    if token == HELP_TOKEN:
        return HelpRequested()

    groups = selection_groups(registry)
    if token in groups:
        suite_ids = groups[token]
    elif token in SuiteId:
        suite_ids = (SuiteId(token),)
    else:
        raise UnknownSelectionError(token)

    if not suite_ids:
        raise UnknownSelectionError(token)

    return [registry[suite_id] for suite_id in suite_ids]
