"""CLI entry point for the emulator test runner."""

import argparse
import asyncio
import json
import logging
import signal
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from emu_test_runner.config import RunnerConfig, describe_errors
from emu_test_runner.emulator import Emulator
from emu_test_runner.orchestrator import SuiteOrchestrator
from emu_test_runner.prober import DependencyProber
from emu_test_runner.registry import (
    HelpRequested,
    UnknownSelectionError,
    build_registry,
    resolve,
)
from emu_test_runner.summary import RunOutcome, format_output, log_results_summary
from emu_test_runner.toolchains.base import ToolchainLoadError
from emu_test_runner.toolchains.loading import (
    available_toolchains,
    load_toolchain_manifest,
)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_MISSING_DEPENDENCY = 3
EXIT_BUILD_FAILED = 4
EXIT_TOOLCHAIN = 5
EXIT_INTERRUPTED = 130

SELECTION_HELP = """\
test suites:
  all       Run all test suites (default)
  kernel    Run kernel unit tests only
  syscalls  Run system call tests only
  stress    Run stress tests only
  quick     Run kernel and syscall tests (skip stress)
  help      Show this help message
"""


def exit_code_for(outcome: RunOutcome) -> int:
    """Map a run's outcome to the process exit code."""
    match outcome.abort_reason:
        case "interrupted":
            return EXIT_INTERRUPTED
        case "build_failed":
            return EXIT_BUILD_FAILED
        case "missing_dependency":
            return EXIT_MISSING_DEPENDENCY
    return EXIT_SUCCESS if outcome.report.overall_success else EXIT_FAILURE


def write_report(path: Path, output: dict[str, Any]) -> None:
    """Write the JSON run report."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(output, indent=2) + "\n")


async def run(
    selection: str,
    runner_config_json: str = "{}",
    toolchain_key: str = "cargo",
    toolchain_config_json: str = "{}",
    report_path: Path | None = None,
    usage: str = "",
) -> int:
    """Run the selected suites and return exit code."""
    log = logging.getLogger("emu_test_runner")

    try:
        runner_config = RunnerConfig.model_validate_json(runner_config_json)
    except ValidationError as e:
        log.error("Invalid runner configuration: %s", describe_errors(e))
        return EXIT_USAGE
    registry = build_registry(runner_config)

    try:
        suites = resolve(selection, registry)
    except UnknownSelectionError as e:
        log.error("%s", e)
        log.error("Use 'help' for usage information")
        return EXIT_USAGE

    if isinstance(suites, HelpRequested):
        print(usage, end="")
        return EXIT_SUCCESS

    log.info("Loading toolchain: %s", toolchain_key)
    try:
        manifest = load_toolchain_manifest(toolchain_key)
        toolchain_config = manifest.parse_config(toolchain_config_json)
    except ToolchainLoadError as e:
        log.error("%s", e)
        log.error("Run aborted before building any suite")
        return EXIT_TOOLCHAIN
    log.debug("Toolchain %s: %s", manifest.name, manifest.description)

    log.info(
        "Selected suites: %s", ", ".join(descriptor.id for descriptor in suites)
    )

    cancel = asyncio.Event()
    loop = asyncio.get_running_loop()
    loop.add_signal_handler(signal.SIGINT, cancel.set)
    try:
        async with manifest.open(toolchain_config) as toolchain:
            emulator = Emulator(config=runner_config.emulator)
            orchestrator = SuiteOrchestrator(
                toolchain=toolchain,
                emulator=emulator,
                prober=DependencyProber(
                    emulator_binary=runner_config.emulator.binary,
                    toolchain=toolchain,
                ),
            )
            outcome = await orchestrator.run(suites, cancel)
    finally:
        loop.remove_signal_handler(signal.SIGINT)

    target = f"{runner_config.emulator.machine}/{runner_config.emulator.cpu}"
    log_results_summary(log, outcome, target=target)

    if report_path is not None:
        write_report(report_path, format_output(outcome))
        log.info("Report written to %s", report_path)

    return exit_code_for(outcome)


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        description="Build and run bare-metal test suites inside an emulator",
        epilog=SELECTION_HELP,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "selection",
        nargs="?",
        default="all",
        help="Suite or group to run (all, kernel, syscalls, stress, quick, help)",
    )
    parser.add_argument(
        "--runner-config",
        default="{}",
        help="JSON configuration for the emulator profile and timeouts",
    )
    parser.add_argument(
        "--toolchain",
        default="cargo",
        help=(
            "Toolchain key used to build suites "
            f"(available: {', '.join(available_toolchains()) or 'none'}; "
            "default: cargo)"
        ),
    )
    parser.add_argument(
        "--toolchain-config",
        default="{}",
        help="JSON configuration for the toolchain",
    )
    parser.add_argument(
        "--report",
        type=Path,
        default=None,
        help="Write a JSON report of the run to this path",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: INFO)",
    )
    return parser


def main() -> None:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    exit_code = asyncio.run(
        run(
            selection=args.selection,
            runner_config_json=args.runner_config,
            toolchain_key=args.toolchain,
            toolchain_config_json=args.toolchain_config,
            report_path=args.report,
            usage=parser.format_help(),
        )
    )
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
