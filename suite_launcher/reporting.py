"""Aggregation and reporting of suite execution results."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from suite_launcher.models.result import ResultRecord

if TYPE_CHECKING:
    from suite_launcher.orchestrator import SuiteExecution


@dataclass(frozen=True, kw_only=True)
class Summary:
    """Pass/fail counts and formatted lines for a sequence of results."""

    passed_count: int
    failed_count: int
    header: str
    lines: Sequence[str]

    @property
    def total(self) -> int:
        """Number of summarized results."""
        return self.passed_count + self.failed_count


def exit_status(verdict: bool) -> int:
    """Map a suite verdict to a process exit status."""
    return 0 if verdict else 1


def format_result_line(result: ResultRecord) -> str:
    """Format a single result as a summary line."""
    status = "PASSED" if result.is_successful else "FAILED"
    return f" * '{result.descriptor.label}' {status} in {result.duration:.2f}s"


def summarize(results: Sequence[ResultRecord]) -> Summary:
    """Count passed and failed results and format one line per result."""
    failed_count = sum(1 for result in results if result.has_failed)
    passed_count = len(results) - failed_count

    return Summary(
        passed_count=passed_count,
        failed_count=failed_count,
        header=f"Test runs summary ({passed_count} passed, {failed_count} failed):",
        lines=[format_result_line(result) for result in results],
    )


def log_summary(log: logging.Logger, execution: "SuiteExecution") -> None:
    """Log a formatted summary of a suite execution."""
    summary = summarize(execution.results)

    log.info("=" * 80)
    log.info(summary.header)
    log.info("=" * 80)

    for result, line in zip(execution.results, summary.lines, strict=True):
        if result.failure is None:
            log.info("%s", line)
        else:
            log.error("%s", line)
            log.error(
                "  Error: %s: %s", result.failure.type_name, result.failure.message
            )


def format_output(execution: "SuiteExecution") -> dict[str, Any]:
    """Format a suite execution for JSON output."""
    summary = summarize(execution.results)

    return {
        "suite": execution.suite_name,
        "config": execution.environment_config.name,
        "total": summary.total,
        "passed": summary.passed_count,
        "failed": summary.failed_count,
        "success": execution.verdict,
        "duration": execution.duration,
        "results": [
            {
                "environment": result.descriptor.environment,
                "label": result.descriptor.label,
                "status": "passed" if result.is_successful else "failed",
                "duration": result.duration,
                "error": (
                    None
                    if result.failure is None
                    else f"{result.failure.type_name}: {result.failure.message}"
                ),
            }
            for result in execution.results
        ],
    }
