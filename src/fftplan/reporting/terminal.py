"""Terminal reporter printing one line per job and a closing summary."""
from __future__ import annotations

import time
from collections import Counter
from typing import TYPE_CHECKING, Sequence

import click

from .base import Reporter

if TYPE_CHECKING:
    from fftplan.jobs.models import JobFile, JobResult


STATUS_COLORS = {
    "passed": "green",
    "failed": "red",
    "error": "yellow",
}


class TerminalReporter(Reporter):
    """Streams job outcomes to stdout as they finish."""

    def __init__(self, *, use_color: bool = True) -> None:
        self._use_color = use_color
        self._started = 0.0
        self._problems: list[tuple[int, "JobResult"]] = []

    def on_start(self, job_file: "JobFile", total: int) -> None:
        self._started = time.perf_counter()
        self._problems = []
        header = (
            f"Starting run: {total} job(s) from {job_file.source.name} "
            f"provider={job_file.provider or 'default'} effort={job_file.effort.name.lower()}"
        )
        click.echo(self._paint(header, "cyan"))

    def on_job_result(self, result: "JobResult", index: int, total: int) -> None:
        status = result.status.upper()
        click.echo(
            f"[{index}/{total}] {result.job.identifier()} -> "
            f"{self._paint(status, STATUS_COLORS.get(result.status))} "
            f"({result.duration_s * 1000:.2f} ms, {result.calls} call(s))"
        )
        if result.passed:
            return
        self._problems.append((index, result))
        for line in _explain(result):
            click.echo(f"    {line}")

    def on_complete(self, results: Sequence["JobResult"]) -> None:
        counts = Counter(result.status for result in results)
        elapsed = time.perf_counter() - self._started
        summary = (
            f"Summary: total={len(results)} passed={counts['passed']} failed={counts['failed']} "
            f"errors={counts['error']} duration={elapsed:.2f}s"
        )
        click.echo(self._paint(summary, "cyan"))
        if not self._problems:
            return
        click.echo(self._paint("Failure details:", "red"))
        for index, result in self._problems:
            click.echo(f"  [{index}] {result.job.identifier()} -> {result.status}")
            for line in _explain(result):
                click.echo(f"    {line}")

    def _paint(self, text: str, color: str | None) -> str:
        if self._use_color and color:
            return click.style(text, fg=color)
        return text


def _explain(result: "JobResult") -> list[str]:
    job = result.job
    lines = [
        f"provider={result.provider or '?'} effort={job.effort.name.lower()} "
        f"tol(abs={job.tolerance.absolute},rel={job.tolerance.relative})"
    ]
    if result.error:
        lines.append(f"error: {result.error}")
        return lines
    comparison = result.comparison
    if comparison is None:
        lines.append("no comparison recorded")
    elif comparison.detail:
        lines.append(f"reason: {comparison.detail}")
    else:
        share = comparison.mismatched / comparison.total * 100 if comparison.total else 0.0
        lines.append(
            f"mismatched {comparison.mismatched}/{comparison.total} ({share:.2f}%) "
            f"max_abs={comparison.max_abs_error:.3e} max_rel={comparison.max_rel_error:.3e}"
        )
        if comparison.max_error_index is not None:
            lines.append(
                f"worst bin {comparison.max_error_index}: "
                f"got {comparison.actual_value}, expected {comparison.expected_value}"
            )
    return lines
