"""Reporter interface definitions."""
from __future__ import annotations

from typing import TYPE_CHECKING, List, Sequence

if TYPE_CHECKING:
    from fftplan.jobs.models import JobFile, JobResult


class Reporter:
    """Interface for output renderers."""

    def on_start(self, job_file: "JobFile", total: int) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    def on_job_result(self, result: "JobResult", index: int, total: int) -> None:  # pragma: no cover
        raise NotImplementedError

    def on_complete(self, results: Sequence["JobResult"]) -> None:  # pragma: no cover
        raise NotImplementedError


class ReportManager:
    """Dispatches lifecycle callbacks to multiple reporters."""

    def __init__(self, reporters: Sequence[Reporter]) -> None:
        self._reporters = list(reporters)

    def start(self, job_file: "JobFile", total: int) -> None:
        for reporter in self._reporters:
            reporter.on_start(job_file, total)

    def handle_result(self, result: "JobResult", index: int, total: int) -> None:
        for reporter in self._reporters:
            reporter.on_job_result(result, index, total)

    def complete(self, results: Sequence["JobResult"]) -> None:
        for reporter in self._reporters:
            reporter.on_complete(results)

    def reporters(self) -> List[Reporter]:
        return list(self._reporters)
