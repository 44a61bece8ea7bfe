"""JSON reporter emitting structured job results."""
from __future__ import annotations

import datetime as dt
import json
import math
import pathlib
import time
from typing import TYPE_CHECKING, Any, Dict, Optional, Sequence

import click
from jsonschema import validate

from .base import Reporter
from .schema import JSON_SCHEMA_V1, SCHEMA_VERSION

if TYPE_CHECKING:
    from fftplan.jobs.models import JobFile, JobResult


class JsonReporter(Reporter):
    """Writes results to a JSON file validated against the schema."""

    def __init__(self, path: str) -> None:
        self._path = pathlib.Path(path)
        self._records: list[Dict[str, Any]] = []
        self._job_file: Optional["JobFile"] = None
        self._start_time = 0.0

    def on_start(self, job_file: "JobFile", total: int) -> None:
        self._job_file = job_file
        self._records.clear()
        self._start_time = time.perf_counter()

    def on_job_result(self, result: "JobResult", index: int, total: int) -> None:
        self._records.append(_job_to_dict(result))

    def on_complete(self, results: Sequence["JobResult"]) -> None:
        if self._job_file is None:
            return
        payload = {
            "schema_version": SCHEMA_VERSION,
            "generated_at": dt.datetime.now(dt.timezone.utc).isoformat(timespec="seconds"),
            "summary": _build_summary(self._job_file, results, time.perf_counter() - self._start_time),
            "jobs": self._records,
        }
        validate(instance=payload, schema=JSON_SCHEMA_V1)
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        except OSError as exc:  # pragma: no cover - filesystem protection
            raise RuntimeError(f"Failed to write JSON report to {self._path}: {exc}") from exc
        click.echo(f"JSON report written to {self._path}")


def _build_summary(job_file: "JobFile", results: Sequence["JobResult"], duration: float) -> Dict[str, Any]:
    return {
        "total": len(results),
        "passed": sum(1 for result in results if result.status == "passed"),
        "failed": sum(1 for result in results if result.status == "failed"),
        "errors": sum(1 for result in results if result.status == "error"),
        "source": str(job_file.source),
        "provider": job_file.provider,
        "duration_s": duration,
    }


def _job_to_dict(result: "JobResult") -> Dict[str, Any]:
    job = result.job
    record: Dict[str, Any] = {
        "id": job.identifier(),
        "name": job.name,
        "kind": job.kind.value,
        "size": job.size,
        "inverse": job.inverse,
        "effort": job.effort.name.lower(),
        "provider": result.provider,
        "status": result.status,
        "duration_ms": result.duration_s * 1000,
        "calls": result.calls,
        "tags": list(job.tags),
        "tolerance": {
            "abs": job.tolerance.absolute,
            "rel": job.tolerance.relative,
        },
    }
    if result.error:
        record["error"] = result.error
    comparison = result.comparison
    if comparison:
        record["comparison"] = {
            "passed": comparison.passed,
            "max_abs_error": _finite(comparison.max_abs_error),
            "max_rel_error": _finite(comparison.max_rel_error),
            "mismatched": comparison.mismatched,
            "total": comparison.total,
            "detail": comparison.detail,
        }
    return record


def _finite(value: float) -> Optional[float]:
    # JSON has no representation for inf/nan.
    return value if math.isfinite(value) else None
