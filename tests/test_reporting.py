from __future__ import annotations

import json
import textwrap
from pathlib import Path

from jsonschema import validate

from fftplan.jobs import load_jobs, run_jobs
from fftplan.reporting import JsonReporter, TerminalReporter
from fftplan.reporting.schema import JSON_SCHEMA_V1, SCHEMA_VERSION

JOBS = """
provider: scipy
jobs:
  - name: good
    kind: fft
    input: [1, 0]
    expected: [1, 1]
  - name: bad
    kind: dct2
    input: [1, 1]
    expected: [0, 5]
  - name: broken
    kind: fft
    input: [1, 2]
    provider: nowhere
"""


def _job_file(tmp_path: Path):
    path = tmp_path / "jobs.yaml"
    path.write_text(textwrap.dedent(JOBS), encoding="utf-8")
    return load_jobs(str(path))


def test_json_reporter_writes_valid_report(tmp_path: Path) -> None:
    report_path = tmp_path / "out" / "report.json"
    run_jobs(_job_file(tmp_path), reporters=[JsonReporter(str(report_path))])
    payload = json.loads(report_path.read_text(encoding="utf-8"))
    validate(instance=payload, schema=JSON_SCHEMA_V1)
    assert payload["schema_version"] == SCHEMA_VERSION
    summary = payload["summary"]
    assert (summary["total"], summary["passed"], summary["failed"], summary["errors"]) == (3, 1, 1, 1)
    assert summary["provider"] == "scipy"
    good, bad, broken = payload["jobs"]
    assert good["id"] == "good[fft:2]/forward"
    assert good["comparison"]["passed"] is True
    assert bad["status"] == "failed"
    assert bad["comparison"]["mismatched"] == 2
    assert broken["status"] == "error"
    assert "nowhere" in broken["error"]
    assert "comparison" not in broken


def test_terminal_reporter_output(tmp_path: Path, capsys) -> None:
    run_jobs(_job_file(tmp_path), reporters=[TerminalReporter(use_color=False)])
    out = capsys.readouterr().out
    assert "Starting run: 3 job(s) from jobs.yaml provider=scipy effort=estimate" in out
    assert "[1/3] good[fft:2]/forward -> PASSED" in out
    assert "[2/3] bad[dct2:2]/forward -> FAILED" in out
    assert "[3/3] broken[fft:2]/forward -> ERROR" in out
    assert "Summary: total=3 passed=1 failed=1 errors=1" in out
    assert "Failure details:" in out
    assert "mismatched 2/2" in out
    assert "error: No strategy provider named 'nowhere'" in out
    assert "\x1b[" not in out

