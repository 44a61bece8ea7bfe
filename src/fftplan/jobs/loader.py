"""YAML loader and validation for transform job files."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

import numpy as np
import yaml
from jsonschema import Draft7Validator

from fftplan.core import Effort, Tolerance, TransformKind, resolve_effort, resolve_kind, resolve_size

from .models import GeneratorConfig, JobConfig, JobFile

GENERATORS = ("random", "uniform", "ones", "zeros", "impulse")

_NUMBER_OR_TEXT = {"type": ["number", "string"]}
_ELEMENT = {
    "anyOf": [
        _NUMBER_OR_TEXT,
        {"type": "array", "items": {"type": "number"}, "minItems": 2, "maxItems": 2},
    ]
}
_SEQUENCE = {"type": "array", "minItems": 1, "items": _ELEMENT}
# PyYAML reads exponent forms without a dot (1e-9) as strings.
_TOLERANCE_VALUE = {
    "anyOf": [
        {"type": "number", "minimum": 0},
        {"type": "string", "pattern": r"^\s*[+]?(\d+\.?\d*|\.\d+)([eE][-+]?\d+)?\s*$"},
    ]
}
_TOLERANCE = {
    "type": "object",
    "properties": {
        "abs": _TOLERANCE_VALUE,
        "rel": _TOLERANCE_VALUE,
        "absolute": _TOLERANCE_VALUE,
        "relative": _TOLERANCE_VALUE,
    },
}
_EFFORT = {"type": ["integer", "string"]}

JOB_FILE_SCHEMA = {
    "type": "object",
    "required": ["jobs"],
    "properties": {
        "description": {"type": "string"},
        "provider": {"type": "string", "minLength": 1},
        "effort": _EFFORT,
        "tolerance": _TOLERANCE,
        "jobs": {
            "type": "array",
            "minItems": 1,
            "items": {
                "type": "object",
                "required": ["name", "kind"],
                "properties": {
                    "name": {"type": "string", "minLength": 1},
                    "kind": {"type": ["string", "integer"]},
                    "size": {"type": "integer", "minimum": 1},
                    "effort": _EFFORT,
                    "inverse": {"type": "boolean"},
                    "input": _SEQUENCE,
                    "generator": {
                        "type": ["string", "object"],
                        "properties": {
                            "name": {"type": "string", "enum": list(GENERATORS)},
                            "seed": {"type": "integer"},
                            "params": {"type": "object"},
                        },
                    },
                    "expected": _SEQUENCE,
                    "roundtrip": {"type": "boolean"},
                    "repeat": {"type": "integer", "minimum": 1},
                    "tolerance": _TOLERANCE,
                    "provider": {"type": "string", "minLength": 1},
                    "tags": {"type": "array", "items": {"type": "string"}},
                },
                "additionalProperties": False,
            },
        },
    },
}
_validator = Draft7Validator(JOB_FILE_SCHEMA)


def load_jobs(path: str) -> JobFile:
    """Load and validate a job file."""

    job_path = Path(path).expanduser().resolve()
    raw = yaml.safe_load(job_path.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, Mapping):
        raise ValueError("Job file must contain a mapping at the top level")
    _check_job_names(raw)
    errors = sorted(_validator.iter_errors(raw), key=lambda e: list(e.path))
    if errors:
        messages = "; ".join(f"{'/'.join(map(str, err.path)) or 'root'}: {err.message}" for err in errors)
        raise ValueError(f"Job file schema validation failed: {messages}")
    effort = resolve_effort(raw.get("effort"))
    tolerance = Tolerance.from_mapping(raw.get("tolerance"))
    provider = raw.get("provider")
    jobs = tuple(
        _parse_job(entry, effort, tolerance, provider) for entry in raw["jobs"]
    )
    _check_unique_names(jobs)
    return JobFile(
        jobs=jobs,
        provider=provider,
        effort=effort,
        tolerance=tolerance,
        description=str(raw.get("description", "")),
        source=job_path,
    )


def _parse_job(
    entry: Mapping[str, Any],
    default_effort: Effort,
    default_tolerance: Tolerance,
    default_provider: Optional[str],
) -> JobConfig:
    name = entry["name"].strip()
    kind = resolve_kind(entry["kind"])
    has_input = "input" in entry
    has_generator = "generator" in entry
    if has_input == has_generator:
        raise ValueError(f"Job '{name}' must define exactly one of 'input' or 'generator'")
    data = None
    generator = None
    if has_input:
        data = parse_sequence(entry["input"], complex_ok=kind.is_complex, label=f"job '{name}' input")
        size = entry.get("size", data.shape[0])
        if size != data.shape[0]:
            raise ValueError(f"Job '{name}' declares size {size} but input has {data.shape[0]} values")
    else:
        if "size" not in entry:
            raise ValueError(f"Job '{name}' uses a generator and must declare 'size'")
        size = entry["size"]
        generator = _parse_generator(entry["generator"])
    size = resolve_size(size, kind)
    expected = None
    if "expected" in entry:
        expected = parse_sequence(entry["expected"], complex_ok=True, label=f"job '{name}' expected")
        if expected.shape[0] != size:
            raise ValueError(f"Job '{name}' expects {expected.shape[0]} values for size {size}")
    roundtrip = bool(entry.get("roundtrip", False))
    if roundtrip and expected is not None:
        raise ValueError(f"Job '{name}' cannot combine 'expected' with 'roundtrip'")
    effort = resolve_effort(entry["effort"]) if "effort" in entry else default_effort
    return JobConfig(
        name=name,
        kind=kind,
        size=size,
        effort=effort,
        inverse=bool(entry.get("inverse", False)),
        input=data,
        generator=generator,
        expected=expected,
        roundtrip=roundtrip,
        repeat=int(entry.get("repeat", 1)),
        tolerance=Tolerance.from_mapping(entry.get("tolerance"), default=default_tolerance),
        provider=entry.get("provider", default_provider),
        tags=tuple(str(tag) for tag in entry.get("tags", []) or []),
    )


def _parse_generator(raw: Any) -> GeneratorConfig:
    if isinstance(raw, str):
        raw = {"name": raw}
    name = raw.get("name")
    if name not in GENERATORS:
        raise ValueError(f"Unknown generator {name!r}; supported: {', '.join(GENERATORS)}")
    seed = raw.get("seed")
    return GeneratorConfig(
        name=name,
        seed=int(seed) if seed is not None else None,
        params=dict(raw.get("params") or {}),
    )


def parse_sequence(raw: Sequence[Any], *, complex_ok: bool, label: str) -> np.ndarray:
    """Turn YAML numbers, ``"a+bj"`` strings or ``[re, im]`` pairs into an array."""

    values = []
    is_complex = False
    for item in raw:
        if isinstance(item, (list, tuple)):
            value = complex(float(item[0]), float(item[1]))
        elif isinstance(item, str):
            try:
                value = complex(item.replace(" ", ""))
            except ValueError as exc:
                raise ValueError(f"Invalid number {item!r} in {label}") from exc
        else:
            value = item
        if isinstance(value, complex):
            if value.imag == 0:
                value = value.real
            else:
                is_complex = True
        values.append(value)
    if is_complex and not complex_ok:
        raise ValueError(f"{label} must be real")
    dtype = np.complex128 if is_complex else np.float64
    return np.asarray(values, dtype=dtype)


def _check_unique_names(jobs: Sequence[JobConfig]) -> None:
    seen: set[str] = set()
    for job in jobs:
        if job.name in seen:
            raise ValueError(f"Duplicate job name '{job.name}'")
        seen.add(job.name)


def _check_job_names(raw: Mapping[str, Any]) -> None:
    jobs = raw.get("jobs")
    if not isinstance(jobs, list):
        return
    for index, entry in enumerate(jobs):
        if not isinstance(entry, Mapping) or "name" not in entry:
            continue
        name = entry["name"]
        if not isinstance(name, str):
            # Unquoted off/no/yes/null/123 turn into non-strings.
            raise ValueError(
                f"Job #{index + 1} name {name!r} was read by YAML as {type(name).__name__}; quote it"
            )
