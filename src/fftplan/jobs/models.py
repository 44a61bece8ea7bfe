"""Data models for transform job files."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

import numpy as np

from fftplan.core import ComparisonResult, Effort, Tolerance, TransformKind


@dataclass(frozen=True)
class GeneratorConfig:
    name: str
    seed: Optional[int] = None
    params: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, eq=False)
class JobConfig:
    name: str
    kind: TransformKind
    size: int
    effort: Effort
    inverse: bool = False
    input: Optional[np.ndarray] = None
    generator: Optional[GeneratorConfig] = None
    expected: Optional[np.ndarray] = None
    roundtrip: bool = False
    repeat: int = 1
    tolerance: Tolerance = field(default_factory=Tolerance)
    provider: Optional[str] = None
    tags: Sequence[str] = field(default_factory=tuple)

    def identifier(self) -> str:
        direction = "inverse" if self.inverse else "forward"
        return f"{self.name}[{self.kind.value}:{self.size}]/{direction}"


@dataclass(frozen=True)
class JobFile:
    jobs: Sequence[JobConfig]
    provider: Optional[str]
    effort: Effort
    tolerance: Tolerance
    description: str
    source: Path


@dataclass(frozen=True)
class JobOptions:
    names: Sequence[str] = field(default_factory=tuple)
    tags: Sequence[str] = field(default_factory=tuple)
    skip_tags: Sequence[str] = field(default_factory=tuple)
    provider: Optional[str] = None
    list_only: bool = False


@dataclass
class JobResult:
    """Outcome of executing a single job."""

    job: JobConfig
    status: str
    duration_s: float
    calls: int = 0
    provider: Optional[str] = None
    comparison: Optional[ComparisonResult] = None
    error: Optional[str] = None

    @property
    def passed(self) -> bool:
        return self.status == "passed"
