"""Core kinds, value types and comparison helpers."""
from .comparator import ComparisonResult, compare_outputs
from .kinds import (
    Direction,
    Effort,
    RealKind,
    TransformKind,
    resolve_dct_kind,
    resolve_effort,
    resolve_kind,
    resolve_size,
    roundtrip_scale,
)
from .models import Tolerance

__all__ = [
    "ComparisonResult",
    "Direction",
    "Effort",
    "RealKind",
    "Tolerance",
    "TransformKind",
    "compare_outputs",
    "resolve_dct_kind",
    "resolve_effort",
    "resolve_kind",
    "resolve_size",
    "roundtrip_scale",
]
