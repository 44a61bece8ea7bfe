"""Shared value types."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class Tolerance:
    """Numerical tolerance definition for comparisons."""

    absolute: float = 1e-9
    relative: float = 1e-9

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]], default: Optional["Tolerance"] = None) -> "Tolerance":
        base = default or cls()
        if not data:
            return base
        return cls(
            absolute=float(data.get("abs", data.get("absolute", base.absolute))),
            relative=float(data.get("rel", data.get("relative", base.relative))),
        )
