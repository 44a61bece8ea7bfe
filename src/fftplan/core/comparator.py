"""Utilities for comparing transform outputs with expected sequences."""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .models import Tolerance


@dataclass
class ComparisonResult:
    """Comparison metrics for one output sequence."""

    passed: bool
    max_abs_error: float
    max_rel_error: float
    mismatched: int
    total: int
    max_error_index: int | None = None
    actual_value: complex | None = None
    expected_value: complex | None = None
    detail: str | None = None


def compare_outputs(actual: np.ndarray, expected: np.ndarray, tolerance: Tolerance) -> ComparisonResult:
    actual = np.asarray(actual)
    expected = np.asarray(expected)
    if actual.shape != expected.shape:
        return ComparisonResult(
            passed=False,
            max_abs_error=float("inf"),
            max_rel_error=float("inf"),
            mismatched=actual.size,
            total=actual.size,
            detail=f"shape mismatch: actual {actual.shape}, expected {expected.shape}",
        )
    abs_diff, rel_diff, index, actual_value, expected_value = _diff_metrics(actual, expected)
    close = np.isclose(actual, expected, atol=tolerance.absolute, rtol=tolerance.relative)
    mismatched = int(close.size - int(np.count_nonzero(close)))
    return ComparisonResult(
        passed=mismatched == 0,
        max_abs_error=abs_diff,
        max_rel_error=rel_diff,
        mismatched=mismatched,
        total=close.size,
        max_error_index=index,
        actual_value=actual_value,
        expected_value=expected_value,
    )


def _diff_metrics(
    actual: np.ndarray, expected: np.ndarray
) -> tuple[float, float, int | None, complex | None, complex | None]:
    # Complex differences are measured by modulus.
    act = actual.astype(np.complex128)
    exp = expected.astype(np.complex128)
    diff = np.abs(act - exp)
    if diff.size == 0:
        return 0.0, 0.0, None, None, None
    index = int(np.argmax(diff))
    max_abs = float(diff[index])
    denom = np.maximum(np.abs(exp), 1e-12)
    max_rel = float(np.divide(diff, denom).max(initial=0.0))
    return max_abs, max_rel, index, _scalar(act[index]), _scalar(exp[index])


def _scalar(value: complex) -> complex:
    value = complex(value)
    return value.real if value.imag == 0 else value  # type: ignore[return-value]
