import numpy as np

from fftplan.core import Tolerance, compare_outputs


def test_compare_outputs_passes() -> None:
    actual = np.array([1.0, 2.0])
    expected = np.array([1.0, 2.0 + 1e-12])
    result = compare_outputs(actual, expected, Tolerance())
    assert result.passed
    assert result.mismatched == 0


def test_compare_outputs_detects_failure() -> None:
    actual = np.array([1.0, 3.0, 5.0])
    expected = np.array([1.0, 2.0, 5.0])
    result = compare_outputs(actual, expected, Tolerance(absolute=1e-4, relative=1e-4))
    assert not result.passed
    assert result.mismatched == 1
    assert result.max_error_index == 1
    assert result.max_abs_error == 1.0
    assert result.actual_value == 3.0
    assert result.expected_value == 2.0


def test_compare_outputs_uses_complex_modulus() -> None:
    actual = np.array([1 + 1j, 0j])
    expected = np.array([1 - 1j, 0j])
    result = compare_outputs(actual, expected, Tolerance())
    assert not result.passed
    assert result.max_abs_error == 2.0
    assert result.actual_value == 1 + 1j


def test_compare_outputs_shape_mismatch() -> None:
    result = compare_outputs(np.zeros(3), np.zeros(4), Tolerance())
    assert not result.passed
    assert "shape mismatch" in result.detail


def test_tolerance_from_mapping() -> None:
    base = Tolerance(absolute=1e-3, relative=1e-2)
    assert Tolerance.from_mapping(None, default=base) is base
    merged = Tolerance.from_mapping({"abs": 0.5}, default=base)
    assert merged == Tolerance(absolute=0.5, relative=1e-2)
    assert Tolerance.from_mapping({"relative": 0.1}).relative == 0.1
