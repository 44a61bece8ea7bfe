import numpy as np
import pytest

from fftplan.core.kinds import (
    Effort,
    RealKind,
    TransformKind,
    resolve_dct_kind,
    resolve_effort,
    resolve_kind,
    resolve_size,
    roundtrip_scale,
)
from fftplan.errors import InvalidSize, UnknownKind


@pytest.mark.parametrize(
    "value, expected",
    [
        (-5, Effort.ESTIMATE),
        (0, Effort.ESTIMATE),
        (1, Effort.MEASURE),
        (2, Effort.PATIENT),
        (3, Effort.EXHAUSTIVE),
        (42, Effort.EXHAUSTIVE),
        ("measure", Effort.MEASURE),
        ("FFTW_PATIENT", Effort.PATIENT),
        ("2", Effort.PATIENT),
        (None, Effort.ESTIMATE),
        (Effort.EXHAUSTIVE, Effort.EXHAUSTIVE),
    ],
)
def test_resolve_effort_clamps_ordinals(value, expected) -> None:
    assert resolve_effort(value) is expected


def test_resolve_effort_rejects_unknown_name() -> None:
    with pytest.raises(ValueError):
        resolve_effort("sloppy")


def test_effort_flags_match_fftw_names() -> None:
    assert Effort.ESTIMATE.flag == "FFTW_ESTIMATE"
    assert Effort.EXHAUSTIVE.flag == "FFTW_EXHAUSTIVE"


@pytest.mark.parametrize(
    "value, expected",
    [
        ("fft", TransformKind.FFT),
        ("DCT2", TransformKind.DCT2),
        ("dct-iv", TransformKind.DCT4),
        ("dct_iii", TransformKind.DCT3),
        (1, TransformKind.DCT1),
        (4, TransformKind.DCT4),
        (TransformKind.DCT3, TransformKind.DCT3),
    ],
)
def test_resolve_kind_accepts_names_and_type_codes(value, expected) -> None:
    assert resolve_kind(value) is expected


@pytest.mark.parametrize("value", [0, 5, -1, "dct5", "rfft", True, None, 2.0])
def test_resolve_kind_rejects_unknown(value) -> None:
    with pytest.raises(UnknownKind):
        resolve_kind(value)


def test_resolve_dct_kind_rejects_fft() -> None:
    with pytest.raises(UnknownKind):
        resolve_dct_kind("fft")


def test_real_kind_pairs() -> None:
    assert TransformKind.DCT1.real_kinds == (RealKind.REDFT00, RealKind.REDFT00)
    assert TransformKind.DCT2.real_kinds == (RealKind.REDFT10, RealKind.REDFT01)
    assert TransformKind.DCT3.real_kinds == (RealKind.REDFT01, RealKind.REDFT10)
    assert TransformKind.DCT4.real_kinds == (RealKind.REDFT11, RealKind.REDFT11)
    assert TransformKind.DCT1.self_inverse and TransformKind.DCT4.self_inverse
    assert not TransformKind.DCT2.self_inverse and not TransformKind.FFT.self_inverse
    with pytest.raises(UnknownKind):
        TransformKind.FFT.real_kinds


def test_element_dtypes() -> None:
    assert TransformKind.FFT.dtype == np.complex128
    assert TransformKind.DCT3.dtype == np.float64


@pytest.mark.parametrize("value, expected", [(8, 8), (np.int64(3), 3), ([1, 2, 3], 3), (np.zeros(5), 5)])
def test_resolve_size_accepts_ints_and_templates(value, expected) -> None:
    assert resolve_size(value) == expected


@pytest.mark.parametrize("value", [0, -3, [], True, 2.5, "4", np.zeros((2, 2))])
def test_resolve_size_rejects_invalid(value) -> None:
    with pytest.raises(InvalidSize):
        resolve_size(value)


def test_dct1_needs_two_samples() -> None:
    with pytest.raises(InvalidSize):
        resolve_size(1, TransformKind.DCT1)
    assert resolve_size(1, TransformKind.DCT2) == 1


def test_roundtrip_scale() -> None:
    assert roundtrip_scale("fft", 8) == 8.0
    assert roundtrip_scale("dct1", 9) == 4.0
    assert roundtrip_scale(2, 8) == 4.0
    assert roundtrip_scale(3, 8) == 4.0
    assert roundtrip_scale(4, 6) == 3.0
