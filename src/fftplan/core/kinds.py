"""Transform kinds, effort levels and the size/effort/kind resolution helpers."""
from __future__ import annotations

import enum
import numbers
from typing import Any, Optional, Tuple

import numpy as np

from fftplan.errors import InvalidSize, UnknownKind


class Direction(enum.Enum):
    """Sign of the exponent for complex transforms."""

    FORWARD = "FFTW_FORWARD"
    BACKWARD = "FFTW_BACKWARD"


class RealKind(enum.Enum):
    """Real-even (REDFT) transform variants backing the DCT kinds."""

    REDFT00 = "FFTW_REDFT00"
    REDFT01 = "FFTW_REDFT01"
    REDFT10 = "FFTW_REDFT10"
    REDFT11 = "FFTW_REDFT11"

    @property
    def dct_type(self) -> int:
        """The scipy.fft DCT type computing the same sums."""

        return _DCT_TYPES[self]


_DCT_TYPES = {
    RealKind.REDFT00: 1,
    RealKind.REDFT10: 2,
    RealKind.REDFT01: 3,
    RealKind.REDFT11: 4,
}


class Effort(enum.IntEnum):
    """How much time the strategy provider may spend optimising a plan."""

    ESTIMATE = 0
    MEASURE = 1
    PATIENT = 2
    EXHAUSTIVE = 3

    @property
    def flag(self) -> str:
        return f"FFTW_{self.name}"


class TransformKind(enum.Enum):
    """Closed set of transforms a plan can be built for."""

    FFT = "fft"
    DCT1 = "dct1"
    DCT2 = "dct2"
    DCT3 = "dct3"
    DCT4 = "dct4"

    @property
    def is_complex(self) -> bool:
        return self is TransformKind.FFT

    @property
    def dtype(self) -> np.dtype:
        return np.dtype(np.complex128) if self.is_complex else np.dtype(np.float64)

    @property
    def real_kinds(self) -> Tuple[RealKind, RealKind]:
        """(forward, backward) REDFT pair; raises for the complex FFT."""

        try:
            return _REAL_KIND_PAIRS[self]
        except KeyError as exc:
            raise UnknownKind(f"{self.value} is not a real-to-real transform") from exc

    @property
    def self_inverse(self) -> bool:
        if self.is_complex:
            return False
        forward, backward = self.real_kinds
        return forward is backward

    @property
    def min_size(self) -> int:
        # REDFT00 has logical size 2 * (n - 1).
        return 2 if self is TransformKind.DCT1 else 1


_REAL_KIND_PAIRS = {
    TransformKind.DCT1: (RealKind.REDFT00, RealKind.REDFT00),
    TransformKind.DCT2: (RealKind.REDFT10, RealKind.REDFT01),
    TransformKind.DCT3: (RealKind.REDFT01, RealKind.REDFT10),
    TransformKind.DCT4: (RealKind.REDFT11, RealKind.REDFT11),
}

_DCT_BY_TYPE = {
    1: TransformKind.DCT1,
    2: TransformKind.DCT2,
    3: TransformKind.DCT3,
    4: TransformKind.DCT4,
}

_KIND_ALIASES = {
    "fft": TransformKind.FFT,
    "complex": TransformKind.FFT,
    "dct1": TransformKind.DCT1,
    "dct-i": TransformKind.DCT1,
    "dct2": TransformKind.DCT2,
    "dct-ii": TransformKind.DCT2,
    "dct3": TransformKind.DCT3,
    "dct-iii": TransformKind.DCT3,
    "dct4": TransformKind.DCT4,
    "dct-iv": TransformKind.DCT4,
}


def resolve_kind(value: Any) -> TransformKind:
    """Map a kind name, enum member or DCT type code (1-4) to a TransformKind."""

    if isinstance(value, TransformKind):
        return value
    if isinstance(value, bool):
        raise UnknownKind(f"Unknown transform kind {value!r}")
    if isinstance(value, numbers.Integral):
        try:
            return _DCT_BY_TYPE[int(value)]
        except KeyError as exc:
            raise UnknownKind(f"Unknown DCT type {value!r}; expected 1, 2, 3 or 4") from exc
    if isinstance(value, str):
        key = value.strip().lower().replace("_", "-")
        kind = _KIND_ALIASES.get(key) or _KIND_ALIASES.get(key.replace("-", ""))
        if kind is not None:
            return kind
    raise UnknownKind(f"Unknown transform kind {value!r}")


def resolve_dct_kind(dct_type: Any) -> TransformKind:
    kind = resolve_kind(dct_type)
    if kind.is_complex:
        raise UnknownKind(f"{dct_type!r} is not a DCT type")
    return kind


def resolve_effort(value: Any) -> Effort:
    """Clamp an ordinal (or parse a level name) into an Effort level."""

    if value is None:
        return Effort.ESTIMATE
    if isinstance(value, Effort):
        return value
    if isinstance(value, str):
        name = value.strip().upper()
        if name.startswith("FFTW_"):
            name = name[len("FFTW_"):]
        if name.lstrip("-").isdigit():
            return resolve_effort(int(name))
        try:
            return Effort[name]
        except KeyError as exc:
            raise ValueError(f"Unknown effort level {value!r}") from exc
    level = int(value)
    if level <= 0:
        return Effort.ESTIMATE
    if level >= 3:
        return Effort.EXHAUSTIVE
    return Effort(level)


def resolve_size(value: Any, kind: Optional[TransformKind] = None) -> int:
    """Return the sample count for an int size or a template sequence.

    A sequence (list, tuple or 1-D array) contributes its length, so a plan
    can be built directly from data shaped like the eventual input.
    """

    if isinstance(value, bool):
        raise InvalidSize(f"Plan size must be an integer, got {value!r}")
    if isinstance(value, numbers.Integral):
        size = int(value)
    elif isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise InvalidSize(f"Size template must be 1-D, got shape {value.shape}")
        size = int(value.shape[0])
    elif isinstance(value, (list, tuple)):
        size = len(value)
    else:
        raise InvalidSize(f"Plan size must be an integer or a sequence, got {type(value).__name__}")
    if size <= 0:
        raise InvalidSize(f"Plan size must be positive, got {size}")
    if kind is not None and size < kind.min_size:
        raise InvalidSize(f"{kind.value} needs at least {kind.min_size} samples, got {size}")
    return size


def roundtrip_scale(kind: Any, size: int) -> float:
    """Factor by which inverse(forward(x)) exceeds x for an unscaled plan pair."""

    transform = resolve_kind(kind)
    n = resolve_size(size, transform)
    if transform.is_complex:
        return float(n)
    if transform is TransformKind.DCT1:
        return (n - 1) / 2.0
    return n / 2.0
