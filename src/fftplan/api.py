"""One-call transforms built on top of plans.

Each helper accepts an existing plan for repeated use; without one, a
temporary plan is built for the call and disposed before returning.
"""
from __future__ import annotations

from typing import Any, Optional

import numpy as np

from fftplan.core.kinds import Effort, TransformKind, resolve_dct_kind, roundtrip_scale
from fftplan.core.plan import Plan, build
from fftplan.errors import UnknownKind


def fft(x: Any, inverse: bool = False, plan: Optional[Plan] = None, effort: Any = Effort.ESTIMATE) -> np.ndarray:
    """Unscaled complex FFT of ``x`` (backward transform when ``inverse``)."""

    return _run(x, TransformKind.FFT, inverse, plan, effort)


def ifft(x: Any, plan: Optional[Plan] = None, scale: bool = True) -> np.ndarray:
    """Backward FFT, divided by ``len(x)`` unless ``scale`` is false."""

    result = _run(x, TransformKind.FFT, True, plan, Effort.ESTIMATE)
    if scale:
        result /= roundtrip_scale(TransformKind.FFT, result.shape[0])
    return result


def dct(
    x: Any,
    type: int = 2,
    inverse: bool = False,
    plan: Optional[Plan] = None,
    effort: Any = Effort.ESTIMATE,
) -> np.ndarray:
    """DCT of the given type (1-4); ``inverse`` runs the paired backward kind."""

    return _run(x, resolve_dct_kind(type), inverse, plan, effort)


def idct(x: Any, type: int = 2, plan: Optional[Plan] = None, scale: bool = True) -> np.ndarray:
    kind = resolve_dct_kind(type)
    result = _run(x, kind, True, plan, Effort.ESTIMATE)
    if scale:
        result /= roundtrip_scale(kind, result.shape[0])
    return result


def _run(x: Any, kind: TransformKind, inverse: bool, plan: Optional[Plan], effort: Any) -> np.ndarray:
    if plan is not None:
        if plan.kind is not kind:
            raise UnknownKind(f"Plan is for {plan.kind.value}, not {kind.value}")
        return plan.execute(x, inverse=inverse)
    data = np.asarray(x)
    with build(data, kind, effort) as temporary:
        return temporary.execute(data, inverse=inverse)
