"""Strategy provider backed by scipy.fft (pocketfft)."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np
import scipy.fft

from fftplan.core.kinds import Direction, Effort, RealKind

from .base import REAL_OUTPUT_SCALE, Strategy, StrategyProvider

logger = logging.getLogger(__name__)

# Warm-up transforms run at derivation time, per effort level.
WARMUP_RUNS = {
    Effort.ESTIMATE: 0,
    Effort.MEASURE: 1,
    Effort.PATIENT: 2,
    Effort.EXHAUSTIVE: 4,
}


def _pocketfft():
    """Route scipy.fft calls to its bundled backend without touching global backends."""

    return scipy.fft.set_backend("scipy", only=True)


@dataclass(eq=False)
class ScipyStrategy(Strategy):
    transform: Optional[Callable[[], None]] = None


class ScipyProvider(StrategyProvider):
    """Binds scipy.fft calls to a plan's buffers.

    scipy keeps its own per-size plan cache, so deriving a strategy at a
    higher effort level simply runs the transform a few times on the bound
    buffers to populate that cache. This overwrites the input buffer.
    """

    name = "scipy"

    def derive_complex_strategy(
        self,
        input_buffer: np.ndarray,
        output_buffer: np.ndarray,
        size: int,
        direction: Direction,
        effort: Effort,
    ) -> Strategy:
        if direction is Direction.FORWARD:
            def transform() -> None:
                with _pocketfft():
                    np.copyto(output_buffer, scipy.fft.fft(input_buffer, overwrite_x=True))
        else:
            def transform() -> None:
                # norm="forward" leaves the backward transform unscaled.
                with _pocketfft():
                    np.copyto(
                        output_buffer,
                        scipy.fft.ifft(input_buffer, norm="forward", overwrite_x=True),
                    )

        return self._derive(transform, size, direction.value, effort)

    def derive_real_strategy(
        self,
        input_buffer: np.ndarray,
        output_buffer: np.ndarray,
        size: int,
        kind: RealKind,
        effort: Effort,
    ) -> Strategy:
        dct_type = kind.dct_type

        def transform() -> None:
            with _pocketfft():
                result = scipy.fft.dct(input_buffer, type=dct_type, overwrite_x=True)
            np.multiply(result, REAL_OUTPUT_SCALE, out=output_buffer)

        return self._derive(transform, size, kind.value, effort)

    def invoke(self, strategy: Strategy) -> None:
        strategy.transform()  # type: ignore[attr-defined]

    def release(self, strategy: Strategy) -> None:
        strategy.transform = None  # type: ignore[attr-defined]
        super().release(strategy)

    def _derive(
        self, transform: Callable[[], None], size: int, label: str, effort: Effort
    ) -> ScipyStrategy:
        for _ in range(WARMUP_RUNS[effort]):
            transform()
        logger.debug("Derived scipy strategy %s n=%d effort=%s", label, size, effort.name)
        return ScipyStrategy(
            provider=self.name,
            size=size,
            label=label,
            effort=effort,
            transform=transform,
        )
