"""Strategy provider backed by FFTW through pyFFTW."""
from __future__ import annotations

import importlib.util
import logging
from dataclasses import dataclass
from typing import Any, Optional

import numpy as np

from fftplan.core.kinds import Direction, Effort, RealKind

from .base import REAL_OUTPUT_SCALE, Strategy, StrategyProvider

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class FFTWStrategy(Strategy):
    plan: Optional[Any] = None
    scale: Optional[float] = None


class FFTWProvider(StrategyProvider):
    """Native FFTW plans, single-threaded, planned with FFTW_DESTROY_INPUT."""

    name = "fftw"

    def available(self) -> bool:
        return importlib.util.find_spec("pyfftw") is not None

    def _initialize(self) -> None:
        import pyfftw

        pyfftw.config.NUM_THREADS = 1

    def allocate(self, size: int, dtype: np.dtype) -> np.ndarray:
        import pyfftw

        return pyfftw.zeros_aligned(size, dtype=dtype)

    def derive_complex_strategy(
        self,
        input_buffer: np.ndarray,
        output_buffer: np.ndarray,
        size: int,
        direction: Direction,
        effort: Effort,
    ) -> Strategy:
        plan = self._plan(input_buffer, output_buffer, direction.value, effort)
        return self._strategy(plan, size, direction.value, effort, scale=None)

    def derive_real_strategy(
        self,
        input_buffer: np.ndarray,
        output_buffer: np.ndarray,
        size: int,
        kind: RealKind,
        effort: Effort,
    ) -> Strategy:
        plan = self._plan(input_buffer, output_buffer, [kind.value], effort)
        return self._strategy(plan, size, kind.value, effort, scale=REAL_OUTPUT_SCALE)

    def invoke(self, strategy: Strategy) -> None:
        strategy.plan.execute()  # type: ignore[attr-defined]
        if strategy.scale is not None:  # type: ignore[attr-defined]
            output = strategy.plan.output_array  # type: ignore[attr-defined]
            np.multiply(output, strategy.scale, out=output)  # type: ignore[attr-defined]

    def release(self, strategy: Strategy) -> None:
        # pyFFTW destroys the native plan when the FFTW object is collected.
        strategy.plan = None  # type: ignore[attr-defined]
        super().release(strategy)

    def _plan(self, input_buffer: np.ndarray, output_buffer: np.ndarray, direction: Any, effort: Effort) -> Any:
        import pyfftw

        return pyfftw.FFTW(
            input_buffer,
            output_buffer,
            direction=direction,
            flags=(effort.flag, "FFTW_DESTROY_INPUT"),
            threads=1,
        )

    def _strategy(
        self, plan: Any, size: int, label: str, effort: Effort, *, scale: Optional[float]
    ) -> FFTWStrategy:
        logger.debug("Derived FFTW strategy %s n=%d effort=%s", label, size, effort.name)
        return FFTWStrategy(
            provider=self.name,
            size=size,
            label=label,
            effort=effort,
            plan=plan,
            scale=scale,
        )
