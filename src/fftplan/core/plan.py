"""Plan lifecycle: build, execute and dispose cached transform plans."""
from __future__ import annotations

import logging
import weakref
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import numpy as np

from fftplan.errors import SizeMismatch, TypeMismatch
from fftplan.providers import Strategy, StrategyProvider, provider_manager

from .kinds import Direction, Effort, TransformKind, resolve_effort, resolve_kind, resolve_size

logger = logging.getLogger(__name__)

ProviderLike = Union[str, StrategyProvider, None]

# numpy dtype kinds accepted as input elements.
_REAL_KINDS = frozenset("iuf")
_COMPLEX_KINDS = frozenset("iufc")


@dataclass(frozen=True)
class StrategyPair:
    """Forward and backward strategies; ``shared`` marks a self-inverse kind."""

    forward: Strategy
    backward: Strategy
    shared: bool

    @classmethod
    def self_inverse(cls, strategy: Strategy) -> "StrategyPair":
        return cls(forward=strategy, backward=strategy, shared=True)

    @classmethod
    def distinct(cls, forward: Strategy, backward: Strategy) -> "StrategyPair":
        return cls(forward=forward, backward=backward, shared=False)

    def select(self, inverse: bool) -> Strategy:
        return self.backward if inverse else self.forward

    def handles(self) -> Tuple[Strategy, ...]:
        """Each underlying strategy exactly once."""

        if self.shared:
            return (self.forward,)
        return (self.forward, self.backward)


class _PlanResources:
    """Everything a plan owns; kept apart from the Plan so the finalizer can hold it."""

    __slots__ = ("provider", "input", "output", "strategies")

    def __init__(
        self,
        provider: StrategyProvider,
        input_buffer: np.ndarray,
        output_buffer: np.ndarray,
        strategies: StrategyPair,
    ) -> None:
        self.provider = provider
        self.input: Optional[np.ndarray] = input_buffer
        self.output: Optional[np.ndarray] = output_buffer
        self.strategies: Optional[StrategyPair] = strategies


def _release_resources(resources: _PlanResources, description: str) -> None:
    resources.input = None
    resources.output = None
    strategies, resources.strategies = resources.strategies, None
    if strategies is not None:
        for strategy in strategies.handles():
            try:
                resources.provider.release(strategy)
            except Exception:
                logger.warning(
                    "Provider %r failed to release %s of plan %s",
                    resources.provider.name,
                    strategy.label,
                    description,
                    exc_info=True,
                )
    logger.debug("Disposed plan %s", description)


class Plan:
    """A transform configuration owning its scratch buffers and strategies.

    Plans are immutable after construction. Use :func:`build` to create one,
    call :meth:`execute` as often as needed, and release it with
    :meth:`dispose` or by leaving a ``with`` block. Garbage collection also
    disposes an unreleased plan, but callers should not rely on its timing.
    """

    def __init__(
        self,
        size: int,
        kind: TransformKind,
        effort: Effort,
        resources: _PlanResources,
    ) -> None:
        self._size = size
        self._kind = kind
        self._effort = effort
        self._provider_name = resources.provider.name
        self._resources = resources
        self._finalizer = weakref.finalize(self, _release_resources, resources, self._label())

    @property
    def size(self) -> int:
        return self._size

    @property
    def kind(self) -> TransformKind:
        return self._kind

    @property
    def effort(self) -> Effort:
        return self._effort

    @property
    def provider(self) -> str:
        return self._provider_name

    @property
    def disposed(self) -> bool:
        return not self._finalizer.alive

    def execute(self, data: Any, inverse: bool = False) -> np.ndarray:
        """Transform ``data`` and return a new array; no scaling is applied."""

        resources = self._resources
        strategy = resources.strategies.select(inverse)  # type: ignore[union-attr]
        values = np.asarray(data)
        if values.ndim != 1 or values.shape[0] != self._size:
            raise SizeMismatch(
                f"Input and plan size differ: got shape {values.shape}, plan size is {self._size}"
            )
        accepted = _COMPLEX_KINDS if self._kind.is_complex else _REAL_KINDS
        if values.dtype.kind not in accepted:
            expected = "real or complex" if self._kind.is_complex else "real"
            raise TypeMismatch(
                f"{self._kind.value} input must be {expected}, got dtype {values.dtype}"
            )
        input_buffer = resources.input
        input_buffer[:] = values  # type: ignore[index]
        resources.provider.invoke(strategy)
        return resources.output.copy()  # type: ignore[union-attr]

    def dispose(self) -> None:
        """Release buffers and strategies; later calls do nothing."""

        self._finalizer()

    def describe(self) -> Dict[str, Any]:
        resources = self._resources
        strategies = resources.strategies
        return {
            "size": self._size,
            "kind": self._kind.value,
            "effort": self._effort.name.lower(),
            "provider": self._provider_name,
            "input": _address(resources.input),
            "output": _address(resources.output),
            "forward": strategies.forward.label if strategies else None,
            "backward": strategies.backward.label if strategies else None,
            "shared": strategies.shared if strategies else None,
            "disposed": self.disposed,
        }

    def __enter__(self) -> "Plan":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.dispose()

    def __repr__(self) -> str:
        state = "disposed" if self.disposed else "ready"
        return (
            f"Plan(kind={self._kind.value}, size={self._size}, "
            f"effort={self._effort.name.lower()}, provider={self._provider_name}, {state})"
        )

    def _label(self) -> str:
        return f"{self._kind.value}[{self._size}]@{self._provider_name}"


def _address(buffer: Optional[np.ndarray]) -> Optional[str]:
    if buffer is None:
        return None
    return f"0x{buffer.ctypes.data:08x}"


def build(
    size: Any,
    kind: Any = TransformKind.FFT,
    effort: Any = Effort.ESTIMATE,
    *,
    provider: ProviderLike = None,
) -> Plan:
    """Allocate buffers and derive forward/backward strategies for a transform."""

    transform = resolve_kind(kind)
    n = resolve_size(size, transform)
    level = resolve_effort(effort)
    driver = provider_manager.resolve(provider)
    driver.initialize_environment()

    input_buffer = driver.allocate(n, transform.dtype)
    output_buffer = driver.allocate(n, transform.dtype)
    derived: List[Strategy] = []
    try:
        strategies = _derive_strategies(driver, transform, input_buffer, output_buffer, n, level, derived)
    except Exception:
        for strategy in derived:
            driver.release(strategy)
        raise
    plan = Plan(n, transform, level, _PlanResources(driver, input_buffer, output_buffer, strategies))
    logger.debug("Built plan %s effort=%s", plan._label(), level.name)
    return plan


def _derive_strategies(
    driver: StrategyProvider,
    transform: TransformKind,
    input_buffer: np.ndarray,
    output_buffer: np.ndarray,
    size: int,
    effort: Effort,
    derived: List[Strategy],
) -> StrategyPair:
    if transform.is_complex:
        forward = driver.derive_complex_strategy(input_buffer, output_buffer, size, Direction.FORWARD, effort)
        derived.append(forward)
        backward = driver.derive_complex_strategy(input_buffer, output_buffer, size, Direction.BACKWARD, effort)
        derived.append(backward)
        return StrategyPair.distinct(forward, backward)

    forward_kind, backward_kind = transform.real_kinds
    forward = driver.derive_real_strategy(input_buffer, output_buffer, size, forward_kind, effort)
    derived.append(forward)
    if backward_kind is forward_kind:
        return StrategyPair.self_inverse(forward)
    backward = driver.derive_real_strategy(input_buffer, output_buffer, size, backward_kind, effort)
    derived.append(backward)
    return StrategyPair.distinct(forward, backward)


def execute(plan: Plan, data: Sequence[Any], inverse: bool = False) -> np.ndarray:
    return plan.execute(data, inverse=inverse)


def dispose(plan: Plan) -> None:
    plan.dispose()
