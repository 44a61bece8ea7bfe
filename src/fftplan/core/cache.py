"""Keyed cache of built plans."""
from __future__ import annotations

from typing import Any, Dict, Iterator, Tuple

from fftplan.providers import provider_manager

from .kinds import Effort, TransformKind, resolve_effort, resolve_kind, resolve_size
from .plan import Plan, ProviderLike, build

PlanKey = Tuple[TransformKind, int, Effort, str]


class PlanCache:
    """Builds each (kind, size, effort, provider) plan once and hands it back on reuse.

    Like the plans it holds, a cache is meant for one thread at a time.
    """

    def __init__(self, *, provider: ProviderLike = None) -> None:
        self._provider = provider
        self._plans: Dict[PlanKey, Plan] = {}
        self.hits = 0
        self.misses = 0

    def get(
        self,
        size: Any,
        kind: Any = TransformKind.FFT,
        effort: Any = Effort.ESTIMATE,
        *,
        provider: ProviderLike = None,
    ) -> Plan:
        transform = resolve_kind(kind)
        n = resolve_size(size, transform)
        level = resolve_effort(effort)
        driver = provider_manager.resolve(provider or self._provider)
        key = (transform, n, level, driver.name)
        plan = self._plans.get(key)
        if plan is not None and not plan.disposed:
            self.hits += 1
            return plan
        self.misses += 1
        plan = build(n, transform, level, provider=driver)
        self._plans[key] = plan
        return plan

    def close(self) -> None:
        """Dispose every cached plan."""

        plans, self._plans = self._plans, {}
        for plan in plans.values():
            plan.dispose()

    def __len__(self) -> int:
        return len(self._plans)

    def __iter__(self) -> Iterator[Plan]:
        return iter(tuple(self._plans.values()))

    def __enter__(self) -> "PlanCache":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
