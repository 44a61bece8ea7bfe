"""Strategy provider abstractions."""
from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Union

import numpy as np

from fftplan.core.kinds import Direction, Effort, RealKind
from fftplan.errors import ProviderError

logger = logging.getLogger(__name__)

DEFAULT_PROVIDER = "scipy"
PROVIDER_ENV = "FFTPLAN_PROVIDER"

# Providers return the unit-weight cosine sums: half of what FFTW's REDFT
# kinds (and scipy.fft.dct with norm=None) produce.
REAL_OUTPUT_SCALE = 0.5


@dataclass(eq=False)
class Strategy:
    """Opaque execution method bound to one pair of buffers and one direction."""

    provider: str
    size: int
    label: str
    effort: Effort
    released: bool = False


class StrategyProvider:
    """Base interface for transform strategy providers."""

    name: str = ""

    def __init__(self) -> None:
        self._init_lock = threading.Lock()
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    def available(self) -> bool:
        return True

    def initialize_environment(self) -> None:
        """Run the provider's one-time setup (idempotent, thread-safe)."""

        if self._initialized:
            return
        with self._init_lock:
            if self._initialized:
                return
            self._initialize()
            self._initialized = True
            logger.info("Initialized strategy provider %r", self.name)

    def _initialize(self) -> None:
        """Hook for subclasses; runs at most once per provider instance."""

    def allocate(self, size: int, dtype: np.dtype) -> np.ndarray:
        return np.zeros(size, dtype=dtype)

    def derive_complex_strategy(
        self,
        input_buffer: np.ndarray,
        output_buffer: np.ndarray,
        size: int,
        direction: Direction,
        effort: Effort,
    ) -> Strategy:
        raise NotImplementedError

    def derive_real_strategy(
        self,
        input_buffer: np.ndarray,
        output_buffer: np.ndarray,
        size: int,
        kind: RealKind,
        effort: Effort,
    ) -> Strategy:
        raise NotImplementedError

    def invoke(self, strategy: Strategy) -> None:
        raise NotImplementedError

    def release(self, strategy: Strategy) -> None:
        strategy.released = True


class ProviderManager:
    """Registry for strategy providers keyed by name."""

    def __init__(self) -> None:
        self._providers: Dict[str, StrategyProvider] = {}

    def register(self, provider: StrategyProvider) -> None:
        if not provider.name:
            raise ProviderError("Strategy providers must define a name")
        if provider.name in self._providers:
            raise ProviderError(f"Strategy provider '{provider.name}' already registered")
        self._providers[provider.name] = provider

    def unregister(self, name: str) -> None:
        self._providers.pop(name, None)

    def get(self, name: str) -> StrategyProvider:
        try:
            provider = self._providers[name]
        except KeyError as exc:
            known = ", ".join(sorted(self._providers)) or "none"
            raise ProviderError(f"No strategy provider named {name!r} (registered: {known})") from exc
        if not provider.available():
            raise ProviderError(f"Strategy provider {name!r} is not available in this environment")
        return provider

    def resolve(self, provider: Union[str, StrategyProvider, None] = None) -> StrategyProvider:
        """Return a provider instance from a name, an instance, or the configured default."""

        if isinstance(provider, StrategyProvider):
            return provider
        return self.get(provider or default_provider_name())

    def providers(self) -> Iterable[StrategyProvider]:
        return tuple(self._providers.values())

    def __contains__(self, name: Any) -> bool:
        return name in self._providers


def default_provider_name() -> str:
    return os.environ.get(PROVIDER_ENV, "").strip() or DEFAULT_PROVIDER


provider_manager = ProviderManager()


def register_builtin_providers(manager: Optional[ProviderManager] = None) -> None:
    """Register the scipy and fftw providers once."""

    from .fftw import FFTWProvider
    from .scipy_fft import ScipyProvider

    target = manager or provider_manager
    for provider_cls in (ScipyProvider, FFTWProvider):
        if provider_cls.name not in target:
            target.register(provider_cls())
