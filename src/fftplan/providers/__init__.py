"""Strategy provider exports."""
from .base import (
    DEFAULT_PROVIDER,
    ProviderManager,
    Strategy,
    StrategyProvider,
    default_provider_name,
    provider_manager,
    register_builtin_providers,
)
from .fftw import FFTWProvider
from .scipy_fft import ScipyProvider

__all__ = [
    "DEFAULT_PROVIDER",
    "FFTWProvider",
    "ProviderManager",
    "ScipyProvider",
    "Strategy",
    "StrategyProvider",
    "default_provider_name",
    "provider_manager",
    "register_builtin_providers",
]

register_builtin_providers()
