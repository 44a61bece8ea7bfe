"""fftplan package initialization."""
from __future__ import annotations

import importlib
import os

from .api import dct, fft, idct, ifft
from .core.cache import PlanCache
from .core.kinds import Effort, TransformKind, roundtrip_scale
from .core.plan import Plan, build, dispose, execute
from .errors import FFTPlanError, InvalidSize, ProviderError, SizeMismatch, TypeMismatch, UnknownKind
from .version import __version__

__all__ = [
    "__version__",
    "bootstrap",
    "build",
    "dct",
    "dispose",
    "execute",
    "fft",
    "idct",
    "ifft",
    "roundtrip_scale",
    "Effort",
    "FFTPlanError",
    "InvalidSize",
    "Plan",
    "PlanCache",
    "ProviderError",
    "SizeMismatch",
    "TransformKind",
    "TypeMismatch",
    "UnknownKind",
]

PLUGINS_ENV = "FFTPLAN_PLUGINS"

_BOOTSTRAPPED = False


def bootstrap() -> None:
    """Load provider plugins named in FFTPLAN_PLUGINS (idempotent)."""

    global _BOOTSTRAPPED
    if _BOOTSTRAPPED:
        return
    _load_plugins()
    _BOOTSTRAPPED = True


def _load_plugins() -> None:
    plugin_env = os.environ.get(PLUGINS_ENV)
    if not plugin_env:
        return
    for item in plugin_env.split(","):
        module_name = item.strip()
        if not module_name:
            continue
        module = importlib.import_module(module_name)
        register = getattr(module, "register", None)
        if callable(register):
            register()
