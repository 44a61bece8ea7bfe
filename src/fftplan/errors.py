"""Exception hierarchy for fftplan."""
from __future__ import annotations


class FFTPlanError(Exception):
    """Base class for all fftplan errors."""


class InvalidSize(FFTPlanError, ValueError):
    """Raised when a plan size is not a positive sample count for its kind."""


class SizeMismatch(FFTPlanError, ValueError):
    """Raised when execute() receives data whose length differs from the plan size."""


class TypeMismatch(FFTPlanError, TypeError):
    """Raised when input elements cannot feed the plan's transform."""


class UnknownKind(FFTPlanError, ValueError):
    """Raised when a transform kind or DCT type code is not recognised."""


class ProviderError(FFTPlanError, RuntimeError):
    """Raised for unknown, unavailable or duplicate strategy providers."""
