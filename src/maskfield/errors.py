"""Exception hierarchy shared by the mask compiler and the edit engine."""
from __future__ import annotations


class MaskedInputError(ValueError):
    """Base class for masked-input failures raised by :mod:`maskfield`."""


class InvalidPlaceholderError(MaskedInputError):
    """Raised when a placeholder is not exactly one character."""


__all__ = ["InvalidPlaceholderError", "MaskedInputError"]
