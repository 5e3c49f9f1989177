"""
Exception types raised by the CWT engine.

Input problems are ValueError subclasses so callers that already guard
numerical code with ``except ValueError`` keep working.
"""


class CWTError(ValueError):
    """Base class for invalid input to the transform or the FFT core."""


class InvalidLengthError(CWTError):
    """FFT buffers whose length is not a power of two, or whose halves differ."""


class EmptyInputError(CWTError):
    """Signal or scale list with no elements."""


class InvalidScaleError(CWTError):
    """Scale that is zero, negative or not finite."""


class InvalidSignalError(CWTError):
    """Signal that is not one-dimensional or holds NaN/inf samples."""


class TransformCancelled(RuntimeError):
    """Raised between scales when the caller's cancel check returns True."""
