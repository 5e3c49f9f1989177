"""CWT Analysis Package

Continuous wavelet transform of one-dimensional real signals: a radix-2 FFT
core, real Morlet and Mexican Hat kernels, and a driver that returns the
time-by-scale magnitude matrix (scaleogram).
"""

from .exceptions import (CWTError, EmptyInputError, InvalidLengthError,
                         InvalidScaleError, InvalidSignalError, TransformCancelled)
from .fft import bit_reverse_index, fft, ifft, padded_length
from .scales import ScaleConverter, dyadic_scales, linear_scales
from .transform import CWTAnalyzer, cwt
from .wavelets import mexican_hat, morlet

__version__ = "1.0.0"
__all__ = [
    "CWTAnalyzer", "cwt",
    "fft", "ifft", "bit_reverse_index", "padded_length",
    "morlet", "mexican_hat",
    "ScaleConverter", "linear_scales", "dyadic_scales",
    "CWTError", "InvalidLengthError", "EmptyInputError", "InvalidScaleError",
    "InvalidSignalError", "TransformCancelled",
]
