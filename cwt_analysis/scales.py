"""
Scale List Helpers

Builders for the scale lists fed to the CWT and conversions between wavelet
scale and the equivalent Fourier period / frequency.

For a wavelet with Fourier factor F (see wavelets.WAVELET_INFO):
- Period    = F * scale                (samples, or seconds with a sample rate)
- Frequency = 1 / (F * scale)          (cycles/sample, or Hz with a sample rate)
- Scale     = period / F = 1 / (F * frequency)

Scales are in samples; a sample rate only changes the time unit of the
period and frequency side.
"""

import numpy as np
from typing import Optional, Sequence, Union

from .exceptions import InvalidScaleError
from .wavelets import WAVELET_INFO, canonical_name

ArrayLike = Union[float, Sequence[float], np.ndarray]


def _positive_array(values: ArrayLike, label: str, error=ValueError) -> np.ndarray:
    array = np.atleast_1d(np.asarray(values, dtype=float))
    if not np.all(np.isfinite(array)):
        raise error(f"All {label} must be finite")
    if np.any(array <= 0):
        raise error(f"All {label} must be positive")
    return array


class ScaleConverter:
    """
    Convert between wavelet scales and Fourier periods or frequencies.

    Parameters:
    -----------
    wavelet : str, default='morlet'
        Wavelet selector ('morlet' or 'mexicanHat', aliases accepted)
    sample_rate : float, optional
        Samples per second. If None, periods are in samples and frequencies
        in cycles per sample.
    """

    def __init__(self, wavelet: str = 'morlet', sample_rate: Optional[float] = None):
        self.wavelet = canonical_name(wavelet)
        if sample_rate is not None and not sample_rate > 0:
            raise ValueError("Sample rate must be positive")
        self.sample_rate = sample_rate
        self.fourier_factor = WAVELET_INFO[self.wavelet]['fourier_factor']

    @property
    def dt(self) -> float:
        return 1.0 if self.sample_rate is None else 1.0 / self.sample_rate

    def scale_to_period(self, scales: ArrayLike) -> np.ndarray:
        """Equivalent Fourier period of each scale."""
        scales = _positive_array(scales, "scales", InvalidScaleError)
        return self.fourier_factor * scales * self.dt

    def period_to_scale(self, periods: ArrayLike) -> np.ndarray:
        """Scale whose equivalent Fourier period matches each period."""
        periods = _positive_array(periods, "periods")
        return periods / (self.fourier_factor * self.dt)

    def scale_to_frequency(self, scales: ArrayLike) -> np.ndarray:
        """Equivalent Fourier frequency of each scale."""
        return 1.0 / self.scale_to_period(scales)

    def frequency_to_scale(self, frequencies: ArrayLike) -> np.ndarray:
        """Scale whose equivalent Fourier frequency matches each frequency."""
        frequencies = _positive_array(frequencies, "frequencies")
        return self.period_to_scale(1.0 / frequencies)


def linear_scales(start: float = 10.0, stop: float = 0.1, num: int = 100) -> np.ndarray:
    """
    Evenly spaced scales from start to stop (both included).

    The defaults give the 100-row layout used by the scaleogram display:
    coarse scales first, 10 down to 0.1.
    """
    if num < 1:
        raise ValueError("Number of scales must be at least 1")
    scales = np.linspace(start, stop, num)
    _positive_array(scales, "scales", InvalidScaleError)
    return scales


def dyadic_scales(smallest: float, spacing: float = 0.25, num: int = 64) -> np.ndarray:
    """
    Geometric scales smallest * 2**(spacing * j), j = 0 .. num-1.

    Parameters:
    -----------
    smallest : float
        First (finest) scale, in samples
    spacing : float, default=0.25
        Octave fraction between neighbouring scales (4 voices per octave)
    num : int, default=64
        Number of scales
    """
    if num < 1:
        raise ValueError("Number of scales must be at least 1")
    if not spacing > 0:
        raise ValueError("Scale spacing must be positive")
    _positive_array(smallest, "scales", InvalidScaleError)
    return smallest * 2.0 ** (spacing * np.arange(num))


# Convenience functions for direct use
def scale_to_frequency(scales: ArrayLike, wavelet: str = 'morlet',
                       sample_rate: Optional[float] = None) -> np.ndarray:
    """
    Equivalent Fourier frequency for each scale.

    Example:
    --------
    >>> from cwt_analysis.scales import scale_to_frequency
    >>> scale_to_frequency([10.0, 1.0], 'morlet', sample_rate=1000.0)
    """
    return ScaleConverter(wavelet, sample_rate).scale_to_frequency(scales)


def frequency_to_scale(frequencies: ArrayLike, wavelet: str = 'morlet',
                       sample_rate: Optional[float] = None) -> np.ndarray:
    """Scale for each target frequency (Hz with a sample rate, else cycles/sample)."""
    return ScaleConverter(wavelet, sample_rate).frequency_to_scale(frequencies)
