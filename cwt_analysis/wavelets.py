"""
Wavelet kernels for the continuous wavelet transform.

Both kernels are real functions of (time, scale). The Morlet kernel is the
cosine-modulated (real) form only; its imaginary spectrum comes from
transforming the real samples, not from a quadrature kernel.
"""

import numpy as np
from typing import Any, Callable, Dict, Optional, Union

ArrayLike = Union[float, np.ndarray]

# Central angular frequency of the Morlet kernel (rad per unit scale)
MORLET_CENTRAL_FREQUENCY = 6.0

MEXICAN_HAT_NORM = np.sqrt(2.0 / (np.sqrt(3.0) * np.pi ** 0.25))


def morlet(t: ArrayLike, scale: float,
           central_frequency: float = MORLET_CENTRAL_FREQUENCY) -> ArrayLike:
    """
    Real Morlet wavelet: sqrt(1/s) * exp(-t^2 / (2 s^2)) * cos(w0 t / s).

    Parameters:
    -----------
    t : float or np.ndarray
        Time offset(s) from the wavelet centre, in samples
    scale : float
        Dilation factor (> 0)
    central_frequency : float, default=6.0
        w0; the CWT driver always uses the default
    """
    norm = np.sqrt(1.0 / scale)
    envelope = np.exp(-(t * t) / (2.0 * scale * scale))
    return norm * envelope * np.cos(central_frequency * t / scale)


def mexican_hat(t: ArrayLike, scale: float) -> ArrayLike:
    """Mexican Hat (negative second derivative of a Gaussian), 1/sqrt(s) normalised."""
    x = t / scale
    return MEXICAN_HAT_NORM * (1.0 - x * x) * np.exp(-x * x / 2.0) / np.sqrt(scale)


# peak_frequency: angular frequency (rad per unit scale) where the kernel
#   spectrum peaks; a kernel is under-sampled once peak_frequency / scale > pi.
# fourier_factor: equivalent Fourier period per unit scale (Torrence & Compo).
WAVELET_INFO: Dict[str, Dict[str, Any]] = {
    'morlet': {
        'function': morlet,
        'label': 'Morlet',
        'peak_frequency': MORLET_CENTRAL_FREQUENCY,
        'fourier_factor': 4.0 * np.pi / (MORLET_CENTRAL_FREQUENCY
                                         + np.sqrt(2.0 + MORLET_CENTRAL_FREQUENCY ** 2)),
    },
    'mexicanHat': {
        'function': mexican_hat,
        'label': 'Mexican Hat',
        'peak_frequency': np.sqrt(2.0),
        'fourier_factor': 2.0 * np.pi / np.sqrt(2.5),
    },
}

_ALIASES = {
    'morlet': 'morlet',
    'mexicanHat': 'mexicanHat',
    'mexican_hat': 'mexicanHat',
    'ricker': 'mexicanHat',
}


def canonical_name(name: str) -> str:
    """Map a wavelet selector (or alias) to its registry key."""
    try:
        return _ALIASES[name]
    except (KeyError, TypeError):
        raise ValueError(
            f"Unsupported wavelet: {name!r}. Choose from {sorted(_ALIASES)}") from None


def get_wavelet(name: str) -> Callable[..., ArrayLike]:
    """Return the kernel function for a wavelet selector."""
    return WAVELET_INFO[canonical_name(name)]['function']


def min_resolved_scale(name: str) -> float:
    """Smallest scale whose spectral peak is still below the Nyquist frequency."""
    return WAVELET_INFO[canonical_name(name)]['peak_frequency'] / np.pi


def synthesize_kernel(wavelet: str, scale: float, length: int, center: float,
                      out: Optional[np.ndarray] = None) -> np.ndarray:
    """
    Sample a wavelet over a padded time axis.

    Sample index t is evaluated at time t - center, which puts the kernel
    peak at index ``center``.

    Parameters:
    -----------
    wavelet : str
        Wavelet selector ('morlet', 'mexicanHat', ...)
    scale : float
        Dilation factor (> 0)
    length : int
        Number of samples (the padded length)
    center : float
        Index of the kernel peak (half the signal length in the CWT driver)
    out : np.ndarray, optional
        Buffer of ``length`` samples to fill instead of allocating one

    Returns:
    --------
    np.ndarray
        Real kernel samples
    """
    function = get_wavelet(wavelet)
    t = np.arange(length, dtype=np.float64) - center
    values = function(t, scale)

    if out is None:
        return values
    out[:] = values
    return out
