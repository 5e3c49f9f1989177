"""
Radix-2 Fast Fourier Transform

In-place iterative Cooley-Tukey transform over a pair of real arrays that hold
the real and imaginary parts of a complex sequence. The CWT driver transforms
the padded signal once and every wavelet kernel once per scale with these
routines.

Key features:
- Bit-reversal permutation (per index, and as a whole index map)
- Forward transform with no scaling
- Inverse transform by conjugation around the forward pass, with 1/n scaling
- fast_mode: each butterfly stage done with numpy array operations instead of
  the scalar reference loops (same arithmetic, agrees to rounding)
"""

import math
import numpy as np
from typing import Sequence, Tuple

from .exceptions import InvalidLengthError


def is_power_of_two(n: int) -> bool:
    """Return True for 1, 2, 4, 8, ..."""
    return n > 0 and (n & (n - 1)) == 0


def padded_length(n_samples: int) -> int:
    """
    Smallest power of two that is at least twice the signal length.

    The factor of two leaves room for the kernel so that circular wrap-around
    of the DFT-based correlation does not reach the first n_samples outputs.
    """
    if n_samples < 1:
        raise ValueError("n_samples must be at least 1")
    return 1 << (2 * n_samples - 1).bit_length()


def bit_reverse_index(index: int, n: int) -> int:
    """
    Reverse the low log2(n) bits of index.

    n must be a power of two and 0 <= index < n; neither is checked.
    """
    reversed_index = 0
    for _ in range(n.bit_length() - 1):
        reversed_index = (reversed_index << 1) | (index & 1)
        index >>= 1
    return reversed_index


def bit_reversal_permutation(n: int) -> np.ndarray:
    """Index map i -> bit_reverse_index(i, n) for all i in range(n)."""
    index = np.arange(n)
    reversed_index = np.zeros(n, dtype=index.dtype)
    for _ in range(n.bit_length() - 1):
        reversed_index = (reversed_index << 1) | (index & 1)
        index = index >> 1
    return reversed_index


def zero_padded_pair(samples: Sequence[float], length: int) -> Tuple[np.ndarray, np.ndarray]:
    """Copy samples into a zeroed (real, imag) buffer pair of the given length."""
    samples = np.asarray(samples, dtype=np.float64)
    if len(samples) > length:
        raise InvalidLengthError(
            f"Cannot pad {len(samples)} samples into a buffer of {length}")
    re = np.zeros(length, dtype=np.float64)
    im = np.zeros(length, dtype=np.float64)
    re[:len(samples)] = samples
    return re, im


def _check_buffers(re: np.ndarray, im: np.ndarray) -> int:
    n = len(re)
    if len(im) != n:
        raise InvalidLengthError(
            f"Real and imaginary buffers differ in length ({n} vs {len(im)})")
    if not is_power_of_two(n):
        raise InvalidLengthError(f"FFT length must be a power of two, got {n}")
    return n


def fft(re: np.ndarray, im: np.ndarray, fast_mode: bool = True) -> None:
    """
    Forward discrete Fourier transform, computed in place.

    Parameters:
    -----------
    re : np.ndarray
        Real parts (float64), overwritten with the real part of the spectrum
    im : np.ndarray
        Imaginary parts (float64), overwritten with the imaginary part
    fast_mode : bool, default=True
        Run each butterfly stage as vectorized numpy operations. Set to False
        to run the scalar reference loops.

    Raises:
    -------
    InvalidLengthError
        If the length is not a power of two or the buffers differ in length.
    """
    n = _check_buffers(re, im)

    if fast_mode:
        _fft_vectorized(re, im, n)
    else:
        _fft_loops(re, im, n)


def ifft(re: np.ndarray, im: np.ndarray, fast_mode: bool = True) -> None:
    """
    Inverse discrete Fourier transform, computed in place.

    Conjugates the input, runs the forward transform, divides both parts by n
    and conjugates again, so ifft(fft(x)) returns x. Every step after the
    first conjugation is exact sign flipping or the same division, which
    makes ifft on a conjugated spectrum bit-identical to "forward pass,
    divide by n, negate the imaginary part" on the spectrum itself.
    """
    n = _check_buffers(re, im)

    if fast_mode:
        np.negative(im, out=im)
        _fft_vectorized(re, im, n)
        re /= n
        im /= n
        np.negative(im, out=im)
    else:
        for i in range(n):
            im[i] = -im[i]
        _fft_loops(re, im, n)
        for i in range(n):
            re[i] /= n
            im[i] /= n
        for i in range(n):
            im[i] = -im[i]


def _fft_loops(re: np.ndarray, im: np.ndarray, n: int) -> None:
    """Scalar reference implementation of the forward transform."""

    # Bit-reversal reordering (swap each pair once)
    for i in range(n):
        j = bit_reverse_index(i, n)
        if i < j:
            re[i], re[j] = re[j], re[i]
            im[i], im[j] = im[j], im[i]

    size = 2
    while size <= n:
        halfsize = size // 2
        tablestep = n // size
        for i in range(0, n, size):
            k = 0
            for j in range(i, i + halfsize):
                angle = 2 * math.pi * k / n
                cos_k = math.cos(angle)
                sin_k = math.sin(angle)
                tpre = re[j + halfsize] * cos_k + im[j + halfsize] * sin_k
                tpim = -re[j + halfsize] * sin_k + im[j + halfsize] * cos_k
                re[j + halfsize] = re[j] - tpre
                im[j + halfsize] = im[j] - tpim
                re[j] += tpre
                im[j] += tpim
                k += tablestep
        size *= 2


def _fft_vectorized(re: np.ndarray, im: np.ndarray, n: int) -> None:
    """Stage-wise numpy implementation of the forward transform."""

    perm = bit_reversal_permutation(n)
    re[:] = re[perm]
    im[:] = im[perm]

    size = 2
    while size <= n:
        halfsize = size // 2
        k = np.arange(halfsize) * (n // size)
        angle = 2 * np.pi * k / n
        cos_k = np.cos(angle)  # Shape: (halfsize,), broadcast over blocks
        sin_k = np.sin(angle)

        # Views of shape (n // size, size); one row per butterfly block
        blocks_re = re.reshape(-1, size)
        blocks_im = im.reshape(-1, size)
        upper_re = blocks_re[:, :halfsize]
        upper_im = blocks_im[:, :halfsize]
        lower_re = blocks_re[:, halfsize:]
        lower_im = blocks_im[:, halfsize:]

        tpre = lower_re * cos_k + lower_im * sin_k
        tpim = -lower_re * sin_k + lower_im * cos_k

        # Lower half first: it still needs the old upper values
        lower_re[...] = upper_re - tpre
        lower_im[...] = upper_im - tpim
        upper_re += tpre
        upper_im += tpim

        size *= 2
