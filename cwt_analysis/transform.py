"""
Continuous Wavelet Transform (CWT)

This module computes a scaleogram: the magnitude of the continuous wavelet
transform of a real signal over a list of scales, using the radix-2 FFT in
cwt_analysis.fft and the real kernels in cwt_analysis.wavelets.

Key features:
- Signal zero-padded to a power of two >= 2N and transformed once
- Per scale: kernel FFT, correlation product, inverse FFT, magnitude row
- Rows divided by sqrt(scale); no normalisation against the global maximum
- fast_mode (vectorized FFT stages and products) or scalar reference loops
- Cooperative cancellation and progress callbacks between scales
"""

import numpy as np
from typing import Any, Callable, Dict, Optional, Sequence, Tuple
import warnings
import time

from .exceptions import (EmptyInputError, InvalidScaleError, InvalidSignalError,
                         TransformCancelled)
from .fft import fft, ifft, padded_length, zero_padded_pair
from .scales import ScaleConverter
from .wavelets import WAVELET_INFO, canonical_name, min_resolved_scale, synthesize_kernel

ProgressCallback = Callable[[int, int, float], None]


class CWTAnalyzer:
    """
    Scaleogram computation for one-dimensional real signals.

    The analyzer keeps no state between calls: every call allocates its own
    workspace, so one instance can serve several threads at once.
    """

    def __init__(self):
        """Initialize the CWT analyzer."""
        # Print a progress line every N scales at verbose >= 2
        self.progress_interval = 10

        self.wavelet_options = {name: info['label'] for name, info in WAVELET_INFO.items()}

    def analyze(self,
                signal: Sequence[float],
                scales: Sequence[float],
                wavelet: str = 'morlet',
                sample_rate: Optional[float] = None,
                fast_mode: bool = True,
                verbose: int = 1,
                progress_callback: Optional[ProgressCallback] = None,
                cancel_check: Optional[Callable[[], bool]] = None) -> Dict[str, Any]:
        """
        Compute the CWT magnitude of a signal at each scale.

        Parameters:
        -----------
        signal : array_like
            Real, finite, uniformly sampled signal of N samples
        scales : array_like
            M strictly positive scales (in samples); their order is the row order
        wavelet : str, default='morlet'
            'morlet' or 'mexicanHat' (aliases 'mexican_hat', 'ricker')
        sample_rate : float, optional
            Samples per second, only used to express 'periods' in seconds and
            'frequencies' in Hz. If None, samples and cycles/sample are used.
        fast_mode : bool, default=True
            Vectorized FFT stages and frequency-domain products. Results agree
            with the scalar reference loops to rounding error.
            Set to False for the reference loops (slow; small inputs only).
        verbose : int, default=1
            Verbosity level for output control:
            - 0: Silent mode (no output)
            - 1: Results only (shape, peak and timing) [default]
            - 2: Full verbose mode (inputs + progress every 10 scales + results)
        progress_callback : callable, optional
            Called as progress_callback(index, total, scale) after each scale,
            with a 1-based index. Observational only.
        cancel_check : callable, optional
            Called before each scale; a truthy return aborts the transform
            with TransformCancelled. No partial result is returned.

        Returns:
        --------
        dict : Dictionary containing:
            - 'coefficients': (M, N) array of non-negative magnitudes
            - 'scales': Scales used (float array, input order)
            - 'wavelet': Canonical wavelet name
            - 'n_samples': Signal length N
            - 'padded_length': FFT length
            - 'periods': Equivalent Fourier period per scale
            - 'frequencies': Equivalent Fourier frequency per scale
            - 'timing': Timing information dictionary

        Raises:
        -------
        EmptyInputError
            Signal or scale list is empty
        InvalidScaleError
            A scale is zero, negative or not finite
        InvalidSignalError
            Signal is not one-dimensional or holds NaN/inf
        TransformCancelled
            cancel_check returned True between scales
        """

        # Start timing
        start_time = time.perf_counter()

        signal, scales, wavelet = self._validate_inputs(signal, scales, wavelet, sample_rate)

        n_samples = len(signal)
        n_scales = len(scales)
        nfft = padded_length(n_samples)
        # Kernel peak index; keeps the correlation aligned with the signal start
        center = n_samples / 2.0

        if verbose >= 2:
            print("\nCWT INPUT:")
            print(f"Signal length         : {n_samples} samples")
            print(f"Scales                : {n_scales} ({scales.min():.4g} - {scales.max():.4g})")
            print(f"Wavelet               : {self.wavelet_options[wavelet]}")
            print(f"Padded length         : {nfft}")
            if sample_rate is not None:
                print(f"Sample rate           : {sample_rate:.1f} Hz")
            print(f"Fast mode             : {fast_mode}")
            print(f"Verbose level         : {verbose}")

        resolved = min_resolved_scale(wavelet)
        n_under = int(np.sum(scales < resolved))
        if n_under:
            warnings.warn(f"{n_under} of {n_scales} scales are below {resolved:.3f} samples; "
                          f"{self.wavelet_options[wavelet]} kernels at those scales are under-sampled",
                          stacklevel=2)

        # Signal spectrum, shared by every scale
        fft_start_time = time.perf_counter()
        signal_re, signal_im = zero_padded_pair(signal, nfft)
        fft(signal_re, signal_im, fast_mode)
        signal_fft_time = time.perf_counter() - fft_start_time

        workspace = self._allocate_workspace(nfft)
        coefficients = np.empty((n_scales, n_samples))

        loop_start_time = time.perf_counter()
        for i, scale in enumerate(scales):
            if cancel_check is not None and cancel_check():
                raise TransformCancelled(
                    f"Transform cancelled before scale {i + 1} of {n_scales}")

            coefficients[i] = self._scale_row(signal_re, signal_im, scale, wavelet,
                                              center, n_samples, workspace, fast_mode)

            if progress_callback is not None:
                progress_callback(i + 1, n_scales, float(scale))

            if verbose >= 2 and ((i + 1) % self.progress_interval == 0 or i == 0):
                print(f"Scale {i + 1}/{n_scales} - s = {scale:.4g}")
        scale_loop_time = time.perf_counter() - loop_start_time

        converter = ScaleConverter(wavelet, sample_rate)
        periods = converter.scale_to_period(scales)

        total_time = time.perf_counter() - start_time

        if verbose >= 1:
            peak_row, peak_col = np.unravel_index(np.argmax(coefficients), coefficients.shape)
            print("\nRESULT:")
            print(f"Scaleogram            : {n_scales} x {n_samples}")
            print(f"Peak magnitude        : {coefficients[peak_row, peak_col]:.4g} "
                  f"(scale {scales[peak_row]:.4g}, sample {peak_col})")
            print(f"Timing                : {total_time:.3f}s")
            if verbose >= 2:
                print(f"Signal FFT            : {signal_fft_time:.3f}s")
                print(f"Scale loop            : {scale_loop_time:.3f}s")

        timing_info = {
            'total_time': total_time,
            'signal_fft_time': signal_fft_time,
            'scale_loop_time': scale_loop_time,
            'fast_mode_enabled': fast_mode
        }

        return {
            'coefficients': coefficients,
            'scales': scales,
            'wavelet': wavelet,
            'n_samples': n_samples,
            'padded_length': nfft,
            'periods': periods,
            'frequencies': 1.0 / periods,
            'timing': timing_info
        }

    def _validate_inputs(self, signal: Sequence[float], scales: Sequence[float],
                         wavelet: str, sample_rate: Optional[float]
                         ) -> Tuple[np.ndarray, np.ndarray, str]:
        """Validate and copy the inputs; nothing is computed before this passes."""

        wavelet = canonical_name(wavelet)

        signal = np.array(signal, dtype=float)
        scales = np.array(scales, dtype=float)

        if signal.size == 0:
            raise EmptyInputError("Signal must contain at least one sample")

        if scales.size == 0:
            raise EmptyInputError("At least one scale required")

        if scales.ndim != 1:
            raise InvalidScaleError("Scales must be a one-dimensional sequence")

        if not np.all(np.isfinite(scales)):
            raise InvalidScaleError("All scales must be finite")

        if np.any(scales <= 0):
            raise InvalidScaleError("All scales must be positive")

        if signal.ndim != 1:
            raise InvalidSignalError("Signal must be one-dimensional")

        if not np.all(np.isfinite(signal)):
            raise InvalidSignalError("Signal must contain only finite values")

        if sample_rate is not None and not sample_rate > 0:
            raise ValueError("Sample rate must be positive")

        return signal, scales, wavelet

    def _allocate_workspace(self, nfft: int) -> Dict[str, np.ndarray]:
        """Per-call buffers reused across scales."""
        return {
            'kernel_re': np.zeros(nfft),
            'kernel_im': np.zeros(nfft),
            'conv_re': np.zeros(nfft),
            'conv_im': np.zeros(nfft),
            'product': np.zeros(nfft),
        }

    def _scale_row(self, signal_re: np.ndarray, signal_im: np.ndarray, scale: float,
                   wavelet: str, center: float, n_samples: int,
                   workspace: Dict[str, np.ndarray], fast_mode: bool = True) -> np.ndarray:
        """
        Magnitude row for one scale.

        The kernel spectrum K is combined with the signal spectrum S as
        S * conj(K) (correlation, not plain multiplication):
            re = Sre*Kre + Sim*Kim
            im = Sim*Kre - Sre*Kim
        and the row is |inverse|[:N] / sqrt(scale).
        """
        kernel_re = workspace['kernel_re']
        kernel_im = workspace['kernel_im']
        conv_re = workspace['conv_re']
        conv_im = workspace['conv_im']

        synthesize_kernel(wavelet, scale, len(kernel_re), center, out=kernel_re)
        kernel_im.fill(0.0)
        fft(kernel_re, kernel_im, fast_mode)

        if fast_mode:
            product = workspace['product']
            np.multiply(signal_re, kernel_re, out=conv_re)
            np.multiply(signal_im, kernel_im, out=product)
            conv_re += product
            np.multiply(signal_im, kernel_re, out=conv_im)
            np.multiply(signal_re, kernel_im, out=product)
            conv_im -= product
        else:
            for j in range(len(conv_re)):
                conv_re[j] = signal_re[j] * kernel_re[j] + signal_im[j] * kernel_im[j]
                conv_im[j] = signal_im[j] * kernel_re[j] - signal_re[j] * kernel_im[j]

        # Inverting the conjugated product equals running the forward pass on
        # the product, dividing by n and negating the imaginary part
        np.negative(conv_im, out=conv_im)
        ifft(conv_re, conv_im, fast_mode)

        head_re = conv_re[:n_samples]
        head_im = conv_im[:n_samples]
        return np.sqrt(head_re * head_re + head_im * head_im) / np.sqrt(scale)


# Convenience function for direct use
def cwt(signal: Sequence[float],
        scales: Sequence[float],
        wavelet: str = 'morlet',
        fast_mode: bool = True,
        progress_callback: Optional[ProgressCallback] = None,
        cancel_check: Optional[Callable[[], bool]] = None) -> np.ndarray:
    """
    Scaleogram of a signal: an (M, N) array of CWT magnitudes.

    Row i holds scale i (input order), column t the original sample index.
    Values are >= 0 and are not normalised against their maximum; display
    scaling is up to the caller.

    Example:
    --------
    >>> import numpy as np
    >>> from cwt_analysis import cwt
    >>>
    >>> t = np.arange(1000) / 1000.0
    >>> signal = np.sin(2 * np.pi * t)
    >>> scales = np.linspace(10.0, 0.1, 100)
    >>> scaleogram = cwt(signal, scales, 'morlet')
    >>> scaleogram.shape
    (100, 1000)
    """
    analyzer = CWTAnalyzer()
    result = analyzer.analyze(signal, scales, wavelet=wavelet, fast_mode=fast_mode,
                              verbose=0, progress_callback=progress_callback,
                              cancel_check=cancel_check)
    return result['coefficients']
