#!/usr/bin/env python3
"""
Unit tests for wavelet kernel synthesis.
"""

import unittest
import numpy as np
import os
import sys

# Add parent directory to path for package imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from cwt_analysis.wavelets import (MEXICAN_HAT_NORM, WAVELET_INFO, canonical_name, get_wavelet,
                                   mexican_hat, min_resolved_scale, morlet, synthesize_kernel)


class TestKernelFunctions(unittest.TestCase):
    """Test the Morlet and Mexican Hat formulas."""

    def test_morlet_peak(self):
        """Test that the Morlet peak equals sqrt(1/scale)."""
        for scale in [0.5, 1.0, 4.0, 10.0]:
            with self.subTest(scale=scale):
                self.assertAlmostEqual(morlet(0.0, scale), np.sqrt(1.0 / scale), places=14)

    def test_morlet_formula(self):
        """Test Morlet samples against the closed form."""
        t = np.linspace(-20, 20, 81)
        scale = 3.0
        expected = (np.sqrt(1 / scale) * np.exp(-t ** 2 / (2 * scale ** 2))
                    * np.cos(6.0 * t / scale))
        np.testing.assert_allclose(morlet(t, scale), expected, rtol=1e-12, atol=1e-15)

    def test_morlet_central_frequency(self):
        """Test that a different w0 changes the oscillation, not the envelope."""
        t = np.array([0.0, 1.0, 2.5])
        np.testing.assert_allclose(morlet(t, 2.0, central_frequency=0.0),
                                   np.sqrt(0.5) * np.exp(-t ** 2 / 8.0), rtol=1e-12)

    def test_mexican_hat_formula(self):
        """Test Mexican Hat peak, zero crossings and symmetry."""
        scale = 5.0
        self.assertAlmostEqual(mexican_hat(0.0, scale),
                               MEXICAN_HAT_NORM / np.sqrt(scale), places=14)
        # Zero crossings at t = +/- scale
        self.assertAlmostEqual(mexican_hat(scale, scale), 0.0, places=14)
        self.assertAlmostEqual(mexican_hat(-scale, scale), 0.0, places=14)

        t = np.linspace(0, 30, 31)
        np.testing.assert_allclose(mexican_hat(t, scale), mexican_hat(-t, scale), rtol=1e-14)

    def test_mexican_hat_norm(self):
        """Test the normalisation constant sqrt(2 / (sqrt(3) * pi**0.25))."""
        self.assertAlmostEqual(MEXICAN_HAT_NORM, np.sqrt(2 / (np.sqrt(3) * np.pi ** 0.25)),
                               places=15)

    def test_mexican_hat_zero_mean(self):
        """Test that a well-sampled Mexican Hat sums to (nearly) zero."""
        t = np.arange(-400, 401, dtype=float)
        values = mexican_hat(t, 20.0)
        self.assertLess(abs(values.sum()), 1e-8 * np.abs(values).sum())


class TestWaveletRegistry(unittest.TestCase):
    """Test wavelet selector resolution."""

    def test_selectors_and_aliases(self):
        self.assertIs(get_wavelet('morlet'), morlet)
        for name in ['mexicanHat', 'mexican_hat', 'ricker']:
            with self.subTest(name=name):
                self.assertEqual(canonical_name(name), 'mexicanHat')
                self.assertIs(get_wavelet(name), mexican_hat)

    def test_unknown_wavelet(self):
        for name in ['haar', 'Morlet', '', None]:
            with self.subTest(name=name):
                with self.assertRaises(ValueError):
                    get_wavelet(name)

    def test_wavelet_info(self):
        """Test the registry metadata used for period conversion and warnings."""
        self.assertEqual(set(WAVELET_INFO), {'morlet', 'mexicanHat'})
        self.assertAlmostEqual(WAVELET_INFO['morlet']['fourier_factor'], 1.0330, places=4)
        self.assertAlmostEqual(WAVELET_INFO['mexicanHat']['fourier_factor'], 3.9738, places=4)
        self.assertAlmostEqual(min_resolved_scale('morlet'), 6.0 / np.pi, places=12)
        self.assertAlmostEqual(min_resolved_scale('ricker'), np.sqrt(2.0) / np.pi, places=12)


class TestKernelSynthesis(unittest.TestCase):
    """Test kernels sampled over a padded buffer."""

    def test_peak_at_center(self):
        """Test that the kernel peak sits at the requested index."""
        for wavelet in ['morlet', 'mexicanHat']:
            with self.subTest(wavelet=wavelet):
                kernel = synthesize_kernel(wavelet, 4.0, 256, 50.0)
                self.assertEqual(kernel.shape, (256,))
                self.assertEqual(int(np.argmax(kernel)), 50)

    def test_matches_function_on_shifted_axis(self):
        length, center, scale = 128, 37.5, 6.0
        kernel = synthesize_kernel('morlet', scale, length, center)
        expected = morlet(np.arange(length) - center, scale)
        np.testing.assert_array_equal(kernel, expected)

    def test_fills_output_buffer(self):
        """Test that an output buffer is filled in place and returned."""
        out = np.full(64, np.nan)
        result = synthesize_kernel('mexicanHat', 2.0, 64, 16.0, out=out)
        self.assertIs(result, out)
        self.assertTrue(np.all(np.isfinite(out)))
        self.assertAlmostEqual(out[16], MEXICAN_HAT_NORM / np.sqrt(2.0), places=14)

    def test_tiny_scale_collapses_to_impulse(self):
        """Test that a scale far below one sample leaves only the centre sample."""
        kernel = synthesize_kernel('morlet', 0.1, 64, 20.0)
        self.assertAlmostEqual(kernel[20], np.sqrt(10.0), places=12)
        self.assertLess(np.abs(np.delete(kernel, 20)).max(), 1e-20)


if __name__ == '__main__':
    unittest.main(verbosity=2)
