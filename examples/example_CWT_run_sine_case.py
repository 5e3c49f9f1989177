#!/usr/bin/env python3

import numpy as np
import pickle
import sys
import os
import argparse
from scipy import signal as sig
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from cwt_analysis.scales import linear_scales
from cwt_analysis.transform import CWTAnalyzer


def make_signal(preset, frequency, n_samples):
    """
    Generate one of the test-signal presets over t in [0, 1].

    Parameters:
    -----------
    preset : str
        'sine', 'square', 'sawtooth' or 'chirp'
    frequency : float
        Fundamental frequency in cycles per unit time (chirp: start frequency)
    n_samples : int
        Number of samples
    """
    t = np.arange(n_samples) / n_samples
    phase = 2 * np.pi * frequency * t

    if preset == 'sine':
        return np.sin(phase)
    elif preset == 'square':
        return sig.square(phase)
    elif preset == 'sawtooth':
        return sig.sawtooth(phase)
    elif preset == 'chirp':
        # Sweep up to 20x the start frequency over the record
        return sig.chirp(t, f0=frequency, t1=1.0, f1=20 * frequency, method='linear')
    raise ValueError(f"Unknown signal preset: {preset}")


def run_sine_case(preset='sine', wavelet='morlet'):
    """
    Run the reference scaleogram case and save results to file.

    - Signal: 1 Hz preset, 1000 samples over one second
    - Scales: 100, linear from 10 down to 0.1
    - Wavelet: Morlet (or Mexican Hat)
    """

    print("CWT Scaleogram Case")
    print("=" * 40)

    frequency = 1.0                   # cycles over the record
    n_samples = 1000                  # samples
    sample_rate = 1000.0              # samples per second
    scales = linear_scales(10.0, 0.1, 100)

    print(f"Parameters:")
    print(f"  Signal preset: {preset}")
    print(f"  Frequency: {frequency} Hz")
    print(f"  Samples: {n_samples}")
    print(f"  Scales: {len(scales)} ({scales[0]:.1f} down to {scales[-1]:.1f})")
    print(f"  Wavelet: {wavelet}")

    print(f"\nRunning CWT...")

    x = make_signal(preset, frequency, n_samples)

    analyzer = CWTAnalyzer()
    result = analyzer.analyze(
        signal=x,
        scales=scales,
        wavelet=wavelet,
        sample_rate=sample_rate,
        verbose=2
    )

    # Add inputs to results for analysis
    result['signal'] = x
    result['time'] = np.arange(n_samples) / sample_rate
    result['parameters'] = {
        'preset': preset,
        'frequency': frequency,
        'n_samples': n_samples,
        'sample_rate': sample_rate,
        'wavelet': wavelet
    }

    output_file = f'{preset}_{wavelet}_cwt_results.pkl'
    with open(output_file, 'wb') as f:
        pickle.dump(result, f)

    coefficients = result['coefficients']
    row_means = coefficients.mean(axis=1)
    strongest = int(np.argmax(row_means))

    print(f"\nCWT Complete!")
    print(f"Results saved to: {output_file}")
    print(f"Scaleogram shape: {coefficients.shape[0]} x {coefficients.shape[1]}")
    print(f"Peak magnitude: {np.max(coefficients):.3f}")
    print(f"Strongest row: {strongest} (scale {scales[strongest]:.2f}, "
          f"period {result['periods'][strongest]:.4f} s)")

    print(f"\nRun 'python analyze_CWT_run.py {output_file}' to generate plots.")

    return result


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description='Run the reference CWT case')
    parser.add_argument('--preset', default='sine', choices=['sine', 'square', 'sawtooth', 'chirp'])
    parser.add_argument('--wavelet', default='morlet', choices=['morlet', 'mexicanHat'])
    args = parser.parse_args()

    run_sine_case(args.preset, args.wavelet)
