#!/usr/bin/env python3
"""
Analysis script for CWT scaleogram results.
Takes a pickled result file and plots the signal and its scaleogram.
"""

import numpy as np
import matplotlib.pyplot as plt
import pickle
import sys
import os
import argparse
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

def analyze_cwt_run(results_file):
    """
    Analyze CWT results from a pickled file.

    Parameters:
    -----------
    results_file : str
        Path to the pickled results file
    """

    print(f"Loading and analyzing CWT results from: {results_file}")
    print("=" * 70)

    # Load results
    try:
        with open(results_file, 'rb') as f:
            result = pickle.load(f)
    except FileNotFoundError:
        print(f"Results file '{results_file}' not found!")
        print("Run 'python example_CWT_run_sine_case.py' first to generate results.")
        return None
    except Exception as e:
        print(f"Error loading results file: {e}")
        return None

    # Extract data
    coefficients = result['coefficients']
    scales = result['scales']
    periods = result['periods']
    x = result.get('signal')
    time = result.get('time', np.arange(result['n_samples']))
    parameters = result.get('parameters', {})

    row_means = coefficients.mean(axis=1)
    strongest = int(np.argmax(row_means))

    # Print summary
    print("Scaleogram Summary:")
    print(f"  Wavelet: {result['wavelet']}")
    print(f"  Shape: {coefficients.shape[0]} scales x {coefficients.shape[1]} samples")
    print(f"  Padded FFT length: {result['padded_length']}")
    print(f"  Scale range: {np.min(scales):.3f} - {np.max(scales):.3f}")
    print(f"  Peak magnitude: {np.max(coefficients):.4f}")
    print(f"  Strongest row: {strongest} (scale {scales[strongest]:.3f}, period {periods[strongest]:.4f})")
    print(f"  Compute time: {result['timing']['total_time']:.3f} s")

    if parameters:
        print(f"\nRun Parameters:")
        for key, value in parameters.items():
            print(f"  {key}: {value}")

    # Display normalisation; an all-zero scaleogram stays zero
    peak = np.max(coefficients)
    display = coefficients / peak if peak > 0 else coefficients

    fig = plt.figure(figsize=(12, 9))
    fig.suptitle(f"CWT Scaleogram - {result['wavelet']}", fontsize=14, fontweight='bold')

    # 1. Signal
    ax1 = plt.subplot(3, 1, 1)
    if x is not None:
        plt.plot(time, x, 'b-', linewidth=0.8)
    plt.grid(True, alpha=0.3)
    plt.xlabel('Time')
    plt.ylabel('Amplitude')
    plt.title('Input Signal')

    # 2. Scaleogram, rows in scale order top to bottom
    ax2 = plt.subplot(3, 1, (2, 3))
    extent = [time[0], time[-1], scales[-1], scales[0]]
    image = plt.imshow(display, aspect='auto', cmap='jet', extent=extent,
                       origin='upper' if scales[0] >= scales[-1] else 'lower')
    plt.colorbar(image, label='Normalised magnitude')
    plt.xlabel('Time')
    plt.ylabel('Scale')
    plt.title('Scaleogram (max-normalised)')

    plt.tight_layout()

    # Save the plot
    plot_filename = results_file.replace('.pkl', '_analysis.png')
    plt.savefig(plot_filename, dpi=300, bbox_inches='tight')
    print(f"\nAnalysis plot saved as: {plot_filename}")

    # Show the plot
    plt.show()

    return result

def main():
    """Main function for command line usage."""
    parser = argparse.ArgumentParser(description='Analyze CWT scaleogram results')
    parser.add_argument('results_file', nargs='?', default='sine_morlet_cwt_results.pkl',
                       help='Path to results pickle file (default: sine_morlet_cwt_results.pkl)')

    args = parser.parse_args()

    if not os.path.exists(args.results_file):
        print(f"Results file '{args.results_file}' not found!")
        print("Available result files in current directory:")
        pkl_files = [f for f in os.listdir('.') if f.endswith('.pkl')]
        if pkl_files:
            for f in pkl_files:
                print(f"  {f}")
        else:
            print("  No .pkl files found")
        return

    analyze_cwt_run(args.results_file)

if __name__ == "__main__":
    main()
