"""
DSP Core Module - Hand-written radix-2 FFT spectrum pipeline

Modules:
    - fft: Iterative Cooley-Tukey FFT (bit reversal + double-buffered stages)
    - window: Window coefficient functions
    - spectrum: Normalization and adaptive low-pass filter
    - transform: End-to-end waveform -> half spectrum entry point
"""

from .fft import fft, fft_radix2, bit_reverse, bit_reverse_permutation, next_pow2, is_pow2
from .window import Window, get_window, apply_window, resolve_window
from .spectrum import normalize_spectrum, low_pass_filter, postprocess_spectrum, magnitude
from .transform import transform, transform_with_config, prepare_waveform

__all__ = [
    # FFT functions
    'fft',
    'fft_radix2',
    'bit_reverse',
    'bit_reverse_permutation',
    'next_pow2',
    'is_pow2',
    # Window functions
    'Window',
    'get_window',
    'apply_window',
    'resolve_window',
    # Post-processing
    'normalize_spectrum',
    'low_pass_filter',
    'postprocess_spectrum',
    'magnitude',
    # Pipeline
    'transform',
    'transform_with_config',
    'prepare_waveform',
]
