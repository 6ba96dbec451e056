"""
Spectrum post-processing: Nyquist truncation, normalization and the adaptive
low-pass filter.
"""

import numpy as np
from typing import Optional


def normalize_spectrum(spectrum: np.ndarray, out: Optional[np.ndarray] = None) -> np.ndarray:
    """
    Keep the first half of a full spectrum and scale it by 2 / N.

    Args:
        spectrum: Full complex spectrum of length N
        out: Optional destination of length N // 2

    Returns:
        Normalized half spectrum, length N // 2
    """
    n = len(spectrum)
    nyquist = n // 2
    if out is None:
        out = np.empty(nyquist, dtype=np.complex128)
    if nyquist == 0:
        return out

    np.multiply(spectrum[:nyquist], 2.0 / n, out=out)
    return out


def low_pass_filter(spectrum: np.ndarray, threshold: float) -> np.ndarray:
    """
    Zero every bin whose magnitude is strictly below ``threshold`` times the
    peak magnitude. Operates in place.

    The ratio is not range-checked: values above 1 zero everything, negative
    values keep everything.
    """
    if len(spectrum) == 0:
        return spectrum

    mags = np.abs(spectrum)
    cutoff = mags.max() * threshold
    spectrum[mags < cutoff] = 0.0
    return spectrum


def postprocess_spectrum(
    spectrum: np.ndarray,
    enable_low_pass_filter: bool = False,
    threshold: float = 0.0,
    out: Optional[np.ndarray] = None
) -> np.ndarray:
    """Normalize a full spectrum to its half spectrum and optionally filter it."""
    half = normalize_spectrum(spectrum, out=out)
    if enable_low_pass_filter:
        low_pass_filter(half, threshold)
    return half


def magnitude(spectrum: Optional[np.ndarray]) -> Optional[np.ndarray]:
    """Return the magnitude of each bin (``None`` passes through)."""
    if spectrum is None:
        return None
    return np.abs(np.asarray(spectrum)).astype(np.float64)
