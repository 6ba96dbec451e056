"""
Windowed, normalized half-spectrum of a waveform.

    waveform -> zero-pad to 2**m -> window -> radix-2 FFT -> first N/2 bins
    -> scale by 2/N -> optional adaptive low-pass filter

Each call owns its scratch buffers, borrowed from a :class:`ScratchPool` and
handed back before the call returns.
"""

import numpy as np
from typing import Optional, Sequence, Union

from ..config import (
    DEFAULT_ENABLE_LOW_PASS_FILTER,
    DEFAULT_THRESHOLD,
    DEFAULT_WINDOW,
    SpectrumConfig,
)
from ..utils.logging import get_logger
from ..utils.pool import ScratchPool, shared_pool
from .fft import fft_radix2, next_pow2
from .spectrum import postprocess_spectrum
from .window import Window, apply_window, resolve_window

logger = get_logger(__name__)

Samples = Union[Sequence[float], Sequence[complex], np.ndarray]


def _as_waveform(samples: Samples) -> np.ndarray:
    x = np.asarray(samples)
    if x.ndim != 1:
        raise ValueError(f"Input must be 1D, got shape {x.shape}")
    return x


def prepare_waveform(samples: Optional[Samples], out: Optional[np.ndarray] = None) -> Optional[np.ndarray]:
    """
    Lift samples to complex128 and zero-pad them to the next power of two.

    Args:
        samples: Real (float32/float64) or complex samples, or None
        out: Optional destination of length ``next_pow2(len(samples))``

    Returns:
        Padded complex buffer, or None when ``samples`` is None
    """
    if samples is None:
        return None

    x = _as_waveform(samples)
    n = len(x)
    padded = next_pow2(n)

    if out is None:
        out = np.zeros(padded, dtype=np.complex128)
    elif len(out) != padded:
        raise ValueError(f"Output buffer length {len(out)} != padded length {padded}")
    else:
        out[n:] = 0.0

    out[:n] = x
    return out


def transform(
    samples: Optional[Samples],
    window: Union[str, Window] = DEFAULT_WINDOW,
    enable_low_pass_filter: bool = DEFAULT_ENABLE_LOW_PASS_FILTER,
    threshold: float = DEFAULT_THRESHOLD,
    *,
    pool: Optional[ScratchPool] = None
) -> Optional[np.ndarray]:
    """
    Compute the windowed, normalized half spectrum of a waveform.

    Parameters
    ----------
    samples : array-like or None
        Input waveform, float32, float64 or complex. Any length; it is
        zero-padded to the next power of two.
    window : str or Window
        Window function (default: Hamming)
    enable_low_pass_filter : bool
        Zero bins whose magnitude is below ``threshold`` times the peak
    threshold : float
        Ratio of the peak magnitude, nominally in [0, 1]. Not range-checked.
    pool : ScratchPool, optional
        Pool for scratch buffers. Defaults to the shared pool.

    Returns
    -------
    np.ndarray or None
        Complex128 array of length ``next_pow2(len(samples)) // 2``.
        None for None input, an empty array for empty input.

    Examples
    --------
    >>> transform([1.0, 0.0, -1.0, 0.0], window='rectangular')
    array([0.+0.j, 1.+0.j])
    """
    if samples is None:
        logger.debug("transform called with no samples")
        return None

    x = _as_waveform(samples)
    if len(x) == 0:
        return np.empty(0, dtype=np.complex128)

    window_type = resolve_window(window)
    if pool is None:
        pool = shared_pool()

    length = next_pow2(len(x))
    logger.debug(
        f"transform: n={len(x)} padded={length} window={window_type.value} "
        f"low_pass={enable_low_pass_filter} threshold={threshold}"
    )

    with pool.lend(length) as waveform, pool.lend(length) as rev, pool.lend(length) as work:
        prepare_waveform(x, out=waveform)
        apply_window(waveform, window_type)
        spectrum = fft_radix2(waveform, rev, work)
        # Freshly allocated, so the result never aliases a pooled buffer
        result = postprocess_spectrum(spectrum, enable_low_pass_filter, threshold)

    return result


def transform_with_config(
    samples: Optional[Samples],
    config: Optional[SpectrumConfig] = None,
    *,
    pool: Optional[ScratchPool] = None
) -> Optional[np.ndarray]:
    """Run :func:`transform` with settings taken from a :class:`SpectrumConfig`."""
    if config is None:
        config = SpectrumConfig()
    return transform(
        samples,
        window=config.window,
        enable_low_pass_filter=config.enable_low_pass_filter,
        threshold=config.threshold,
        pool=pool,
    )
