"""
Radix-2 FFT Implementation using Numba JIT

This module implements the iterative Cooley-Tukey FFT algorithm with Numba JIT
acceleration.
Design:
1. Numba JIT compilation (nopython mode)
2. Explicit bit-reversal permutation into a separate buffer
3. Double-buffered butterfly stages: each stage reads one buffer and writes
   the other, then the two are swapped
4. Twiddle factors built once per stage in polar form and advanced by
   multiplication inside the stage

Only power-of-two lengths are supported; padding is the caller's job
(see :func:`fftspectrum.dsp_core.transform.prepare_waveform`).
"""

from typing import Optional

import numpy as np
from numba import jit


def next_pow2(n: int) -> int:
    """Return the smallest power of two >= n (1 for n <= 1)."""
    p = 1
    while p < n:
        p <<= 1
    return p


def is_pow2(n: int) -> bool:
    return n > 0 and n & (n - 1) == 0


@jit(nopython=True, cache=True)
def bit_reverse(x: int, n_bits: int) -> int:
    """Reverse the lowest n_bits of x."""
    result = 0
    for _ in range(n_bits):
        result = (result << 1) | (x & 1)
        x >>= 1
    return result


@jit(nopython=True, cache=True)
def _bit_reverse_into(source: np.ndarray, rev: np.ndarray, n_bits: int) -> None:
    for i in range(len(source)):
        rev[bit_reverse(i, n_bits)] = source[i]


@jit(nopython=True, cache=True)
def _butterfly_stages(rev: np.ndarray, work: np.ndarray, n_bits: int) -> np.ndarray:
    """
    Run all Cooley-Tukey stages over a bit-reversed buffer.

    ``rev`` and ``work`` are used as a read/write pair and swapped after every
    stage. Returns whichever of the two holds the final spectrum.
    """
    N = len(rev)
    src = rev
    dst = work

    for s in range(1, n_bits + 1):
        stage_size = 1 << s
        half_size = stage_size // 2
        w_mult = np.exp(-2j * np.pi / stage_size)

        for k in range(0, N, stage_size):
            w = 1.0 + 0j

            for j in range(half_size):
                even_idx = k + j
                odd_idx = k + j + half_size

                t = w * src[odd_idx]
                u = src[even_idx]

                dst[even_idx] = u + t
                dst[odd_idx] = u - t

                w = w * w_mult

        src, dst = dst, src

    return src


def bit_reverse_permutation(x: np.ndarray, out: Optional[np.ndarray] = None) -> np.ndarray:
    """
    Reorder a power-of-two buffer into bit-reversed index order.

    Parameters
    ----------
    x : np.ndarray
        Complex input of length 2**m
    out : np.ndarray, optional
        Destination buffer of the same length. Allocated if omitted.

    Returns
    -------
    np.ndarray
        ``out`` with ``out[bit_reverse(i, m)] == x[i]``
    """
    x = np.asarray(x, dtype=np.complex128)
    n = len(x)
    if not is_pow2(n):
        raise ValueError(f"Length must be a power of two, got {n}")
    if out is None:
        out = np.empty(n, dtype=np.complex128)
    _bit_reverse_into(x, out, n.bit_length() - 1)
    return out


def fft_radix2(source: np.ndarray, rev: np.ndarray, work: np.ndarray) -> np.ndarray:
    """
    Full-length radix-2 FFT over caller-provided scratch buffers.

    ``rev`` and ``work`` must be complex128 arrays of ``len(source)``; neither
    may alias ``source``. The returned array is one of the two scratch buffers,
    so callers must copy out before releasing them.
    """
    N = len(source)
    if not is_pow2(N):
        raise ValueError(f"FFT length must be a power of two, got {N}")
    if len(rev) != N or len(work) != N:
        raise ValueError(f"Scratch buffers must have length {N}, got {len(rev)} and {len(work)}")

    n_bits = N.bit_length() - 1
    _bit_reverse_into(source, rev, n_bits)
    return _butterfly_stages(rev, work, n_bits)


def fft(x: np.ndarray) -> np.ndarray:
    """
    Compute the 1-D discrete Fourier Transform of a power-of-two buffer.

    Parameters
    ----------
    x : np.ndarray
        Input array (real or complex), length 2**m

    Returns
    -------
    np.ndarray
        Full complex spectrum in natural order, same length as x

    Examples
    --------
    >>> X = fft(np.array([1.0, 0.0, -1.0, 0.0]))
    >>> np.round(X.real, 6)  # [0, 2, 0, 2]
    """
    x = np.asarray(x)
    if x.ndim != 1:
        raise ValueError(f"Input must be 1D, got shape {x.shape}")

    source = x.astype(np.complex128)
    N = len(source)
    rev = np.empty(N, dtype=np.complex128)
    work = np.empty(N, dtype=np.complex128)
    return fft_radix2(source, rev, work).copy()

