import numpy as np
from enum import Enum
from typing import Union


class Window(str, Enum):
    """Window functions applied to the padded waveform before the FFT."""

    RECTANGULAR = 'rectangular'
    TRIANGLE = 'triangle'
    HAMMING = 'hamming'
    HANNING = 'hanning'
    BLACKMAN = 'blackman'
    BLACKMAN_HARRIS = 'blackman_harris'


_ALIASES = {
    'rect': Window.RECTANGULAR,
    'boxcar': Window.RECTANGULAR,
    'triangular': Window.TRIANGLE,
    'bartlett': Window.TRIANGLE,
    'hann': Window.HANNING,
    'blackmanharris': Window.BLACKMAN_HARRIS,
}


def resolve_window(window: Union[str, Window]) -> Window:
    """Map a window name (case-insensitive, aliases allowed) to a :class:`Window`."""
    if isinstance(window, Window):
        return window
    if not isinstance(window, str):
        raise ValueError(f"Unknown window type: {window!r}")

    key = window.strip().lower().replace('-', '_')
    if key in _ALIASES:
        return _ALIASES[key]
    try:
        return Window(key)
    except ValueError:
        raise ValueError(f"Unknown window type: {window}") from None


def get_window(window: Union[str, Window], win_length: int) -> np.ndarray:
    """
    Generate window coefficients.

    Parameters
    ----------
    window : str or Window
        Window specification:
        - 'rectangular': all ones
        - 'triangle': triangular window peaking at win_length / 2
        - 'hamming': Hamming window
        - 'hanning': Hann window (alias 'hann')
        - 'blackman': Blackman window
        - 'blackman_harris': 4-term Blackman-Harris window
    win_length : int
        Length of the window

    Returns
    -------
    np.ndarray
        Float64 coefficients of length win_length

    Notes
    -----
    All windows are the periodic ("DFT-even") variants: the phase term is
    i / N rather than i / (N - 1), so index N would wrap back onto index 0.
    """
    window_type = resolve_window(window)
    if win_length < 0:
        raise ValueError(f"win_length must be >= 0, got {win_length}")
    if win_length == 0:
        return np.zeros(0)

    n = np.arange(win_length)
    ratio = n / win_length

    if window_type is Window.RECTANGULAR:
        return np.ones(win_length)

    elif window_type is Window.TRIANGLE:
        # w[n] = 1 - |2n/N - 1|
        return 1.0 - np.abs(2.0 * ratio - 1.0)

    elif window_type is Window.HAMMING:
        # w[n] = 0.54 - 0.46 * cos(2πn / N)
        return 0.54 - 0.46 * np.cos(2 * np.pi * ratio)

    elif window_type is Window.HANNING:
        # w[n] = (1 - cos(2πn / N)) / 2
        return (1.0 - np.cos(2 * np.pi * ratio)) / 2.0

    elif window_type is Window.BLACKMAN:
        # w[n] = 0.42 - 0.5*cos(2πn/N) + 0.08*cos(4πn/N)
        return (0.42
                - 0.5 * np.cos(2 * np.pi * ratio)
                + 0.08 * np.cos(4 * np.pi * ratio))

    elif window_type is Window.BLACKMAN_HARRIS:
        return (0.35875
                - 0.48829 * np.cos(2 * np.pi * ratio)
                + 0.14128 * np.cos(4 * np.pi * ratio)
                - 0.01168 * np.cos(6 * np.pi * ratio))

    raise ValueError(f"Unknown window type: {window_type}")


def apply_window(buffer: np.ndarray, window: Union[str, Window]) -> np.ndarray:
    """Scale ``buffer`` in place by the window coefficients and return it."""
    window_type = resolve_window(window)
    if window_type is Window.RECTANGULAR:
        return buffer

    buffer *= get_window(window_type, len(buffer))
    return buffer
