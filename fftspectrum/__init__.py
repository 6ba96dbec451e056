"""
fftspectrum - windowed, normalized FFT magnitude spectra for visualization.
"""

import logging

from .config import SpectrumConfig
from .dsp_core import Window, fft, get_window, magnitude, transform, transform_with_config
from .utils import ScratchPool, get_logger, setup_logging

# Library default: silent unless the application configures logging.
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'SpectrumConfig',
    'Window',
    'fft',
    'get_window',
    'magnitude',
    'transform',
    'transform_with_config',
    'ScratchPool',
    'get_logger',
    'setup_logging',
]

__version__ = '1.0.0'
