"""
Default settings for the spectrum transform.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Mapping, Optional, Union

if TYPE_CHECKING:
    from .dsp_core.window import Window

# =============================================================================
# Transform Defaults
# =============================================================================

# Hamming is applied unless the caller picks another window.
DEFAULT_WINDOW = 'hamming'

DEFAULT_ENABLE_LOW_PASS_FILTER = False

# Fraction of the peak bin magnitude below which bins are zeroed.
DEFAULT_THRESHOLD = 0.0

# =============================================================================
# Scratch Pool
# =============================================================================

# Idle buffers kept per power-of-two capacity. One transform holds three.
POOL_MAX_BUFFERS_PER_BUCKET = 8

# Larger buffers are freed on return instead of being pooled.
POOL_MAX_POOLED_LENGTH = 1 << 20

# =============================================================================
# Logging
# =============================================================================

LOGGER_NAME = 'fftspectrum'
LOG_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s'
LOG_DATEFMT = '%Y-%m-%d %H:%M:%S'


@dataclass(frozen=True)
class SpectrumConfig:
    """Window and filter settings for one or many transform calls."""

    window: Union[str, 'Window'] = DEFAULT_WINDOW
    enable_low_pass_filter: bool = DEFAULT_ENABLE_LOW_PASS_FILTER
    threshold: float = DEFAULT_THRESHOLD

    def __post_init__(self):
        from .dsp_core.window import resolve_window

        object.__setattr__(self, 'window', resolve_window(self.window))
        object.__setattr__(self, 'enable_low_pass_filter', bool(self.enable_low_pass_filter))
        object.__setattr__(self, 'threshold', float(self.threshold))

    @classmethod
    def from_dict(cls, config: Optional[Mapping[str, object]]) -> 'SpectrumConfig':
        """
        Build a config from a plain mapping.

        Keys may sit at the top level or under a ``'spectrum'`` section;
        missing keys fall back to the module defaults.
        """
        if not isinstance(config, Mapping):
            return cls()

        section = config.get('spectrum', config)
        if not isinstance(section, Mapping):
            section = config

        return cls(
            window=section.get('window', DEFAULT_WINDOW),
            enable_low_pass_filter=section.get('enable_low_pass_filter', DEFAULT_ENABLE_LOW_PASS_FILTER),
            threshold=section.get('threshold', DEFAULT_THRESHOLD),
        )
