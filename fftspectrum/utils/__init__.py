"""
Utility modules.
"""

from .logging import setup_logging, get_logger
from .pool import ScratchPool, shared_pool

__all__ = ['setup_logging', 'get_logger', 'ScratchPool', 'shared_pool']
