"""
Utility modules.
"""

from .logging import setup_logging, get_logger
from .signal import DiscreteSignal

__all__ = ['DiscreteSignal', 'setup_logging', 'get_logger']
