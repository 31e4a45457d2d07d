"""
Feature extraction module.

Frame-based extractors that turn a DiscreteSignal into an ordered list of
time-stamped FeatureVector objects.
"""

from .feature_vector import FeatureVector
from .lpc_extractor import LpcExtractor

__all__ = [
    'FeatureVector',
    'LpcExtractor',
]
