"""
Analysis module.

Combines the DSP core and the feature extractors into frame-level analyses.
"""

from .spectral_comparison import SpectralComparison, SpectralOverlay, count_local_maxima

__all__ = [
    'SpectralComparison',
    'SpectralOverlay',
    'count_local_maxima',
]
