"""
DSP Core Module - Hand-written transforms and filters

From-scratch implementations of the numeric engines behind LPC spectral
analysis. Precomputed state (DCT matrices, filter coefficients) is owned by
its instance and never mutated after construction.

Modules:
    - fft: Fixed-size radix-2 FFT engine (power / magnitude spectra)
    - dct: DCT-II with precomputed basis matrices
    - iir: IIR (all-pole) filter and frequency response
    - lpc: Autocorrelation and Levinson-Durbin recursion
    - scale: Linear <-> decibel conversions
    - window: Analysis window functions
"""

from .fft import Fft, is_power_of_two
from .dct import Dct2
from .iir import IirFilter, FrequencyResponse
from .lpc import autocorrelation, levinson_durbin, lpc
from .scale import to_decibel, to_decibel_power, from_decibel, from_decibel_power
from .window import get_window

__all__ = [
    # FFT
    'Fft',
    'is_power_of_two',
    # DCT
    'Dct2',
    # IIR
    'IirFilter',
    'FrequencyResponse',
    # LPC
    'autocorrelation',
    'levinson_durbin',
    'lpc',
    # Scale
    'to_decibel',
    'to_decibel_power',
    'from_decibel',
    'from_decibel_power',
    # Windows
    'get_window',
]

__version__ = '1.0.0'
