"""
Conversions between linear and decibel scale.

Zero maps to -inf and negative values to nan; these are returned as-is, not
clipped.
"""

from typing import Union

import numpy as np

ArrayLike = Union[float, np.ndarray]


def to_decibel(value: ArrayLike, reference: float = 1.0) -> ArrayLike:
    """Amplitude to dB: 20 * log10(value / reference)."""
    with np.errstate(divide='ignore', invalid='ignore'):
        return 20.0 * np.log10(np.asarray(value, dtype=np.float64) / reference)


def to_decibel_power(value: ArrayLike, reference: float = 1.0) -> ArrayLike:
    """Power to dB: 10 * log10(value / reference)."""
    with np.errstate(divide='ignore', invalid='ignore'):
        return 10.0 * np.log10(np.asarray(value, dtype=np.float64) / reference)


def from_decibel(db: ArrayLike, reference: float = 1.0) -> ArrayLike:
    """dB to amplitude."""
    return reference * 10.0 ** (np.asarray(db, dtype=np.float64) / 20.0)


def from_decibel_power(db: ArrayLike, reference: float = 1.0) -> ArrayLike:
    """dB to power."""
    return reference * 10.0 ** (np.asarray(db, dtype=np.float64) / 10.0)

