"""
Fixed-size FFT engine using Numba JIT

This module implements the iterative Cooley-Tukey radix-2 FFT with Numba JIT
acceleration and wraps it in a fixed-size engine that produces one-sided
power and magnitude spectra from a sample window.

The transform size is fixed at construction and must be a power of two.
Shorter inputs are zero-padded, longer inputs are truncated to the first
`size` samples.
"""

import math
from typing import Optional

import numpy as np
from numba import jit

from ..utils.logging import get_logger

logger = get_logger(__name__)


@jit(nopython=True, cache=True)
def _bit_reverse(x: int, n_bits: int) -> int:
    """Reverse the bits of x with n_bits."""
    result = 0
    for _ in range(n_bits):
        result = (result << 1) | (x & 1)
        x >>= 1
    return result


@jit(nopython=True, cache=True)
def _fft_radix2_iter(x: np.ndarray) -> np.ndarray:
    """
    Iterative Cooley-Tukey radix-2 DIT FFT (Numba JIT).

    len(x) must be a power of two; the caller guarantees it.
    """
    N = len(x)
    n_bits = int(math.log2(N))

    # Bit-reversal permutation
    X = np.empty(N, dtype=np.complex128)
    for i in range(N):
        X[_bit_reverse(i, n_bits)] = x[i]

    # Butterfly stages: size 2, 4, 8, ..., N
    stage_size = 2
    while stage_size <= N:
        half_size = stage_size // 2
        w_mult = np.exp(-2j * np.pi / stage_size)

        for k in range(0, N, stage_size):
            w = 1.0 + 0j
            for j in range(half_size):
                even_idx = k + j
                odd_idx = even_idx + half_size

                even = X[even_idx]
                odd = X[odd_idx] * w

                X[even_idx] = even + odd
                X[odd_idx] = even - odd

                w = w * w_mult

        stage_size *= 2

    return X


def is_power_of_two(n: int) -> bool:
    return isinstance(n, (int, np.integer)) and n > 0 and (n & (n - 1)) == 0


class Fft:
    """
    Fast Fourier Transform of a fixed power-of-two size.

    Parameters
    ----------
    size : int
        Transform size. Must be a positive power of two.

    Examples
    --------
    >>> fft = Fft(512)
    >>> power = fft.power_spectrum(np.random.randn(512), normalize=False)
    >>> power.shape
    (257,)
    """

    def __init__(self, size: int = 512):
        if not is_power_of_two(size):
            raise ValueError(f"FFT size must be a positive power of 2, got {size}")

        self._size = int(size)
        logger.debug(f"Created FFT engine: size={self._size}")

    @property
    def size(self) -> int:
        return self._size

    @property
    def n_bins(self) -> int:
        """Number of one-sided spectrum bins (size // 2 + 1)."""
        return self._size // 2 + 1

    def _prepare(self, samples: np.ndarray) -> np.ndarray:
        samples = np.asarray(samples, dtype=np.float64)
        if samples.ndim != 1:
            raise ValueError(f"Input must be 1D, got shape {samples.shape}")

        # Pad or truncate to the transform size
        block = np.zeros(self._size, dtype=np.complex128)
        n = min(len(samples), self._size)
        block[:n] = samples[:n]
        return block

    def direct(self, samples: np.ndarray) -> np.ndarray:
        """
        Full complex spectrum of `samples` (length `size`).
        """
        return _fft_radix2_iter(self._prepare(samples))

    def one_sided(self, samples: np.ndarray) -> np.ndarray:
        """Non-negative frequency terms of the complex spectrum."""
        return self.direct(samples)[:self.n_bins]

    def power_spectrum(self, samples: np.ndarray, normalize: bool = True) -> np.ndarray:
        """
        Compute the one-sided power spectrum |X[k]|^2, k = 0..size/2.

        Parameters
        ----------
        samples : np.ndarray
            Sample window (zero-padded or truncated to `size`)
        normalize : bool
            Divide the power by the FFT size

        Returns
        -------
        np.ndarray
            Power spectrum, shape (size // 2 + 1,)
        """
        X = self.one_sided(samples)
        power = X.real ** 2 + X.imag ** 2

        if normalize:
            power /= self._size

        return power

    def magnitude_spectrum(self, samples: np.ndarray, normalize: bool = True) -> np.ndarray:
        """
        Compute the one-sided magnitude spectrum |X[k]|, k = 0..size/2.
        """
        magnitude = np.abs(self.one_sided(samples))

        if normalize:
            magnitude /= self._size

        return magnitude

    def frequencies(self, sampling_rate: Optional[int] = None) -> np.ndarray:
        """
        Bin center frequencies in Hz, or in rad/sample when no sampling rate is given.
        """
        k = np.arange(self.n_bins)
        if sampling_rate is None:
            return 2 * np.pi * k / self._size
        return k * sampling_rate / self._size

    def __repr__(self) -> str:
        return f"Fft(size={self._size})"
