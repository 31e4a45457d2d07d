"""
IIR filter with rational transfer function H(z) = B(z) / A(z).

Used here as the all-pole LPC model: b = [gain], a = [1, a1, ..., ap]. The
filter is stateless: frequency_response evaluates H on the FFT grid and
apply filters a finite array from zero initial conditions.
"""

from typing import Optional, Sequence

import numpy as np
from numba import jit

from .fft import Fft


class FrequencyResponse:
    """
    Complex frequency response sampled at n_bins points in [0, pi].
    """

    def __init__(self, response: np.ndarray, fft_size: int):
        self.response = response
        self.fft_size = fft_size

    def __len__(self) -> int:
        return len(self.response)

    @property
    def magnitude(self) -> np.ndarray:
        return np.abs(self.response)

    @property
    def power(self) -> np.ndarray:
        return self.response.real ** 2 + self.response.imag ** 2

    @property
    def phase(self) -> np.ndarray:
        return np.angle(self.response)

    def frequencies(self, sampling_rate: Optional[int] = None) -> np.ndarray:
        """Bin frequencies in Hz, or in rad/sample when no sampling rate is given."""
        k = np.arange(len(self.response))
        if sampling_rate is None:
            return 2 * np.pi * k / self.fft_size
        return k * sampling_rate / self.fft_size


@jit(nopython=True, cache=True)
def _lfilter(b: np.ndarray, a: np.ndarray, x: np.ndarray) -> np.ndarray:
    """Direct form I difference equation; a[0] == 1."""
    n_b = len(b)
    n_a = len(a)
    y = np.zeros(len(x))

    for n in range(len(x)):
        acc = 0.0
        for k in range(min(n_b, n + 1)):
            acc += b[k] * x[n - k]
        for k in range(1, min(n_a, n + 1)):
            acc -= a[k] * y[n - k]
        y[n] = acc

    return y


class IirFilter:
    """
    Parameters
    ----------
    b : sequence of float
        Feedforward (numerator) coefficients
    a : sequence of float
        Feedback (denominator) coefficients, a[0] != 0

    Both sequences are normalized by a[0].
    """

    def __init__(self, b: Sequence[float], a: Sequence[float]):
        b = np.array(b, dtype=np.float64)
        a = np.array(a, dtype=np.float64)

        if b.ndim != 1 or len(b) == 0:
            raise ValueError(f"Numerator must be a non-empty 1D sequence, got shape {b.shape}")
        if a.ndim != 1 or len(a) == 0:
            raise ValueError(f"Denominator must be a non-empty 1D sequence, got shape {a.shape}")
        if a[0] == 0:
            raise ValueError("Denominator a[0] must be non-zero")

        self._b = b / a[0]
        self._a = a / a[0]

    @classmethod
    def from_lpc(cls, features: Sequence[float]) -> 'IirFilter':
        """
        Build the all-pole model of one LPC feature vector.

        features[0] holds the prediction error; the filter gain is
        sqrt(features[0]) and the denominator is the vector with its first
        entry replaced by 1.0. The caller's sequence is not modified.
        """
        a = np.array(features, dtype=np.float64)

        if a.ndim != 1 or len(a) == 0:
            raise ValueError("Cannot build an all-pole filter from an empty feature vector")
        if not a[0] > 0:
            raise ValueError(f"Prediction error must be positive to derive the gain, got {a[0]}")

        gain = np.sqrt(a[0])
        a[0] = 1.0

        return cls([gain], a)

    @property
    def b(self) -> np.ndarray:
        return self._b

    @property
    def a(self) -> np.ndarray:
        return self._a

    def frequency_response(self, length: int = 512) -> FrequencyResponse:
        """
        Evaluate H(e^jw) at w = 2*pi*k / length, k = 0..length/2.

        Parameters
        ----------
        length : int
            FFT size of the frequency grid (power of 2, at least as long as
            both coefficient sequences)

        Returns
        -------
        FrequencyResponse
            length // 2 + 1 complex bins
        """
        fft = Fft(length)

        if max(len(self._b), len(self._a)) > length:
            raise ValueError(f"FFT size {length} is shorter than the filter "
                             f"({len(self._b)}, {len(self._a)} coefficients)")

        # NaN/inf from zeros of A(z) on the grid propagate to the caller
        with np.errstate(divide='ignore', invalid='ignore'):
            response = fft.one_sided(self._b) / fft.one_sided(self._a)

        return FrequencyResponse(response, length)

    def apply(self, x: np.ndarray) -> np.ndarray:
        """
        Filter a finite signal from zero initial state.
        """
        x = np.asarray(x, dtype=np.float64)
        if x.ndim != 1:
            raise ValueError(f"Input must be 1D, got shape {x.shape}")
        return _lfilter(self._b, self._a, x)

    def __repr__(self) -> str:
        return f"IirFilter(order={len(self._a) - 1}, b={self._b.tolist()})"
