"""
Discrete Cosine Transform of type II with precomputed basis matrices.

The cosine matrices are computed once per (length, dct_size) pair so that every
transform call is a plain matrix-vector product.

Scaling conventions
-------------------
- direct / inverse form an unnormalized pair: inverse(direct(x)) == x when
  length == dct_size (scale constant 1.0).
- direct_norm is the orthonormal DCT-II. Its output must not be passed to
  inverse.
"""

import math
from typing import Optional, Tuple

import numpy as np

from ..utils.logging import get_logger

logger = get_logger(__name__)


class Dct2:
    """
    DCT-II engine.

    Parameters
    ----------
    length : int
        Input frame size
    dct_size : int
        Number of DCT coefficients to produce

    Notes
    -----
    Forward basis:  basis[k, n] = cos((2n + 1) * k * pi / (2 * length))
    Inverse basis:  inv_basis[k, n] = cos((2k + 1) * n * pi / (2 * length)), n >= 1

    Column 0 of the inverse basis stays zero: the DC term enters the inverse
    as the separate 0.5 * input[0] addend.
    """

    def __init__(self, length: int, dct_size: int):
        if length <= 0:
            raise ValueError(f"DCT length must be positive, got {length}")
        if dct_size <= 0:
            raise ValueError(f"DCT size must be positive, got {dct_size}")

        self._length = int(length)
        self._dct_size = int(dct_size)

        m = np.pi / (2 * self._length)
        k = np.arange(self._dct_size)[:, np.newaxis]
        n = np.arange(self._length)

        self._basis = np.cos((2 * n + 1) * k * m)

        self._basis_inv = np.zeros((self._dct_size, self._length))
        self._basis_inv[:, 1:] = np.cos((2 * k + 1) * n[1:] * m)

        self._basis.setflags(write=False)
        self._basis_inv.setflags(write=False)

        logger.debug(f"Precomputed DCT-II matrices: length={self._length}, dct_size={self._dct_size}")

    @property
    def length(self) -> int:
        return self._length

    @property
    def dct_size(self) -> int:
        return self._dct_size

    @property
    def forward_basis(self) -> np.ndarray:
        return self._basis

    @property
    def inverse_basis(self) -> np.ndarray:
        return self._basis_inv

    def _check(self, x: np.ndarray, output: Optional[np.ndarray]) -> Tuple[np.ndarray, np.ndarray]:
        x = np.asarray(x, dtype=np.float64)
        if x.ndim != 1 or len(x) == 0:
            raise ValueError(f"Input must be a non-empty 1D array, got shape {x.shape}")
        if len(x) > self._length:
            raise ValueError(f"Input length {len(x)} exceeds DCT length {self._length}")

        if output is None:
            output = np.empty(self._dct_size)
        elif output.ndim != 1 or not 0 < len(output) <= self._dct_size:
            raise ValueError(f"Output must be 1D with 1..{self._dct_size} elements, "
                             f"got shape {output.shape}")
        return x, output

    def direct(self, x: np.ndarray, output: Optional[np.ndarray] = None) -> np.ndarray:
        """
        DCT-II without normalization.

        output[k] = sum_n x[n] * cos((2n + 1) * k * pi / (2 * length))
        """
        x, output = self._check(x, output)
        output[:] = np.dot(self._basis[:len(output), :len(x)], x)
        return output

    def direct_norm(self, x: np.ndarray, output: Optional[np.ndarray] = None) -> np.ndarray:
        """
        DCT-II with orthonormal scaling.

        Every coefficient is scaled by sqrt(2 / M), M = len(output), and the DC
        coefficient additionally by sqrt(0.5).
        """
        output = self.direct(x, output)
        output *= math.sqrt(2.0 / len(output))
        output[0] *= math.sqrt(0.5)
        return output

    def inverse(self, x: np.ndarray, output: Optional[np.ndarray] = None) -> np.ndarray:
        """
        Inverse of `direct` (DCT-III scaled by 2 / dct_size).

        output[k] = (0.5 * x[0] + sum_{n>=1} x[n] * cos((2k + 1) * n * pi / (2 * length))) * 2 / dct_size
        """
        x, output = self._check(x, output)
        output[:] = 0.5 * x[0] + np.dot(self._basis_inv[:len(output), 1:len(x)], x[1:])
        output *= 2.0 / self._dct_size
        return output

    def __repr__(self) -> str:
        return f"Dct2(length={self._length}, dct_size={self._dct_size})"
