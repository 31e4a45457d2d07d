"""
Linear prediction analysis: autocorrelation + Levinson-Durbin recursion.

Prediction polynomial convention:

    A(z) = 1 + a[1] z^-1 + ... + a[p] z^-p

so that the all-pole model of a frame is H(z) = sqrt(error) / A(z).
"""

from typing import Tuple

import numpy as np
from numba import jit


def autocorrelation(x: np.ndarray, order: int) -> np.ndarray:
    """
    Biased autocorrelation r[0..order] of a frame.

    r[i] = sum_n x[n] * x[n + i]

    Lags beyond the frame length are zero.
    """
    x = np.asarray(x, dtype=np.float64)
    if x.ndim != 1:
        raise ValueError(f"Input must be 1D, got shape {x.shape}")

    n = len(x)
    r = np.zeros(order + 1)
    if n == 0:
        return r

    full = np.correlate(x, x, mode='full')
    n_lags = min(order + 1, n)
    r[:n_lags] = full[n - 1:n - 1 + n_lags]
    return r


@jit(nopython=True, cache=True)
def _levinson_durbin(r: np.ndarray, order: int):
    a = np.zeros(order + 1)
    a[0] = 1.0
    error = r[0]

    if error == 0.0:
        return a, 0.0

    tmp = np.zeros(order + 1)

    for i in range(1, order + 1):
        # Reflection coefficient
        acc = r[i]
        for j in range(1, i):
            acc += a[j] * r[i - j]
        k = -acc / error

        for j in range(1, i):
            tmp[j] = a[j] + k * a[i - j]
        for j in range(1, i):
            a[j] = tmp[j]
        a[i] = k

        error *= 1.0 - k * k

    return a, error


def levinson_durbin(r: np.ndarray, order: int) -> Tuple[np.ndarray, float]:
    """
    Solve the Yule-Walker equations for the prediction coefficients.

    Parameters
    ----------
    r : np.ndarray
        Autocorrelation r[0..order]
    order : int
        Prediction order p

    Returns
    -------
    a : np.ndarray
        Coefficients of A(z), a[0] = 1, shape (order + 1,)
    error : float
        Final prediction error. Zero when r[0] == 0 (silent frame); a is
        then [1, 0, ..., 0].
    """
    r = np.asarray(r, dtype=np.float64)
    if order < 1:
        raise ValueError(f"LPC order must be >= 1, got {order}")
    if len(r) < order + 1:
        raise ValueError(f"Need {order + 1} autocorrelation lags, got {len(r)}")

    a, error = _levinson_durbin(r, order)
    return a, float(error)


def lpc(frame: np.ndarray, order: int) -> np.ndarray:
    """
    LPC features of a single frame.

    Returns
    -------
    np.ndarray
        [error, a1, ..., ap], shape (order + 1,). features[0] is the
        prediction error (the squared gain of the all-pole model).
    """
    r = autocorrelation(frame, order)
    a, error = levinson_durbin(r, order)

    features = a.copy()
    features[0] = error
    return features
