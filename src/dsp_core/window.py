import numpy as np
from typing import Union


def get_window(window: Union[str, np.ndarray], win_length: int) -> np.ndarray:
    """
    Generate an analysis window.

    Parameters
    ----------
    window : str or np.ndarray
        Window specification:
        - 'rectangular': no tapering
        - 'hann': Hann window
        - 'hamming': Hamming window
        - 'blackman': Blackman window
        - 'bartlett': Bartlett (triangular) window
        - np.ndarray: custom window (must have length win_length)
    win_length : int
        Length of the window

    Returns
    -------
    np.ndarray
        Window function of length win_length

    Notes
    -----
    Windows are the periodic ("DFT-even") variants: normalization uses N, not N-1.
    """
    if isinstance(window, np.ndarray):
        if len(window) != win_length:
            raise ValueError(f"Custom window length {len(window)} != win_length {win_length}")
        return window

    n = np.arange(win_length)

    if window == 'rectangular':
        return np.ones(win_length)

    elif window == 'hann':
        # w[n] = 0.5 * (1 - cos(2πn / N))
        return 0.5 - 0.5 * np.cos(2 * np.pi * n / win_length)

    elif window == 'hamming':
        # w[n] = 0.54 - 0.46 * cos(2πn / N)
        return 0.54 - 0.46 * np.cos(2 * np.pi * n / win_length)

    elif window == 'blackman':
        # w[n] = 0.42 - 0.5*cos(2πn/N) + 0.08*cos(4πn/N)
        return (0.42
                - 0.5 * np.cos(2 * np.pi * n / win_length)
                + 0.08 * np.cos(4 * np.pi * n / win_length))

    elif window == 'bartlett':
        # w[n] = 1 - |2n/N - 1|
        return 1.0 - np.abs(2 * n / win_length - 1.0)

    else:
        raise ValueError(f"Unknown window type: {window}")


WINDOW_TYPES = ('rectangular', 'hann', 'hamming', 'blackman', 'bartlett')
