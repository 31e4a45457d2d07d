"""
LPC feature extraction.

The signal is cut into frames of `window_size` seconds every `hop_size`
seconds, starting at sample 0. Only full frames are analysed: a trailing
partial frame is dropped, never zero-padded. A signal shorter than one
window yields no feature vectors.

Each frame produces order + 1 features:

    [error, lpc1, ..., lpcP]

where error is the final Levinson-Durbin prediction error and lpc1..lpcP are
the coefficients of A(z) = 1 + lpc1 z^-1 + ... + lpcP z^-P.
"""

from typing import List, Optional, Union

import numpy as np

from ..dsp_core.lpc import lpc
from ..dsp_core.window import get_window
from ..utils.logging import get_logger
from ..utils.signal import DiscreteSignal
from .feature_vector import FeatureVector

logger = get_logger(__name__)


class LpcExtractor:
    """
    Args:
        order: LPC order P
        window_size: Frame duration in seconds
        hop_size: Hop duration in seconds
        pre_emphasis: Pre-emphasis coefficient in [0, 1) applied to the analysed range (0 disables)
        window: Analysis window applied to every frame ('rectangular', 'hann', ...)

    Example:
        >>> extractor = LpcExtractor(16, window_size=0.032, hop_size=0.010)
        >>> vectors = extractor.compute_from(signal)
    """

    def __init__(
        self,
        order: int,
        window_size: float = 0.032,
        hop_size: float = 0.010,
        pre_emphasis: float = 0.0,
        window: Union[str, np.ndarray] = 'rectangular'
    ):
        if order < 1:
            raise ValueError(f"LPC order must be >= 1, got {order}")
        if window_size <= 0:
            raise ValueError(f"Window size must be positive, got {window_size}")
        if hop_size <= 0:
            raise ValueError(f"Hop size must be positive, got {hop_size}")
        if not 0.0 <= pre_emphasis < 1.0:
            raise ValueError(f"Pre-emphasis must be in [0, 1), got {pre_emphasis}")

        self.order = int(order)
        self.window_size = window_size
        self.hop_size = hop_size
        self.pre_emphasis = pre_emphasis
        self.window = window

    @property
    def feature_count(self) -> int:
        return self.order + 1

    @property
    def feature_descriptions(self) -> List[str]:
        return ['error'] + [f'lpc{i}' for i in range(1, self.order + 1)]

    def frame_size(self, sampling_rate: int) -> int:
        """Frame length in samples."""
        return int(round(self.window_size * sampling_rate))

    def hop_length(self, sampling_rate: int) -> int:
        """Hop length in samples."""
        return int(round(self.hop_size * sampling_rate))

    def _checked_hop_length(self, sampling_rate: int) -> int:
        hop_length = self.hop_length(sampling_rate)
        if hop_length < 1:
            raise ValueError(f"Hop size {self.hop_size}s is shorter than one sample at {sampling_rate} Hz")
        return hop_length

    def frame_count(self, n_samples: int, sampling_rate: int) -> int:
        """Number of full frames that fit into n_samples."""
        hop_length = self._checked_hop_length(sampling_rate)
        frame_size = self.frame_size(sampling_rate)
        if n_samples < frame_size:
            return 0
        return (n_samples - frame_size) // hop_length + 1

    def compute_from(
        self,
        signal: DiscreteSignal,
        start: int = 0,
        end: Optional[int] = None
    ) -> List[FeatureVector]:
        """
        Extract LPC feature vectors from signal samples [start, end).

        Returns:
            Feature vectors ordered by frame index; the i-th vector has
            time_position == i * hop_size.
        """
        sr = signal.sampling_rate
        frame_size = self.frame_size(sr)
        hop_length = self._checked_hop_length(sr)

        if frame_size <= self.order:
            raise ValueError(f"Frame of {frame_size} samples is too short for LPC order {self.order}")

        if end is None:
            end = signal.length
        y = signal.slice(start, end).samples

        if self.pre_emphasis > 0 and len(y) > 0:
            y = np.append(y[0], y[1:] - self.pre_emphasis * y[:-1])

        window = get_window(self.window, frame_size)
        n_frames = self.frame_count(len(y), sr)

        logger.debug(f"LPC framing: frame_size={frame_size}, hop_length={hop_length}, "
                     f"order={self.order}, n_frames={n_frames}")

        vectors = []
        for i in range(n_frames):
            pos = i * hop_length
            frame = y[pos:pos + frame_size] * window
            vectors.append(FeatureVector(lpc(frame, self.order), i * self.hop_size))

        return vectors
