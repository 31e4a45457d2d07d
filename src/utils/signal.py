"""
Single-channel sample buffer.
"""

from typing import Union

import numpy as np


class DiscreteSignal:
    """
    Immutable sequence of samples with a sampling rate.

    Args:
        samples: 1D sequence of real samples
        sampling_rate: Sampling rate in Hz (positive integer)

    Slicing by sample index returns a new DiscreteSignal:

    >>> s = DiscreteSignal(np.zeros(16000), 16000)
    >>> s[160:672].length
    512
    """

    def __init__(self, samples, sampling_rate: int):
        if sampling_rate <= 0:
            raise ValueError(f"Sampling rate must be positive, got {sampling_rate}")

        samples = np.array(samples, dtype=np.float64)
        if samples.ndim != 1:
            raise ValueError(f"Samples must be 1D, got shape {samples.shape}")
        samples.setflags(write=False)

        self._samples = samples
        self._sampling_rate = int(sampling_rate)

    @property
    def samples(self) -> np.ndarray:
        return self._samples

    @property
    def sampling_rate(self) -> int:
        return self._sampling_rate

    @property
    def length(self) -> int:
        return len(self._samples)

    @property
    def duration(self) -> float:
        """Duration in seconds."""
        return self.length / self._sampling_rate

    def __len__(self) -> int:
        return self.length

    def slice(self, start: int, end: int) -> 'DiscreteSignal':
        """
        Samples in [start, end). Requires 0 <= start <= end <= length.
        """
        if not 0 <= start <= end <= self.length:
            raise IndexError(f"Invalid slice [{start}, {end}) for signal of length {self.length}")
        return DiscreteSignal(self._samples[start:end], self._sampling_rate)

    def __getitem__(self, key: Union[int, slice]):
        if isinstance(key, slice):
            if key.step not in (None, 1):
                raise ValueError("Signal slices do not support a step")
            start = 0 if key.start is None else key.start
            end = self.length if key.stop is None else key.stop
            return self.slice(start, end)
        return self._samples[key]

    @classmethod
    def sine(cls, frequency: float, sampling_rate: int, duration: float,
             amplitude: float = 1.0, phase: float = 0.0) -> 'DiscreteSignal':
        """Synthetic sine tone of the given duration (seconds)."""
        n = int(round(duration * sampling_rate))
        t = np.arange(n) / sampling_rate
        return cls(amplitude * np.sin(2 * np.pi * frequency * t + phase), sampling_rate)

    def __repr__(self) -> str:
        return f"DiscreteSignal(length={self.length}, sampling_rate={self._sampling_rate})"
