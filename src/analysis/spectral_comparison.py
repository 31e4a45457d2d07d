"""
True power spectrum vs. LPC spectral envelope, per analysis frame.

For frame i the raw samples starting at i * hop_length are transformed with a
fixed-size FFT, and the frame's LPC vector is turned into an all-pole filter
whose frequency response is sampled on the same grid. Both curves are
converted to dB with the same scale so they can be overlaid.
"""

from dataclasses import dataclass
from typing import List

import numpy as np

from ..dsp_core.dct import Dct2
from ..dsp_core.fft import Fft
from ..dsp_core.iir import IirFilter
from ..dsp_core.scale import to_decibel
from ..features.feature_vector import FeatureVector
from ..features.lpc_extractor import LpcExtractor
from ..utils.logging import get_logger
from ..utils.signal import DiscreteSignal

logger = get_logger(__name__)


@dataclass(frozen=True, eq=False)
class SpectralOverlay:
    frame_index: int
    time_position: float
    frequencies: np.ndarray   # Hz, fft_size // 2 + 1 bins
    spectrum_db: np.ndarray
    envelope_db: np.ndarray


def count_local_maxima(values: np.ndarray) -> int:
    """
    Number of local maxima, counted as +/- sign changes of the first difference.

    Flat runs are ignored.
    """
    diff = np.diff(np.asarray(values, dtype=np.float64))
    signs = np.sign(diff)
    signs = signs[signs != 0]
    return int(np.sum((signs[:-1] > 0) & (signs[1:] < 0)))


class SpectralComparison:
    """
    Args:
        signal: Analysed signal
        extractor: LPC extractor (its hop defines the frame positions)
        fft_size: FFT size of the comparison spectra (power of 2)
        dct_size: Number of cepstral coefficients returned by envelope_cepstrum
    """

    def __init__(
        self,
        signal: DiscreteSignal,
        extractor: LpcExtractor,
        fft_size: int = 512,
        dct_size: int = 13
    ):
        self.signal = signal
        self.extractor = extractor
        self.fft = Fft(fft_size)
        self.dct = Dct2(self.fft.n_bins, dct_size)

        frame_size = extractor.frame_size(signal.sampling_rate)
        if frame_size > fft_size:
            logger.warning(f"FFT size {fft_size} is shorter than the analysis frame "
                           f"({frame_size} samples); spectra will be truncated")

        self._vectors = extractor.compute_from(signal)
        self._hop_length = extractor.hop_length(signal.sampling_rate)

        logger.debug(f"Spectral comparison ready: {len(self._vectors)} frames, fft_size={fft_size}")

    @property
    def fft_size(self) -> int:
        return self.fft.size

    @property
    def feature_vectors(self) -> List[FeatureVector]:
        return self._vectors

    @property
    def frame_count(self) -> int:
        return len(self._vectors)

    def _check_index(self, idx: int):
        if not 0 <= idx < len(self._vectors):
            raise IndexError(f"Frame index {idx} out of range for {len(self._vectors)} frames")

    def frame_position(self, idx: int) -> int:
        """First sample of frame idx."""
        self._check_index(idx)
        return idx * self._hop_length

    def frequencies(self) -> np.ndarray:
        return self.fft.frequencies(self.signal.sampling_rate)

    def compute_spectrum(self, idx: int, normalize: bool = False) -> np.ndarray:
        """
        Power spectrum of the fft_size raw samples starting at frame idx.
        """
        pos = self.frame_position(idx)
        end = min(pos + self.fft_size, self.signal.length)
        return self.fft.power_spectrum(self.signal[pos:end].samples, normalize=normalize)

    def estimate_spectrum(self, idx: int) -> np.ndarray:
        """
        LPC envelope of frame idx in dB, at the same bins as compute_spectrum.

        Raises ValueError for frames whose prediction error is not positive
        (e.g. digital silence).
        """
        self._check_index(idx)
        lpc_filter = IirFilter.from_lpc(self._vectors[idx].features)
        return to_decibel(lpc_filter.frequency_response(self.fft_size).power)

    def compare(self, idx: int) -> SpectralOverlay:
        spectrum_db = to_decibel(self.compute_spectrum(idx))
        envelope_db = self.estimate_spectrum(idx)

        return SpectralOverlay(
            frame_index=idx,
            time_position=self._vectors[idx].time_position,
            frequencies=self.frequencies(),
            spectrum_db=spectrum_db,
            envelope_db=envelope_db,
        )

    def envelope_cepstrum(self, idx: int) -> np.ndarray:
        """
        Orthonormal DCT-II of the dB envelope of frame idx (dct_size coefficients).
        """
        return self.dct.direct_norm(self.estimate_spectrum(idx))
