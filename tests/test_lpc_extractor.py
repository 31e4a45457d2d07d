"""
Tests for LPC feature extraction: framing, time positions and feature layout.

Run:
    pytest tests/test_lpc_extractor.py -v
"""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import numpy as np
import pytest

from src.dsp_core import lpc, get_window
from src.features import FeatureVector, LpcExtractor
from src.utils.signal import DiscreteSignal

SR = 16000


def noise_signal(n_samples: int, seed: int = 0) -> DiscreteSignal:
    rng = np.random.default_rng(seed)
    return DiscreteSignal(rng.standard_normal(n_samples), SR)


class TestFraming:
    """Frame schedule of the extractor."""

    def test_frame_and_hop_in_samples(self):
        extractor = LpcExtractor(16, window_size=0.032, hop_size=0.010)
        assert extractor.frame_size(SR) == 512
        assert extractor.hop_length(SR) == 160

    @pytest.mark.parametrize("n_samples,expected", [
        (16000, 97),
        (512, 1),
        (511, 0),
        (671, 1),
        (672, 2),
        (0, 0),
    ])
    def test_frame_count(self, n_samples, expected):
        extractor = LpcExtractor(16, window_size=0.032, hop_size=0.010)
        vectors = extractor.compute_from(noise_signal(n_samples))

        assert len(vectors) == expected
        assert extractor.frame_count(n_samples, SR) == expected

    def test_frame_count_formula(self):
        """floor((D - W) / H) + 1 frames for D >= W."""
        extractor = LpcExtractor(8, window_size=0.025, hop_size=0.0125)
        W, H = extractor.frame_size(SR), extractor.hop_length(SR)

        for n_samples in [400, 599, 600, 1000, 4321]:
            vectors = extractor.compute_from(noise_signal(n_samples))
            assert len(vectors) == (n_samples - W) // H + 1

    def test_short_signal_yields_no_frames(self):
        extractor = LpcExtractor(16, window_size=0.032, hop_size=0.010)
        assert extractor.compute_from(noise_signal(100)) == []

    def test_time_positions(self):
        extractor = LpcExtractor(10, window_size=0.032, hop_size=0.010)
        vectors = extractor.compute_from(noise_signal(8000))

        for i, vector in enumerate(vectors):
            assert vector.time_position == i * 0.010

    def test_range(self):
        signal = noise_signal(4000)
        extractor = LpcExtractor(10, window_size=0.032, hop_size=0.010)

        vectors = extractor.compute_from(signal, start=160, end=4000)
        full = extractor.compute_from(signal)

        assert len(vectors) == len(full) - 1
        assert np.allclose(vectors[0].features, full[1].features)

    def test_invalid_range(self):
        extractor = LpcExtractor(10)
        with pytest.raises(IndexError):
            extractor.compute_from(noise_signal(1000), start=500, end=2000)


class TestFeatures:
    """Content of the extracted feature vectors."""

    def test_feature_count_fixed(self):
        extractor = LpcExtractor(16, window_size=0.032, hop_size=0.010)
        vectors = extractor.compute_from(noise_signal(16000))

        assert extractor.feature_count == 17
        assert all(len(v) == 17 for v in vectors)

    def test_feature_descriptions(self):
        extractor = LpcExtractor(3)
        assert extractor.feature_descriptions == ['error', 'lpc1', 'lpc2', 'lpc3']

    def test_features_match_frame_lpc(self):
        signal = noise_signal(2000)
        extractor = LpcExtractor(12, window_size=0.032, hop_size=0.010)
        vectors = extractor.compute_from(signal)

        frame = signal.samples[2 * 160:2 * 160 + 512]
        assert np.allclose(vectors[2].features, lpc(frame, 12))

    def test_window_applied(self):
        signal = noise_signal(2000)
        extractor = LpcExtractor(12, window_size=0.032, hop_size=0.010, window='hamming')
        vectors = extractor.compute_from(signal)

        frame = signal.samples[:512] * get_window('hamming', 512)
        assert np.allclose(vectors[0].features, lpc(frame, 12))

    def test_pre_emphasis(self):
        signal = noise_signal(2000)
        extractor = LpcExtractor(12, window_size=0.032, hop_size=0.010, pre_emphasis=0.97)
        vectors = extractor.compute_from(signal)

        y = signal.samples
        emphasized = np.append(y[0], y[1:] - 0.97 * y[:-1])
        assert np.allclose(vectors[1].features, lpc(emphasized[160:672], 12))

    def test_vectors_are_immutable(self):
        vectors = LpcExtractor(8).compute_from(noise_signal(1000))
        with pytest.raises(ValueError):
            vectors[0].features[0] = 1.0

    def test_feature_vector_copy(self):
        vector = FeatureVector([1.0, 2.0], 0.5)
        copy = vector.to_array()
        copy[0] = 5.0

        assert vector[0] == 1.0
        assert vector.time_position == 0.5


class TestValidation:

    @pytest.mark.parametrize("kwargs", [
        dict(order=0),
        dict(order=16, window_size=0.0),
        dict(order=16, hop_size=-0.01),
        dict(order=16, pre_emphasis=-0.5),
        dict(order=16, pre_emphasis=1.0),
    ])
    def test_invalid_parameters(self, kwargs):
        with pytest.raises(ValueError):
            LpcExtractor(**kwargs)

    def test_frame_shorter_than_order(self):
        extractor = LpcExtractor(16, window_size=0.001, hop_size=0.001)
        with pytest.raises(ValueError):
            extractor.compute_from(noise_signal(1000))

    def test_hop_shorter_than_sample(self):
        extractor = LpcExtractor(4, window_size=0.032, hop_size=1e-6)
        with pytest.raises(ValueError):
            extractor.compute_from(noise_signal(1000))
        with pytest.raises(ValueError):
            extractor.frame_count(1000, SR)

    def test_unknown_window(self):
        extractor = LpcExtractor(4, window='triangle-ish')
        with pytest.raises(ValueError):
            extractor.compute_from(noise_signal(1000))
