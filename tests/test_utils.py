"""
Tests for the signal buffer, dB scale conversions and analysis config.
"""

import sys
import os
from pathlib import Path

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import numpy as np
import pytest
import yaml

from src.dsp_core import to_decibel, to_decibel_power, from_decibel, from_decibel_power, get_window
from src.utils.config import AnalysisConfig
from src.utils.signal import DiscreteSignal

PROJECT_ROOT = Path(__file__).resolve().parents[1]


class TestDiscreteSignal:

    def test_properties(self):
        signal = DiscreteSignal(np.arange(8000), 16000)
        assert signal.length == len(signal) == 8000
        assert signal.sampling_rate == 16000
        assert signal.duration == 0.5
        assert signal.samples.dtype == np.float64

    def test_slicing(self):
        signal = DiscreteSignal(np.arange(100), 8000)
        part = signal[10:20]

        assert isinstance(part, DiscreteSignal)
        assert part.sampling_rate == 8000
        assert np.array_equal(part.samples, np.arange(10, 20))
        assert signal.slice(100, 100).length == 0
        assert signal[:].length == 100

    @pytest.mark.parametrize("start,end", [(-1, 10), (20, 10), (0, 101)])
    def test_invalid_slice(self, start, end):
        signal = DiscreteSignal(np.arange(100), 8000)
        with pytest.raises(IndexError):
            signal.slice(start, end)

    def test_read_only(self):
        source = np.zeros(10)
        signal = DiscreteSignal(source, 8000)

        with pytest.raises(ValueError):
            signal.samples[0] = 1.0

        # Buffer is a copy of the caller's array
        source[0] = 3.0
        assert signal.samples[0] == 0.0

    def test_invalid_construction(self):
        with pytest.raises(ValueError):
            DiscreteSignal(np.zeros(10), 0)
        with pytest.raises(ValueError):
            DiscreteSignal(np.zeros((2, 10)), 8000)

    def test_sine(self):
        signal = DiscreteSignal.sine(1000.0, 16000, 1.0)
        assert signal.length == 16000
        assert np.isclose(signal.samples[4], np.sin(2 * np.pi * 1000 * 4 / 16000))


class TestScale:

    def test_to_decibel(self):
        assert np.isclose(to_decibel(10.0), 20.0)
        assert np.isclose(to_decibel_power(10.0), 10.0)
        assert np.isclose(to_decibel(1.0, reference=10.0), -20.0)

    def test_from_decibel_inverts(self):
        values = np.array([1e-3, 0.5, 1.0, 42.0])
        assert np.allclose(from_decibel(to_decibel(values)), values)
        assert np.allclose(from_decibel_power(to_decibel_power(values)), values)

    def test_degenerate_values_propagate(self):
        db = to_decibel(np.array([0.0, -1.0, 1.0]))
        assert db[0] == -np.inf
        assert np.isnan(db[1])
        assert db[2] == 0.0


class TestWindows:

    @pytest.mark.parametrize("name", ['rectangular', 'hann', 'hamming', 'blackman', 'bartlett'])
    def test_window_length(self, name):
        w = get_window(name, 64)
        assert w.shape == (64,)
        assert np.all(w <= 1.0 + 1e-12)

    def test_hann_matches_periodic_definition(self):
        n = np.arange(32)
        assert np.allclose(get_window('hann', 32), 0.5 - 0.5 * np.cos(2 * np.pi * n / 32))

    def test_unknown(self):
        with pytest.raises(ValueError):
            get_window('kaiser', 16)

    @pytest.mark.parametrize("name", ['hann', 'hamming', 'blackman', 'bartlett'])
    @pytest.mark.parametrize("win_length", [2, 31, 64])
    def test_matches_scipy_periodic(self, name, win_length):
        from scipy.signal import get_window as scipy_window

        assert np.allclose(get_window(name, win_length), scipy_window(name, win_length, fftbins=True))


class TestAnalysisConfig:

    def test_defaults(self):
        config = AnalysisConfig().validate()
        assert config.window_size == 0.032
        assert config.hop_size == 0.010
        assert config.lpc_order == 16
        assert config.fft_size == 512

    def test_shipped_config(self):
        config = AnalysisConfig.from_yaml(PROJECT_ROOT / 'configs' / 'lpc_default.yaml')
        assert config == AnalysisConfig()

    def test_from_yaml(self, tmp_path):
        path = tmp_path / 'config.yaml'
        path.write_text(yaml.safe_dump({'analysis': {'lpc_order': 12, 'fft_size': 1024}}))

        config = AnalysisConfig.from_yaml(path)
        assert config.lpc_order == 12
        assert config.fft_size == 1024
        assert config.hop_size == 0.010

    @pytest.mark.parametrize("override", [
        {'fft_size': 500},
        {'fft_size': 0},
        {'dct_size': 0},
        {'lpc_order': 0},
        {'window_size': -0.1},
        {'hop_size': 0.0},
        {'pre_emphasis': 1.5},
        {'window': 'kaiser'},
    ])
    def test_invalid(self, override):
        with pytest.raises(ValueError):
            AnalysisConfig.from_dict(override)

    def test_unknown_key(self):
        with pytest.raises(ValueError):
            AnalysisConfig.from_dict({'n_mels': 128})
