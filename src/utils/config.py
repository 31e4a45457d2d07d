"""
Analysis configuration.

Parameters are fixed once an analysis is built; load them from YAML with
AnalysisConfig.from_yaml or construct the dataclass directly.
"""

from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Union

import yaml

from ..dsp_core.fft import is_power_of_two
from ..dsp_core.window import WINDOW_TYPES


@dataclass(frozen=True)
class AnalysisConfig:
    window_size: float = 0.032   # seconds
    hop_size: float = 0.010      # seconds
    lpc_order: int = 16
    fft_size: int = 512
    dct_size: int = 13
    pre_emphasis: float = 0.0
    window: str = 'rectangular'

    def validate(self) -> 'AnalysisConfig':
        if self.window_size <= 0:
            raise ValueError(f"window_size must be positive, got {self.window_size}")
        if self.hop_size <= 0:
            raise ValueError(f"hop_size must be positive, got {self.hop_size}")
        if self.lpc_order < 1:
            raise ValueError(f"lpc_order must be >= 1, got {self.lpc_order}")
        if not is_power_of_two(self.fft_size):
            raise ValueError(f"fft_size must be a positive power of 2, got {self.fft_size}")
        if self.dct_size <= 0:
            raise ValueError(f"dct_size must be positive, got {self.dct_size}")
        if not 0.0 <= self.pre_emphasis < 1.0:
            raise ValueError(f"pre_emphasis must be in [0, 1), got {self.pre_emphasis}")
        if self.window not in WINDOW_TYPES:
            raise ValueError(f"Unknown window type: {self.window}")
        return self

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, config: dict) -> 'AnalysisConfig':
        known = {f.name for f in fields(cls)}
        unknown = set(config) - known
        if unknown:
            raise ValueError(f"Unknown analysis config keys: {sorted(unknown)}")
        return cls(**config).validate()

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> 'AnalysisConfig':
        """Read the `analysis:` section of a YAML file."""
        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}
        return cls.from_dict(data.get('analysis', {}) or {})
