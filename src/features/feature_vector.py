from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True, eq=False)
class FeatureVector:
    """
    Features of one analysis frame.

    Attributes:
        features: read-only array of feature values
        time_position: frame start in seconds (frame_index * hop_size)
    """
    features: np.ndarray
    time_position: float

    def __post_init__(self):
        features = np.array(self.features, dtype=np.float64)
        features.setflags(write=False)
        object.__setattr__(self, 'features', features)

    def __len__(self) -> int:
        return len(self.features)

    def __getitem__(self, idx):
        return self.features[idx]

    def to_array(self) -> np.ndarray:
        """Writable copy of the features."""
        return self.features.copy()
