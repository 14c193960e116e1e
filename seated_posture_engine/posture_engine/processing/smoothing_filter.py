# seated_posture_engine/posture_engine/processing/smoothing_filter.py
import numpy as np
from collections import deque

class MovingAverageFilter:
    """Mean of the last `max_size` samples."""

    def __init__(self, max_size: int = 5):
        if max_size < 1:
            raise ValueError(f"max_size must be >= 1, got {max_size}")
        self.max_size = max_size
        self._buffer = deque(maxlen=max_size)

    def update(self, value: float, timestamp=None) -> float:
        # timestamp is accepted for interface parity with OneEuroFilter
        self._buffer.append(value)
        return float(np.mean(self._buffer))

    def __call__(self, value: float, timestamp=None) -> float:
        return self.update(value, timestamp)

    def __len__(self) -> int:
        return len(self._buffer)

    def reset(self) -> None:
        self._buffer.clear()
