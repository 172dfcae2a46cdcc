"""
corridor/metrics.py
===================
Per-step time series recorded by the engine, plus the two distance
statistics computed from the vehicle distance matrix.
"""

from __future__ import annotations

import math
from typing import Iterator, List, Tuple

import numpy as np
import pandas as pd

TIME_LOG_COLUMNS: Tuple[str, ...] = (
    "Time",
    "ActiveVehicleCount",
    "AvgClosestDist",
    "AvgDist",
)


def mean_closest_distance(matrix: np.ndarray) -> float:
    """Mean over vehicles of the distance to their nearest active neighbour.

    ``NaN`` entries are ignored; vehicles with no finite entry do not
    contribute.  Returns ``NaN`` when nothing is finite.
    """
    finite = np.isfinite(matrix)
    has_neighbour = finite.any(axis=0)
    if not has_neighbour.any():
        return math.nan
    closest = np.where(finite, matrix, np.inf).min(axis=0)
    return float(closest[has_neighbour].mean())


def mean_distance(matrix: np.ndarray) -> float:
    """Mean of every finite entry of *matrix* (``NaN`` when there are none)."""
    values = matrix[np.isfinite(matrix)]
    if values.size == 0:
        return math.nan
    return float(values.mean())


class TimeLog:
    """Append-only time series of active-vehicle count and mean distances.

    Attributes are exposed as tuples so callers cannot rewrite history.
    """

    def __init__(self) -> None:
        self._time: List[float] = []
        self._active_count: List[int] = []
        self._avg_closest_dist: List[float] = []
        self._avg_dist: List[float] = []

    def append(self, t: float, active_count: int,
               avg_closest_dist: float, avg_dist: float) -> None:
        self._time.append(float(t))
        self._active_count.append(int(active_count))
        self._avg_closest_dist.append(float(avg_closest_dist))
        self._avg_dist.append(float(avg_dist))

    def __len__(self) -> int:
        return len(self._time)

    @property
    def time(self) -> Tuple[float, ...]:
        return tuple(self._time)

    @property
    def active_count(self) -> Tuple[int, ...]:
        return tuple(self._active_count)

    @property
    def avg_closest_dist(self) -> Tuple[float, ...]:
        return tuple(self._avg_closest_dist)

    @property
    def avg_dist(self) -> Tuple[float, ...]:
        return tuple(self._avg_dist)

    def rows(self) -> Iterator[Tuple[float, int, float, float]]:
        return zip(self._time, self._active_count,
                   self._avg_closest_dist, self._avg_dist)

    def to_frame(self) -> pd.DataFrame:
        """One row per step, columns :data:`TIME_LOG_COLUMNS`."""
        return pd.DataFrame(list(self.rows()), columns=list(TIME_LOG_COLUMNS))
