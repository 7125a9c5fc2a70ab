# src/multikmeans/geometry/euclidean.py
"""Squared-Euclidean point algebra over numpy vectors.

Points and centers are both 1-D float arrays. Scalars are accepted and
promoted to length-1 vectors, so points on a line can be passed as plain
floats.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import numpy as np
import numpy.typing as npt

from multikmeans.contracts.centroid import Centroid

Vector = npt.NDArray[np.float64]


def as_vector(value: Any) -> Vector:
    """Coerce a scalar or array-like into a read-only 1-D float vector."""
    vec = np.atleast_1d(np.asarray(value, dtype=np.float64))
    if vec.ndim != 1:
        raise ValueError(f"Expected a scalar or 1-D vector, got shape {vec.shape}")
    vec = vec.copy()
    vec.setflags(write=False)
    return vec


class EuclideanPointOps:
    """PointOps for squared Euclidean distance (the classic K-means cost).

    Args:
        epsilon: A center that moved less than this distance is treated as
            stationary.
    """

    zero: float = 0.0

    def __init__(self, epsilon: float = 1e-4) -> None:
        if epsilon < 0:
            raise ValueError(f"epsilon must be >= 0, got {epsilon}")
        self.epsilon = epsilon
        self._epsilon_sq = epsilon * epsilon

    def distance(self, a: Vector, b: Vector) -> float:
        diff = a - b
        return float(np.dot(diff, diff))

    def find_closest(self, centers: Sequence[Vector], point: Vector) -> tuple[int, float]:
        """Nearest center by squared distance; ties go to the lowest index.

        Raises:
            ValueError: If the centers and the point differ in dimension
        """
        stacked = np.asarray(centers, dtype=np.float64).reshape(len(centers), -1)
        vec = np.asarray(point, dtype=np.float64).reshape(-1)
        # numpy would silently broadcast a length-1 center across every axis
        if stacked.shape[1] != vec.shape[0]:
            raise ValueError(f"Centers have {stacked.shape[1]} dimension(s) but the point has {vec.shape[0]}")
        diffs = stacked - vec
        d2 = np.einsum("ij,ij->i", diffs, diffs)
        index = int(np.argmin(d2))
        return index, float(d2[index])

    def centroid_to_point(self, centroid: Centroid) -> Vector:
        if centroid.is_empty:
            raise ValueError("Cannot convert an empty centroid to a point")
        return as_vector(np.asarray(centroid.weighted_sum, dtype=np.float64) / centroid.count)

    def point_to_center(self, point: Vector) -> Vector:
        return point

    def center_moved(self, point: Vector, center: Vector) -> bool:
        return self.distance(point, center) > self._epsilon_sq

    def __repr__(self) -> str:
        return f"EuclideanPointOps(epsilon={self.epsilon})"
