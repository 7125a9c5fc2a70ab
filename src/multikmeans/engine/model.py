# src/multikmeans/engine/model.py
"""Read-only model wrapping the winning run's centers."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Generic, TypeVar

from multikmeans.contracts.geometry import PointOps

P = TypeVar("P")
C = TypeVar("C")


class KMeansModel(Generic[P, C]):
    """Final centers of a clustering together with their training cost."""

    __slots__ = ("_centers", "_cost", "_point_ops")

    def __init__(self, point_ops: PointOps[P, C], centers: Iterable[C], cost: float) -> None:
        self._point_ops = point_ops
        self._centers: tuple[C, ...] = tuple(centers)
        self._cost = cost

    @property
    def centers(self) -> tuple[C, ...]:
        return self._centers

    @property
    def k(self) -> int:
        return len(self._centers)

    @property
    def cost(self) -> float:
        """Distortion of the training data against these centers."""
        return self._cost

    @property
    def point_ops(self) -> PointOps[P, C]:
        return self._point_ops

    def predict(self, point: P) -> int:
        """Index of the center nearest to ``point``."""
        return self._point_ops.find_closest(self._centers, point)[0]

    def predict_cost(self, point: P) -> float:
        """Cost of assigning ``point`` to its nearest center."""
        return self._point_ops.find_closest(self._centers, point)[1]

    def compute_cost(self, points: Iterable[P]) -> float:
        total = self._point_ops.zero
        for point in points:
            total += self.predict_cost(point)
        return total

    def __repr__(self) -> str:
        return f"KMeansModel(k={self.k}, cost={self._cost})"
