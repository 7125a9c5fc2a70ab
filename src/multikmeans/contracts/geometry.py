# src/multikmeans/contracts/geometry.py
"""Point/center algebra used by the clustering core.

The core never looks inside points or centers. Everything metric-specific
goes through a PointOps implementation supplied by the caller.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, TypeVar

from multikmeans.contracts.centroid import Centroid

P = TypeVar("P")
C = TypeVar("C")


class PointOps(Protocol[P, C]):
    """Geometry capability for one point/center type pair.

    Attributes:
        zero: Cost value used before any pass has been made
    """

    zero: float

    def find_closest(self, centers: Sequence[C], point: P) -> tuple[int, float]:
        """Return (index of nearest center, cost of assigning point to it)."""
        ...

    def centroid_to_point(self, centroid: Centroid) -> P:
        """Convert a non-empty accumulator into its representative point."""
        ...

    def point_to_center(self, point: P) -> C:
        """Convert a point into the center representation."""
        ...

    def center_moved(self, point: P, center: C) -> bool:
        """True if ``point`` is far enough from ``center`` to count as movement."""
        ...
