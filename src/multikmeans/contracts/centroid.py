# src/multikmeans/contracts/centroid.py
"""Mutable per-cluster accumulator.

A Centroid collects the points assigned to one cluster of one run during a
single aggregation pass. Centroids form a commutative monoid:

- identity: ``Centroid()`` (count 0, no weighted sum)
- combine: ``a.combine(b)`` folds ``b`` into ``a``

Partitions build their own local Centroids and the aggregator merges them by
key in whatever order results arrive, so ``combine`` must be associative and
commutative (up to floating-point rounding of the embedded sums).

The Centroid never does metric-specific math. Turning the accumulated sum back
into a representative point is the job of ``PointOps.centroid_to_point``.
"""

from __future__ import annotations

import copy
from typing import Any


class Centroid:
    """Sum and count of the points assigned to one cluster.

    Attributes:
        count: Number of points folded in (never negative)
        weighted_sum: Sum of the folded points, or None while empty
    """

    __slots__ = ("count", "weighted_sum")

    def __init__(self) -> None:
        self.count: int = 0
        self.weighted_sum: Any = None

    @property
    def is_empty(self) -> bool:
        """True when no points have been folded in."""
        return self.count == 0

    def add_point(self, point: Any) -> Centroid:
        """Fold a single point into this accumulator.

        The point's own ``+`` defines the accumulation rule, so numpy vectors,
        plain floats and richer point types all work unchanged.

        Returns:
            self, for chaining
        """
        if self.weighted_sum is None:
            # Copy-on-first-add: never alias the caller's point
            self.weighted_sum = copy.copy(point)
        else:
            self.weighted_sum = self.weighted_sum + point
        self.count += 1
        return self

    def combine(self, other: Centroid) -> Centroid:
        """Merge another accumulator into this one.

        ``other`` is never mutated. Either side may be empty.

        Returns:
            self, for use as a reduce function
        """
        if other.is_empty:
            return self
        if self.is_empty:
            self.weighted_sum = copy.copy(other.weighted_sum)
        else:
            self.weighted_sum = self.weighted_sum + other.weighted_sum
        self.count += other.count
        return self

    def copy(self) -> Centroid:
        """Return an independent copy."""
        return Centroid().combine(self)

    def __repr__(self) -> str:
        return f"Centroid(count={self.count}, weighted_sum={self.weighted_sum!r})"
