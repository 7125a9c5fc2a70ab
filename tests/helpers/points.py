# tests/helpers/points.py
"""Point construction shorthands."""

from collections.abc import Sequence

from multikmeans.geometry.euclidean import Vector, as_vector


def vectors(*values: float | Sequence[float]) -> list[Vector]:
    """Shorthand for a list of points/centers."""
    return [as_vector(v) for v in values]
