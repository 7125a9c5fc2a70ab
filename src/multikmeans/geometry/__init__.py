"""Reference point algebras."""

from multikmeans.geometry.euclidean import EuclideanPointOps, as_vector

__all__ = ["EuclideanPointOps", "as_vector"]
