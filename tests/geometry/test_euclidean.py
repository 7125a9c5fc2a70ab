# tests/geometry/test_euclidean.py
"""Tests for the squared-Euclidean reference geometry."""

import numpy as np
import pytest

from multikmeans.contracts.centroid import Centroid
from multikmeans.geometry.euclidean import EuclideanPointOps, as_vector
from tests.helpers.points import vectors


class TestAsVector:
    def test_scalar_promoted(self) -> None:
        vec = as_vector(3)

        assert vec.shape == (1,)
        assert vec.dtype == np.float64

    def test_result_is_read_only(self) -> None:
        vec = as_vector([1.0, 2.0])
        with pytest.raises(ValueError):
            vec[0] = 5.0

    def test_matrix_rejected(self) -> None:
        with pytest.raises(ValueError, match="1-D"):
            as_vector([[1.0], [2.0]])


class TestEuclideanPointOps:
    def test_find_closest_returns_squared_distance(self) -> None:
        ops = EuclideanPointOps()

        index, cost = ops.find_closest(vectors([0.0, 0.0], [3.0, 4.0]), as_vector([3.0, 3.0]))

        assert index == 1
        assert cost == pytest.approx(1.0)

    def test_find_closest_tie_goes_to_lowest_index(self) -> None:
        ops = EuclideanPointOps()

        index, cost = ops.find_closest(vectors(-1.0, 1.0), as_vector(0.0))

        assert index == 0
        assert cost == pytest.approx(1.0)

    def test_find_closest_rejects_lower_dimensional_centers(self) -> None:
        ops = EuclideanPointOps()

        with pytest.raises(ValueError, match="1 dimension"):
            ops.find_closest(vectors(0.0, 11.0), as_vector([1.0, 0.0]))

    def test_find_closest_rejects_higher_dimensional_centers(self) -> None:
        ops = EuclideanPointOps()

        with pytest.raises(ValueError, match="3 dimension"):
            ops.find_closest(vectors([0.0, 0.0, 0.0], [11.0, 0.0, 0.0]), as_vector([1.0, 0.0]))

    def test_centroid_to_point_is_mean(self) -> None:
        ops = EuclideanPointOps()
        centroid = Centroid()
        for p in vectors([0.0, 2.0], [2.0, 4.0]):
            centroid.add_point(p)

        np.testing.assert_allclose(ops.centroid_to_point(centroid), [1.0, 3.0])

    def test_centroid_to_point_rejects_empty(self) -> None:
        with pytest.raises(ValueError, match="empty"):
            EuclideanPointOps().centroid_to_point(Centroid())

    def test_center_moved_uses_epsilon(self) -> None:
        ops = EuclideanPointOps(epsilon=0.5)

        assert not ops.center_moved(as_vector(0.4), as_vector(0.0))
        assert ops.center_moved(as_vector(0.6), as_vector(0.0))

    def test_zero_epsilon_detects_any_movement(self) -> None:
        ops = EuclideanPointOps(epsilon=0.0)

        assert ops.center_moved(as_vector(1e-12), as_vector(0.0))
        assert not ops.center_moved(as_vector(0.0), as_vector(0.0))

    def test_negative_epsilon_rejected(self) -> None:
        with pytest.raises(ValueError, match="epsilon"):
            EuclideanPointOps(epsilon=-1.0)

    def test_zero_cost(self) -> None:
        assert EuclideanPointOps.zero == 0.0
