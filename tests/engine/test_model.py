# tests/engine/test_model.py
"""Tests for the read-only result model."""

import pytest

from multikmeans.engine.model import KMeansModel
from tests.helpers.scalar_ops import AbsoluteLineOps


class TestKMeansModel:
    def test_exposes_centers_and_cost(self) -> None:
        model = KMeansModel(AbsoluteLineOps(), [0.5, 10.5], cost=2.0)

        assert model.centers == (0.5, 10.5)
        assert model.k == 2
        assert model.cost == 2.0

    def test_predict_nearest_center(self) -> None:
        model = KMeansModel(AbsoluteLineOps(), [0.5, 10.5], cost=2.0)

        assert model.predict(3.0) == 0
        assert model.predict(8.0) == 1
        assert model.predict_cost(8.0) == pytest.approx(2.5)

    def test_compute_cost_sums_assignment_costs(self) -> None:
        model = KMeansModel(AbsoluteLineOps(), [0.5, 10.5], cost=2.0)

        assert model.compute_cost([0.0, 1.0, 10.0, 11.0]) == pytest.approx(2.0)

    def test_centers_are_a_tuple_copy(self) -> None:
        centers = [1.0, 2.0]
        model = KMeansModel(AbsoluteLineOps(), centers, cost=0.0)

        centers.append(3.0)

        assert model.k == 2
