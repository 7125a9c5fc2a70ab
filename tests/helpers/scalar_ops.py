# tests/helpers/scalar_ops.py
"""Plain-float PointOps with absolute-distance cost.

Exercises the core with a point type that is not a numpy array and a metric
other than squared Euclidean.
"""

from collections.abc import Sequence

from multikmeans.contracts.centroid import Centroid


class AbsoluteLineOps:
    """Points and centers are floats; cost is |point - center|."""

    zero: float = 0.0

    def __init__(self, epsilon: float = 0.0) -> None:
        self.epsilon = epsilon
        self.find_closest_calls = 0

    def find_closest(self, centers: Sequence[float], point: float) -> tuple[int, float]:
        self.find_closest_calls += 1
        best_index = 0
        best_cost = abs(point - centers[0])
        for index in range(1, len(centers)):
            cost = abs(point - centers[index])
            if cost < best_cost:
                best_index, best_cost = index, cost
        return best_index, best_cost

    def centroid_to_point(self, centroid: Centroid) -> float:
        return float(centroid.weighted_sum) / centroid.count

    def point_to_center(self, point: float) -> float:
        return point

    def center_moved(self, point: float, center: float) -> bool:
        return abs(point - center) > self.epsilon
