# src/multikmeans/engine/aggregator.py
"""One synchronized pass over the data for every active run.

For each partition, every point is assigned to its nearest center in every
active run. The point is folded into a partition-local Centroid keyed by
(run, cluster), and the assignment cost is added to that partition's running
distortion for the run. Local Centroids are then merged by key across
partitions and per-partition distortions are summed into one accumulator per
run.

Both merges are commutative and associative, so the result does not depend
on how the data is partitioned or in which order partitions finish.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Generic, TypeVar

from multikmeans.contracts.centroid import Centroid
from multikmeans.contracts.data import PartitionedData
from multikmeans.contracts.geometry import PointOps
from multikmeans.contracts.results import AggregationResult, ClusterKey

P = TypeVar("P")
C = TypeVar("C")


def _merge(left: Centroid, right: Centroid) -> Centroid:
    return left.combine(right)


class CentroidAggregator(Generic[P, C]):
    """Computes per-(run, cluster) Centroids and per-run distortion.

    Usage:
        aggregator = CentroidAggregator(point_ops)
        result = aggregator.aggregate(data, [run0_centers, run1_centers])
        result.centroids[ClusterKey(run=1, cluster=0)].count
        result.distortion[1]
    """

    def __init__(self, point_ops: PointOps[P, C]) -> None:
        self._point_ops = point_ops

    def aggregate(
        self,
        data: PartitionedData[P],
        centers_per_run: Sequence[Sequence[C]],
    ) -> AggregationResult:
        """Run one pass for the given runs.

        Args:
            data: Partitioned points
            centers_per_run: Current centers of each active run. Run indices in
                the result are positions in this sequence.

        Returns:
            AggregationResult with a Centroid for every (run, cluster) pair,
            empty ones included, and one distortion total per run.
        """
        snapshot = data.broadcast(tuple(tuple(centers) for centers in centers_per_run))
        distortion = [data.accumulator(self._point_ops.zero) for _ in centers_per_run]
        point_ops = self._point_ops

        def contribute(points: Sequence[P]) -> Iterator[tuple[ClusterKey, Centroid]]:
            runs = snapshot.value
            local = [[Centroid() for _ in clusters] for clusters in runs]
            local_cost = [point_ops.zero] * len(runs)

            for point in points:
                for run, clusters in enumerate(runs):
                    cluster, cost = point_ops.find_closest(clusters, point)
                    local[run][cluster].add_point(point)
                    local_cost[run] += cost

            for run, cost in enumerate(local_cost):
                distortion[run].add(cost)
            for run, centroids in enumerate(local):
                for cluster, centroid in enumerate(centroids):
                    yield ClusterKey(run, cluster), centroid

        try:
            centroids = data.map_reduce_by_key(contribute, _merge)
        finally:
            snapshot.unpersist()

        # A dataset with no partitions never yields keys; fill in empties
        for run, clusters in enumerate(centers_per_run):
            for cluster in range(len(clusters)):
                centroids.setdefault(ClusterKey(run, cluster), Centroid())

        return AggregationResult(
            centroids=centroids,
            distortion=tuple(acc.value for acc in distortion),
        )

    def __repr__(self) -> str:
        return f"CentroidAggregator({self._point_ops!r})"


def total_points(result: AggregationResult, run: int) -> int:
    """Number of points assigned within one run of a pass."""
    return sum(centroid.count for key, centroid in result.centroids.items() if key.run == run)
