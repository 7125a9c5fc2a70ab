# src/multikmeans/engine/coordinator.py
"""Multi-run Lloyd iteration.

Runs R independent K-means clusterings over the same data, sharing one pass
per iteration, and returns the run with the lowest cost.

Each iteration is a pure step from one tuple of RunStates to the next:

1. The centers of every ACTIVE run are sent to the CentroidAggregator.
2. Each (run, cluster) Centroid becomes a SlotUpdate:
   - empty: EMPTIED, the slot is dropped and the run keeps going
   - moved beyond the PointOps tolerance: MOVED, the run keeps going
   - otherwise: STABLE
   Non-empty slots always take the new center, moved or not.
3. Surviving slots are compacted in order; every run that took part gets
   this pass's distortion as its cost.
4. Runs with only STABLE slots become CONVERGED and are frozen. Runs that
   lost every slot become EXHAUSTED with infinite cost.

The loop stops when no run is ACTIVE or max_iterations passes have run.
The winner is the minimum-cost run over ALL runs, ties to the lowest index.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Generic, Protocol, TypeVar

from multikmeans.contracts.centroid import Centroid
from multikmeans.contracts.data import PartitionedData
from multikmeans.contracts.errors import InvalidRunsError, NoViableRunError
from multikmeans.contracts.events import (
    ClusteringCompleted,
    IterationStarted,
    RunConverged,
    RunDistortion,
    RunExhausted,
)
from multikmeans.contracts.geometry import PointOps
from multikmeans.contracts.results import (
    ClusteringResult,
    RunState,
    RunStatus,
    SlotStatus,
    SlotUpdate,
)
from multikmeans.core.events import EventBusProtocol, NullEventBus
from multikmeans.core.logging import get_logger
from multikmeans.engine.aggregator import CentroidAggregator, total_points
from multikmeans.engine.model import KMeansModel

logger = get_logger(__name__)

P = TypeVar("P")
C = TypeVar("C")


class MultiKMeansClusterer(Protocol[P, C]):
    """Anything that clusters with several seeds at once and keeps the best."""

    def cluster(
        self,
        data: PartitionedData[P],
        initial_centers: Sequence[Sequence[C]],
    ) -> tuple[float, KMeansModel[P, C]]: ...


def select_best(runs: Sequence[RunState[C]], iterations: int = 0) -> int:
    """Index of the minimum-cost run; ties go to the lowest index.

    EXHAUSTED runs have no usable centers and are skipped. ``iterations`` is
    the number of passes the loop made, reported if no run is viable.

    Raises:
        NoViableRunError: If every run is EXHAUSTED
    """
    best: RunState[C] | None = None
    for run in runs:
        if run.status is RunStatus.EXHAUSTED:
            continue
        # Strict < keeps the first occurrence on ties
        if best is None or run.cost < best.cost:
            best = run
    if best is None:
        raise NoViableRunError(runs=len(runs), iterations=iterations)
    return best.index


class RunCoordinator(Generic[P, C]):
    """Drives every run to convergence, exhaustion or the iteration cap.

    Usage:
        coordinator = RunCoordinator(EuclideanPointOps(), max_iterations=20)
        cost, model = coordinator.cluster(data, [seed_a, seed_b, seed_c])
    """

    def __init__(
        self,
        point_ops: PointOps[P, C],
        max_iterations: int,
        event_bus: EventBusProtocol | None = None,
    ) -> None:
        if max_iterations < 0:
            raise ValueError(f"max_iterations must be >= 0, got {max_iterations}")
        self._point_ops = point_ops
        self._max_iterations = max_iterations
        self._aggregator: CentroidAggregator[P, C] = CentroidAggregator(point_ops)
        self._events: EventBusProtocol = event_bus if event_bus is not None else NullEventBus()

    @property
    def max_iterations(self) -> int:
        return self._max_iterations

    def cluster(
        self,
        data: PartitionedData[P],
        initial_centers: Sequence[Sequence[C]],
    ) -> tuple[float, KMeansModel[P, C]]:
        """Cluster ``data`` once per seed and return (best cost, best model)."""
        result = self.run(data, initial_centers)
        return result.best_cost, result.model

    def run(
        self,
        data: PartitionedData[P],
        initial_centers: Sequence[Sequence[C]],
    ) -> ClusteringResult[C]:
        """Like cluster(), but also returns the final state of every run.

        Raises:
            InvalidRunsError: If no runs, or a run with no centers, are supplied
            NoViableRunError: If every run lost all of its centers
        """
        runs = self.initial_runs(initial_centers)
        iterations = 0
        for runs in self.iterate(data, runs):  # noqa: B020
            iterations += 1

        best = select_best(runs, iterations)
        winner = runs[best]
        converged = sum(1 for r in runs if r.status is RunStatus.CONVERGED)

        logger.info(
            "clustering_completed",
            best_run=best,
            best_cost=winner.cost,
            iterations=iterations,
            converged_runs=converged,
            runs=len(runs),
        )
        self._events.emit(
            ClusteringCompleted(
                best_run=best,
                best_cost=winner.cost,
                iterations=iterations,
                converged_runs=converged,
            )
        )
        return ClusteringResult(
            runs=runs,
            best_run=best,
            iterations=iterations,
            model=KMeansModel(self._point_ops, winner.centers, winner.cost),
        )

    def initial_runs(self, initial_centers: Sequence[Sequence[C]]) -> tuple[RunState[C], ...]:
        """Validate seeds and build the starting RunStates."""
        if len(initial_centers) == 0:
            raise InvalidRunsError("At least one run of initial centers is required")
        runs: list[RunState[C]] = []
        for index, centers in enumerate(initial_centers):
            if len(centers) == 0:
                raise InvalidRunsError(f"Run {index} has no initial centers", run=index)
            runs.append(RunState(index=index, centers=tuple(centers), cost=self._point_ops.zero))
        return tuple(runs)

    def iterate(
        self,
        data: PartitionedData[P],
        runs: tuple[RunState[C], ...],
    ) -> Iterator[tuple[RunState[C], ...]]:
        """Yield the full run set after each iteration until the loop stops."""
        iteration = 0
        while iteration < self._max_iterations and any(r.active for r in runs):
            runs = self.step(data, runs, iteration)
            iteration += 1
            yield runs

    def step(
        self,
        data: PartitionedData[P],
        runs: tuple[RunState[C], ...],
        iteration: int,
    ) -> tuple[RunState[C], ...]:
        """Execute one synchronized pass and return the next run set.

        Inactive runs are returned unchanged.
        """
        active = [run for run in runs if run.active]

        logger.info("iteration_started", iteration=iteration, active_runs=len(active))
        for run in active:
            logger.debug("run_centers", iteration=iteration, run=run.index, centers=run.k)
        self._events.emit(
            IterationStarted(
                iteration=iteration,
                active_runs=tuple(r.index for r in active),
                center_counts=tuple(r.k for r in active),
            )
        )

        aggregated = self._aggregator.aggregate(data, [run.centers for run in active])

        next_runs = list(runs)
        for position, run in enumerate(active):
            distortion = aggregated.distortion[position]
            logger.info("run_distortion", iteration=iteration, run=run.index, distortion=distortion)
            logger.debug("run_assignments", iteration=iteration, run=run.index, points=total_points(aggregated, position))
            self._events.emit(RunDistortion(iteration=iteration, run=run.index, distortion=distortion))

            updates = self._update_slots(run.centers, aggregated.for_run(position, run.k))
            updated = run.advance(updates, distortion, iteration)
            next_runs[run.index] = updated

            if updated.status is RunStatus.CONVERGED:
                logger.info("run_converged", run=run.index, iterations=updated.converged_at)
                self._events.emit(RunConverged(run=run.index, iterations=iteration + 1))
            elif updated.status is RunStatus.EXHAUSTED:
                logger.warning("run_exhausted", run=run.index, iteration=iteration, last_distortion=distortion)
                self._events.emit(RunExhausted(run=run.index, iteration=iteration))
            else:
                dropped = sum(1 for u in updates if u.removed)
                if dropped:
                    logger.info("clusters_dropped", run=run.index, iteration=iteration, dropped=dropped, remaining=updated.k)

        return tuple(next_runs)

    def _update_slots(self, centers: Sequence[C], centroids: Sequence[Centroid]) -> list[SlotUpdate[C]]:
        """Turn each cluster's Centroid into that slot's next center."""
        ops = self._point_ops
        updates: list[SlotUpdate[C]] = []
        for old_center, centroid in zip(centers, centroids, strict=True):
            if centroid.is_empty:
                updates.append(SlotUpdate.emptied())
                continue
            point = ops.centroid_to_point(centroid)
            status = SlotStatus.MOVED if ops.center_moved(point, old_center) else SlotStatus.STABLE
            updates.append(SlotUpdate(status=status, center=ops.point_to_center(point)))
        return updates
