# src/multikmeans/contracts/results.py
"""Run state and pass results.

These types answer: "Where is each run, and what did the last pass produce?"

RunState is frozen. The coordinator never mutates a run in place; every
iteration produces a fresh tuple of RunStates from the previous one.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import TYPE_CHECKING, Any, Generic, NamedTuple, TypeVar

from multikmeans.contracts.centroid import Centroid

if TYPE_CHECKING:
    from multikmeans.engine.model import KMeansModel

C = TypeVar("C")


class RunStatus(StrEnum):
    """Lifecycle status of a single run."""

    ACTIVE = "active"
    CONVERGED = "converged"
    EXHAUSTED = "exhausted"


class SlotStatus(StrEnum):
    """What happened to one cluster slot during an iteration."""

    MOVED = "moved"
    STABLE = "stable"
    EMPTIED = "emptied"


class ClusterKey(NamedTuple):
    """Key of one aggregated Centroid: (position among active runs, cluster index)."""

    run: int
    cluster: int


@dataclass(frozen=True, slots=True)
class SlotUpdate(Generic[C]):
    """Outcome for one cluster slot.

    EMPTIED slots carry no center and are dropped when the run's centers are
    compacted; the survivors keep their relative order.
    """

    status: SlotStatus
    center: C | None = None

    @classmethod
    def emptied(cls) -> SlotUpdate[C]:
        return cls(status=SlotStatus.EMPTIED)

    @property
    def removed(self) -> bool:
        return self.status is SlotStatus.EMPTIED


@dataclass(frozen=True, slots=True)
class RunState(Generic[C]):
    """Immutable snapshot of one run after an iteration.

    Attributes:
        index: Position of the run in the run set (stable for the whole clustering)
        centers: Current centers; the cluster identity is the position
        cost: Distortion from the last pass this run took part in
        status: ACTIVE while work remains, CONVERGED or EXHAUSTED once frozen
        converged_at: Iteration count at which the run stopped, if it has
    """

    index: int
    centers: tuple[C, ...]
    cost: float
    status: RunStatus = RunStatus.ACTIVE
    converged_at: int | None = None

    @property
    def active(self) -> bool:
        return self.status is RunStatus.ACTIVE

    @property
    def k(self) -> int:
        return len(self.centers)

    def advance(
        self,
        updates: list[SlotUpdate[C]],
        distortion: float,
        iteration: int,
    ) -> RunState[C]:
        """Produce the next state from this iteration's slot updates.

        The run stays active if any slot moved or emptied. A run left with no
        centers at all is EXHAUSTED: it keeps its previous centers and its cost
        becomes infinite so it can never win selection over a healthy run.
        """
        survivors = tuple(u.center for u in updates if not u.removed)
        keep_going = any(u.status is not SlotStatus.STABLE for u in updates)

        if not survivors:
            return replace(
                self,
                cost=float("inf"),
                status=RunStatus.EXHAUSTED,
                converged_at=iteration + 1,
            )
        if keep_going:
            return replace(self, centers=survivors, cost=distortion)
        return replace(
            self,
            centers=survivors,
            cost=distortion,
            status=RunStatus.CONVERGED,
            converged_at=iteration + 1,
        )


@dataclass(frozen=True, slots=True)
class AggregationResult:
    """Output of one aggregation pass over the active runs.

    Attributes:
        centroids: Merged Centroid for every (active run, cluster) pair,
            including empty ones
        distortion: Total assignment cost per active run, in the same order
            as the centers that were submitted
    """

    centroids: dict[ClusterKey, Centroid]
    distortion: tuple[float, ...]

    def for_run(self, run: int, k: int) -> list[Centroid]:
        """Centroids of one active run, in cluster order."""
        return [self.centroids[ClusterKey(run, cluster)] for cluster in range(k)]


@dataclass(frozen=True, slots=True)
class ClusteringResult(Generic[C]):
    """Everything the coordinator knows once the loop ends.

    Attributes:
        runs: Final state of every run, indexed by run
        best_run: Index of the winning run
        iterations: Number of passes executed
        model: Read-only model wrapping the winner's centers
    """

    runs: tuple[RunState[C], ...]
    best_run: int
    iterations: int
    model: KMeansModel[Any, C] = field(repr=False)

    @property
    def best(self) -> RunState[C]:
        return self.runs[self.best_run]

    @property
    def best_cost(self) -> float:
        return self.best.cost
