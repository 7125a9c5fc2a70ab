# src/multikmeans/contracts/events.py
"""Observability events for multi-run clustering.

Emitted by the RunCoordinator on its event bus and consumed by CLI
formatters. They are a side channel: nothing in the functional result
depends on whether anyone listens.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class IterationStarted:
    """Emitted before each aggregation pass.

    Attributes:
        iteration: Zero-based iteration index
        active_runs: Run indices taking part in this pass
        center_counts: Number of centers of each active run, same order
    """

    iteration: int
    active_runs: tuple[int, ...]
    center_counts: tuple[int, ...]


@dataclass(frozen=True, slots=True)
class RunDistortion:
    """Emitted once per active run after each pass."""

    iteration: int
    run: int
    distortion: float


@dataclass(frozen=True, slots=True)
class RunConverged:
    """Emitted when a run stops because none of its centers moved.

    Attributes:
        run: Run index
        iterations: Number of iterations the run took (iteration index + 1)
    """

    run: int
    iterations: int


@dataclass(frozen=True, slots=True)
class RunExhausted:
    """Emitted when every cluster of a run lost all of its points."""

    run: int
    iteration: int


@dataclass(frozen=True, slots=True)
class ClusteringCompleted:
    """Emitted once the loop ends and a winner has been selected.

    Attributes:
        best_run: Index of the winning run
        best_cost: Its final cost
        iterations: Passes executed in total
        converged_runs: Number of runs that converged before the cap
    """

    best_run: int
    best_cost: float
    iterations: int
    converged_runs: int
