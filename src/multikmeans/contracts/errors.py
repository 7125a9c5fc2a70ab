# src/multikmeans/contracts/errors.py
"""Exception taxonomy for multi-run clustering.

Collaborator failures (PointOps bugs, worker crashes) are NOT wrapped here.
They propagate unchanged so programming errors crash immediately.
"""

from __future__ import annotations


class ClusteringError(Exception):
    """Base class for all clustering errors."""


class InvalidRunsError(ClusteringError, ValueError):
    """Raised when the initial centers cannot seed a clustering.

    Either no runs were supplied, or a run was supplied with zero centers.

    Attributes:
        run: Index of the offending run, or None when no runs were supplied
    """

    def __init__(self, message: str, run: int | None = None) -> None:
        super().__init__(message)
        self.run = run


class NoViableRunError(ClusteringError):
    """Raised at selection when every run lost all of its centers.

    An exhausted run has no centers left to wrap into a model, so when no
    other run survives there is nothing to return.

    Attributes:
        runs: Number of runs that were attempted
        iterations: Iterations executed before giving up
    """

    def __init__(self, runs: int, iterations: int) -> None:
        super().__init__(f"All {runs} run(s) exhausted their centers after {iterations} iteration(s)")
        self.runs = runs
        self.iterations = iterations


class BroadcastReleasedError(ClusteringError):
    """Raised when a broadcast snapshot is read after it was released."""
