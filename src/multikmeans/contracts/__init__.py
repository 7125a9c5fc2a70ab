"""Shared contracts for cross-boundary data types.

This package is a LEAF MODULE with no outbound dependencies to core/engine.
Settings classes live in multikmeans.core.config.
"""

from multikmeans.contracts.centroid import Centroid
from multikmeans.contracts.data import Accumulator, Broadcast, PartitionedData
from multikmeans.contracts.errors import (
    BroadcastReleasedError,
    ClusteringError,
    InvalidRunsError,
    NoViableRunError,
)
from multikmeans.contracts.events import (
    ClusteringCompleted,
    IterationStarted,
    RunConverged,
    RunDistortion,
    RunExhausted,
)
from multikmeans.contracts.geometry import PointOps
from multikmeans.contracts.results import (
    AggregationResult,
    ClusteringResult,
    ClusterKey,
    RunState,
    RunStatus,
    SlotStatus,
    SlotUpdate,
)

__all__ = [
    "Accumulator",
    "AggregationResult",
    "Broadcast",
    "BroadcastReleasedError",
    "Centroid",
    "ClusterKey",
    "ClusteringCompleted",
    "ClusteringError",
    "ClusteringResult",
    "InvalidRunsError",
    "IterationStarted",
    "NoViableRunError",
    "PartitionedData",
    "PointOps",
    "RunConverged",
    "RunDistortion",
    "RunExhausted",
    "RunState",
    "RunStatus",
    "SlotStatus",
    "SlotUpdate",
]
