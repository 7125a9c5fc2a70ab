"""In-process data substrate for the aggregation pass."""

from multikmeans.data.partitioned import (
    LocalBroadcast,
    LocalPartitionedData,
    LockedAccumulator,
    split_contiguous,
)

__all__ = [
    "LocalBroadcast",
    "LocalPartitionedData",
    "LockedAccumulator",
    "split_contiguous",
]
