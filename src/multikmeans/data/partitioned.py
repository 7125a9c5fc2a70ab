# src/multikmeans/data/partitioned.py
"""In-process partitioned dataset backed by a thread pool.

Implements the PartitionedData protocol for data that fits in memory:

- Partitions are immutable tuples fixed at construction
- map_reduce_by_key dispatches one task per partition to a
  ThreadPoolExecutor and blocks until all of them finish (the per-iteration
  barrier)
- Keyed partial results are merged in partition submission order, regardless
  of completion order; accumulators are summed in completion order
- With max_workers=1 no pool is created and partitions are folded inline

Usage:
    with LocalPartitionedData.from_points(points, num_partitions=8, max_workers=4) as data:
        coordinator.cluster(data, initial_centers)
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import wait as wait_all
from threading import Lock
from types import TracebackType
from typing import Any, Generic, TypeVar

from multikmeans.contracts.errors import BroadcastReleasedError
from multikmeans.core.logging import get_logger

logger = get_logger(__name__)

P = TypeVar("P")
K = TypeVar("K", bound=Hashable)
V = TypeVar("V")
T = TypeVar("T")

_RELEASED: Any = object()


class LockedAccumulator:
    """Add-only float accumulator shared by worker threads."""

    def __init__(self, zero: float = 0.0) -> None:
        self._lock = Lock()
        self._value = zero

    def add(self, value: float) -> None:
        with self._lock:
            self._value += value

    @property
    def value(self) -> float:
        with self._lock:
            return self._value


class LocalBroadcast(Generic[T]):
    """Read-only snapshot handed to every partition task.

    Callers are expected to pass immutable values (tuples); unpersist()
    drops the reference so completed iterations don't pin memory.
    """

    def __init__(self, value: T) -> None:
        self._value: T = value

    @property
    def value(self) -> T:
        if self._value is _RELEASED:
            raise BroadcastReleasedError("Broadcast value read after unpersist()")
        return self._value

    @property
    def released(self) -> bool:
        return self._value is _RELEASED

    def unpersist(self) -> None:
        self._value = _RELEASED


def split_contiguous(points: Sequence[P], num_partitions: int) -> tuple[tuple[P, ...], ...]:
    """Split points into ``num_partitions`` contiguous chunks of near-equal size.

    The first ``len(points) % num_partitions`` chunks get one extra point.
    Chunks may be empty when there are fewer points than partitions.
    """
    if num_partitions < 1:
        raise ValueError(f"num_partitions must be >= 1, got {num_partitions}")
    base, extra = divmod(len(points), num_partitions)
    chunks: list[tuple[P, ...]] = []
    start = 0
    for i in range(num_partitions):
        size = base + (1 if i < extra else 0)
        chunks.append(tuple(points[start : start + size]))
        start += size
    return tuple(chunks)


class LocalPartitionedData(Generic[P]):
    """Thread-pool PartitionedData over in-memory partitions."""

    def __init__(self, partitions: Iterable[Iterable[P]], max_workers: int = 1) -> None:
        """Initialize with pre-split partitions.

        Args:
            partitions: One iterable of points per partition
            max_workers: Worker threads per pass; 1 means fold inline
        """
        if max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")
        self._partitions: tuple[tuple[P, ...], ...] = tuple(tuple(p) for p in partitions)
        self._max_workers = max_workers
        self._thread_pool: ThreadPoolExecutor | None = (
            ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="multikmeans") if max_workers > 1 else None
        )

    @classmethod
    def from_points(
        cls,
        points: Sequence[P],
        num_partitions: int = 1,
        max_workers: int = 1,
    ) -> LocalPartitionedData[P]:
        """Build from a flat sequence, split into contiguous partitions."""
        return cls(split_contiguous(points, num_partitions), max_workers=max_workers)

    @property
    def partitions(self) -> tuple[tuple[P, ...], ...]:
        return self._partitions

    @property
    def max_workers(self) -> int:
        return self._max_workers

    def __len__(self) -> int:
        return sum(len(p) for p in self._partitions)

    def accumulator(self, zero: float = 0.0) -> LockedAccumulator:
        return LockedAccumulator(zero)

    def broadcast(self, value: T) -> LocalBroadcast[T]:
        return LocalBroadcast(value)

    def map_reduce_by_key(
        self,
        partition_fn: Callable[[Sequence[P]], Iterable[tuple[K, V]]],
        combine: Callable[[V, V], V],
    ) -> dict[K, V]:
        """Apply ``partition_fn`` to each partition and merge values by key.

        Exceptions raised by ``partition_fn`` propagate to the caller once
        the failing partition's result is collected. Pending partitions are
        cancelled and running ones finish before the exception is re-raised.
        """
        merged: dict[K, V] = {}
        for contribution in self._run_partitions(partition_fn):
            for key, value in contribution:
                if key in merged:
                    merged[key] = combine(merged[key], value)
                else:
                    merged[key] = value
        return merged

    def _run_partitions(
        self,
        partition_fn: Callable[[Sequence[P]], Iterable[tuple[K, V]]],
    ) -> list[list[tuple[K, V]]]:
        """Run one task per partition; results in partition order."""
        if self._thread_pool is None:
            return [list(partition_fn(partition)) for partition in self._partitions]

        futures: list[Future[list[tuple[K, V]]]] = [
            self._thread_pool.submit(lambda part: list(partition_fn(part)), partition) for partition in self._partitions
        ]
        # Barrier: every partition must finish before anything is merged
        try:
            return [future.result() for future in futures]
        except BaseException:
            # Callers release shared state once this raises; no task may still be using it
            for future in futures:
                future.cancel()
            wait_all(futures)
            raise

    def shutdown(self, wait: bool = True) -> None:
        """Shut down the worker pool, if any."""
        if self._thread_pool is not None:
            logger.debug("partition_pool_shutdown", max_workers=self._max_workers)
            self._thread_pool.shutdown(wait=wait)
            self._thread_pool = None

    def __enter__(self) -> LocalPartitionedData[P]:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.shutdown()
