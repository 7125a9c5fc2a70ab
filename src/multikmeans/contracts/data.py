# src/multikmeans/contracts/data.py
"""Data collaborator protocols.

The clustering core depends on exactly these primitives of a partitioned
dataset, so any execution substrate (thread pool, distributed engine, plain
single-threaded fold) can back it:

- map_reduce_by_key: run a function over every partition, merge the keyed
  results across partitions
- accumulator: a commutative scalar sum writable from any partition
- broadcast: a read-only snapshot shared with every partition for one pass
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable, Sequence
from typing import Protocol, TypeVar

P = TypeVar("P")
K = TypeVar("K", bound=Hashable)
V = TypeVar("V")
T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


class Accumulator(Protocol):
    """Add-only numeric accumulator, safe to update from any worker."""

    def add(self, value: float) -> None: ...

    @property
    def value(self) -> float: ...


class Broadcast(Protocol[T_co]):
    """Read-only snapshot shared with every partition during one pass."""

    @property
    def value(self) -> T_co: ...

    def unpersist(self) -> None:
        """Release the snapshot. Reading ``value`` afterwards is an error."""
        ...


class PartitionedData(Protocol[P]):
    """Partitioned, read-only collection of points."""

    @property
    def partitions(self) -> Sequence[Sequence[P]]: ...

    def map_reduce_by_key(
        self,
        partition_fn: Callable[[Sequence[P]], Iterable[tuple[K, V]]],
        combine: Callable[[V, V], V],
    ) -> dict[K, V]:
        """Apply ``partition_fn`` to each partition and merge values by key.

        Blocks until every partition has finished.
        """
        ...

    def accumulator(self, zero: float) -> Accumulator: ...

    def broadcast(self, value: T) -> Broadcast[T]: ...
