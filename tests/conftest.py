# tests/conftest.py
"""Shared test fixtures and helpers.

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

import os
from collections.abc import Callable, Iterator, Sequence
from typing import Any

import pytest
from hypothesis import Phase, Verbosity, settings

from multikmeans.core.events import EventBus
from multikmeans.data.partitioned import LocalPartitionedData
from multikmeans.geometry.euclidean import EuclideanPointOps, Vector
from tests.helpers.points import vectors

# =============================================================================
# Hypothesis Configuration
# =============================================================================

settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # Timing varies on shared runners
)

settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))


# =============================================================================
# Shared fixtures
# =============================================================================


class RecordingBus(EventBus):
    """EventBus that also keeps every emitted event, in order."""

    def __init__(self) -> None:
        super().__init__()
        self.events: list[Any] = []

    def emit(self, event: Any) -> None:
        self.events.append(event)
        super().emit(event)

    def of_type(self, event_type: type) -> list[Any]:
        return [e for e in self.events if isinstance(e, event_type)]


@pytest.fixture
def point_ops() -> EuclideanPointOps:
    return EuclideanPointOps(epsilon=1e-9)


@pytest.fixture
def line_points() -> list[Vector]:
    """Two well-separated pairs on the real line."""
    return vectors(0.0, 1.0, 10.0, 11.0)


@pytest.fixture
def recording_bus() -> RecordingBus:
    return RecordingBus()


@pytest.fixture
def make_data() -> Iterator[Callable[..., LocalPartitionedData[Any]]]:
    """Factory for partitioned datasets; pools are shut down after the test."""
    created: list[LocalPartitionedData[Any]] = []

    def _make(points: Sequence[Any], num_partitions: int = 1, max_workers: int = 1) -> LocalPartitionedData[Any]:
        data = LocalPartitionedData.from_points(points, num_partitions=num_partitions, max_workers=max_workers)
        created.append(data)
        return data

    yield _make
    for data in created:
        data.shutdown()
