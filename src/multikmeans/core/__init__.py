# src/multikmeans/core/__init__.py
"""Core infrastructure: Configuration, Events, Logging."""

from multikmeans.core.config import (
    ClusteringSettings,
    ConcurrencySettings,
    LoggingSettings,
    MultiKMeansSettings,
    load_settings,
)
from multikmeans.core.events import (
    EventBus,
    EventBusProtocol,
    NullEventBus,
)
from multikmeans.core.logging import (
    configure_logging,
    get_logger,
)

__all__ = [
    "ClusteringSettings",
    "ConcurrencySettings",
    "EventBus",
    "EventBusProtocol",
    "LoggingSettings",
    "MultiKMeansSettings",
    "NullEventBus",
    "configure_logging",
    "get_logger",
    "load_settings",
]
