"""Clustering engine: aggregation pass, run coordination, result model."""

from multikmeans.engine.aggregator import CentroidAggregator, total_points
from multikmeans.engine.coordinator import MultiKMeansClusterer, RunCoordinator, select_best
from multikmeans.engine.model import KMeansModel

__all__ = [
    "CentroidAggregator",
    "KMeansModel",
    "MultiKMeansClusterer",
    "RunCoordinator",
    "select_best",
    "total_points",
]
