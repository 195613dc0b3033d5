"""Metric computation subpackage."""

from .aggregator import ReadStatsAggregator, collect_read_stats  # noqa: F401
from .derivation import QCSnapshot, derive_snapshot  # noqa: F401

__all__ = ["ReadStatsAggregator", "collect_read_stats", "QCSnapshot", "derive_snapshot"]
