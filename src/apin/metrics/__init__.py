from __future__ import annotations

from apin.metrics.aggregator import aggregate, round_half_up
from apin.metrics.categorize import EVALUATION_CRITERIA, categorize
from apin.metrics.models import LatencyCategory, RequestOutcome, SequenceSummary

__all__ = [
    "EVALUATION_CRITERIA",
    "LatencyCategory",
    "RequestOutcome",
    "SequenceSummary",
    "aggregate",
    "categorize",
    "round_half_up",
]
