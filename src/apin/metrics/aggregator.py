from __future__ import annotations

import math
from typing import Iterable

import numpy as np

from apin.metrics.categorize import categorize
from apin.metrics.models import LatencyCategory, RequestOutcome, SequenceSummary


def round_half_up(value: float) -> int:
    # halves always round up (2.5 -> 3), unlike round()
    whole = math.floor(value)
    return int(whole) + (1 if value - whole >= 0.5 else 0)


def aggregate(outcomes: Iterable[RequestOutcome]) -> SequenceSummary:
    outcomes = list(outcomes)
    total = len(outcomes)
    latencies = [o.latency_ms for o in outcomes if o.success]
    successful = len(latencies)
    failed = total - successful
    if not latencies:
        return SequenceSummary(
            total_requests=total,
            successful_requests=0,
            failed_requests=failed,
            average_latency=0,
            min_latency=0,
            max_latency=0,
            success_rate=0,
            average_category=LatencyCategory.NOT_APPLICABLE,
        )
    values = np.asarray(latencies, dtype=float)
    average = round_half_up(float(values.mean()))
    return SequenceSummary(
        total_requests=total,
        successful_requests=successful,
        failed_requests=failed,
        average_latency=average,
        min_latency=int(values.min()),
        max_latency=int(values.max()),
        success_rate=round_half_up(successful / total * 100),
        average_category=categorize(average),
    )
