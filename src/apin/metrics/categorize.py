from __future__ import annotations

from typing import Mapping

from apin.metrics.models import LatencyCategory

FAST_THRESHOLD_MS = 300
SLOW_THRESHOLD_MS = 1000

EVALUATION_CRITERIA: Mapping[str, str] = {
    "fast": f"<{FAST_THRESHOLD_MS}ms",
    "medium": f"{FAST_THRESHOLD_MS}-{SLOW_THRESHOLD_MS}ms",
    "slow": f">{SLOW_THRESHOLD_MS}ms",
}


def categorize(latency_ms: float) -> LatencyCategory:
    if latency_ms < FAST_THRESHOLD_MS:
        return LatencyCategory.FAST
    if latency_ms <= SLOW_THRESHOLD_MS:
        return LatencyCategory.MEDIUM
    return LatencyCategory.SLOW
