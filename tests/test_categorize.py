from __future__ import annotations

from hypothesis import given, strategies as st

from apin.metrics import EVALUATION_CRITERIA, LatencyCategory, categorize


def test_boundaries() -> None:
    assert categorize(0) is LatencyCategory.FAST
    assert categorize(299) is LatencyCategory.FAST
    assert categorize(300) is LatencyCategory.MEDIUM
    assert categorize(1000) is LatencyCategory.MEDIUM
    assert categorize(1001) is LatencyCategory.SLOW


@given(latency=st.integers(min_value=0, max_value=10_000_000))
def test_tiers_partition_non_negative_latencies(latency: int) -> None:
    category = categorize(latency)
    assert category is not LatencyCategory.NOT_APPLICABLE
    if latency < 300:
        assert category is LatencyCategory.FAST
    elif latency <= 1000:
        assert category is LatencyCategory.MEDIUM
    else:
        assert category is LatencyCategory.SLOW


def test_evaluation_criteria_describe_boundaries() -> None:
    assert dict(EVALUATION_CRITERIA) == {
        "fast": "<300ms",
        "medium": "300-1000ms",
        "slow": ">1000ms",
    }
