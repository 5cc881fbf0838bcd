from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping


class LatencyCategory(str, Enum):
    FAST = "Fast"
    MEDIUM = "Medium"
    SLOW = "Slow"
    NOT_APPLICABLE = "N/A"


@dataclass(frozen=True, slots=True)
class RequestOutcome:
    request_number: int
    latency_ms: int
    timestamp: str
    status_code: int
    success: bool
    error_message: str | None
    category: LatencyCategory | None

    def __post_init__(self) -> None:
        if self.success != (self.category is not None):
            msg = "category must be set exactly when the request succeeded"
            raise ValueError(msg)

    def to_dict(self) -> Mapping[str, Any]:
        return {
            "requestNumber": self.request_number,
            "latency": self.latency_ms,
            "timestamp": self.timestamp,
            "statusCode": self.status_code,
            "success": self.success,
            "errorMessage": self.error_message,
            "category": self.category.value if self.category else None,
        }


@dataclass(frozen=True, slots=True)
class SequenceSummary:
    total_requests: int
    successful_requests: int
    failed_requests: int
    average_latency: int
    min_latency: int
    max_latency: int
    success_rate: int
    average_category: LatencyCategory

    @property
    def all_succeeded(self) -> bool:
        return self.failed_requests == 0

    def to_dict(self) -> Mapping[str, Any]:
        return {
            "totalRequests": self.total_requests,
            "successfulRequests": self.successful_requests,
            "failedRequests": self.failed_requests,
            "averageLatency": self.average_latency,
            "minLatency": self.min_latency,
            "maxLatency": self.max_latency,
            "successRate": self.success_rate,
            "averageCategory": self.average_category.value,
        }
