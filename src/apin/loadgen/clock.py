from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Protocol

from apin.metrics import round_half_up


class Clock(Protocol):
    def monotonic(self) -> float:
        ...

    def now(self) -> datetime:
        ...


@dataclass(frozen=True, slots=True)
class SystemClock:
    def monotonic(self) -> float:
        return time.perf_counter()

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


def elapsed_ms(start: float, end: float) -> int:
    return round_half_up((end - start) * 1000.0)


def iso_timestamp(moment: datetime) -> str:
    """Render ``moment`` in UTC as ``2024-01-01T12:00:00.000Z``."""
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")
