from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import httpx

DEFAULT_REQUEST_COUNT = 5
DEFAULT_TIMEOUT_MS = 30_000
DEFAULT_DELAY_MS = 300
DEFAULT_LOG_PATH = Path("latency-test-results.json")


class ConfigError(ValueError):
    """Raised when a run cannot start because its configuration is invalid."""


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_url(url: str | None) -> str:
    if not url:
        msg = "API URL is required"
        raise ConfigError(msg)
    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError) as exc:
        msg = f"Invalid URL format: {exc}"
        raise ConfigError(msg) from exc
    if not parsed.scheme or not parsed.host:
        msg = f"Invalid URL format: {url!r} is not an absolute URL"
        raise ConfigError(msg)
    return url


def validate_sequence_args(count: int, timeout_ms: int, delay_ms: int) -> None:
    if not _is_int(count) or count <= 0:
        msg = f"Count must be a positive integer, got {count!r}"
        raise ConfigError(msg)
    if not _is_int(timeout_ms) or timeout_ms <= 0:
        msg = f"Timeout must be a positive integer, got {timeout_ms!r}"
        raise ConfigError(msg)
    if not _is_int(delay_ms) or delay_ms < 0:
        msg = f"Delay must be a non-negative integer, got {delay_ms!r}"
        raise ConfigError(msg)


@dataclass(frozen=True, slots=True)
class RunConfig:
    api_url: str
    request_count: int = DEFAULT_REQUEST_COUNT
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    delay_ms: int = DEFAULT_DELAY_MS
    log_path: Path = field(default=DEFAULT_LOG_PATH)

    def validate(self) -> RunConfig:
        validate_url(self.api_url)
        validate_sequence_args(self.request_count, self.timeout_ms, self.delay_ms)
        return self

    def to_metadata(self) -> Mapping[str, Any]:
        return {
            "requestCount": self.request_count,
            "timeout": self.timeout_ms,
            "delayMs": self.delay_ms,
        }
