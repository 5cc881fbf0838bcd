from __future__ import annotations

from apin.config.env import load_env_config
from apin.config.models import (
    DEFAULT_DELAY_MS,
    DEFAULT_LOG_PATH,
    DEFAULT_REQUEST_COUNT,
    DEFAULT_TIMEOUT_MS,
    ConfigError,
    RunConfig,
    validate_sequence_args,
    validate_url,
)

__all__ = [
    "DEFAULT_DELAY_MS",
    "DEFAULT_LOG_PATH",
    "DEFAULT_REQUEST_COUNT",
    "DEFAULT_TIMEOUT_MS",
    "ConfigError",
    "RunConfig",
    "load_env_config",
    "validate_sequence_args",
    "validate_url",
]
