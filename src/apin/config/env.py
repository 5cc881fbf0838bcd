from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping

from dotenv import find_dotenv, load_dotenv

from apin.config.models import (
    DEFAULT_DELAY_MS,
    DEFAULT_LOG_PATH,
    DEFAULT_REQUEST_COUNT,
    DEFAULT_TIMEOUT_MS,
    ConfigError,
    RunConfig,
    validate_url,
)

logger = logging.getLogger(__name__)


def _int_setting(environ: Mapping[str, str], name: str, default: int, minimum: int) -> int:
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        logger.debug("Ignoring non-integer %s=%r, using %d", name, raw, default)
        return default
    if value < minimum:
        logger.debug("Ignoring out-of-range %s=%d, using %d", name, value, default)
        return default
    return value


def load_env_config(environ: Mapping[str, str] | None = None) -> RunConfig:
    """Build a validated ``RunConfig`` from ``API_URL`` and friends.

    When reading the real process environment a ``.env`` file in the working
    directory is loaded first; variables that are already set win.
    """
    if environ is None:
        load_dotenv(find_dotenv(usecwd=True), override=False)
        environ = os.environ
    api_url = environ.get("API_URL")
    if not api_url:
        msg = (
            "API_URL environment variable is required. "
            "Please set it in your .env file or environment."
        )
        raise ConfigError(msg)
    try:
        validate_url(api_url)
    except ConfigError as exc:
        msg = f"Invalid API_URL format: {exc}"
        raise ConfigError(msg) from exc
    log_path = environ.get("LOG_FILE_PATH") or str(DEFAULT_LOG_PATH)
    return RunConfig(
        api_url=api_url,
        request_count=_int_setting(environ, "REQUEST_COUNT", DEFAULT_REQUEST_COUNT, 1),
        timeout_ms=_int_setting(environ, "REQUEST_TIMEOUT", DEFAULT_TIMEOUT_MS, 1),
        delay_ms=_int_setting(environ, "REQUEST_DELAY", DEFAULT_DELAY_MS, 0),
        log_path=Path(log_path),
    ).validate()
