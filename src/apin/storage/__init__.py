from __future__ import annotations

from pathlib import Path

from apin.storage.json_store import LogStore, LogStoreError
from apin.storage.records import SessionRecord, build_session_record


def default_log_path() -> Path:
    return Path.home() / "apin-results.json"


__all__ = ["LogStore", "LogStoreError", "SessionRecord", "build_session_record", "default_log_path"]
