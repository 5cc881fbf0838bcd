from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pandas as pd

from apin.storage.records import SessionRecord

logger = logging.getLogger(__name__)

SESSION_COLUMNS = [
    "sessionId",
    "timestamp",
    "apiUrl",
    "totalRequests",
    "successRate",
    "averageLatency",
    "averageCategory",
]
RESULT_COLUMNS = [
    "requestNumber",
    "latency",
    "timestamp",
    "statusCode",
    "success",
    "errorMessage",
    "category",
]


class LogStoreError(OSError):
    """The log file could not be read or written."""


@dataclass(slots=True)
class LogStore:
    """Append-only history of sessions kept as one JSON array on disk.

    Every append rewrites the whole file. There is no locking, so two
    processes appending to the same path at once can lose an entry.
    """

    path: Path

    def __post_init__(self) -> None:
        self.path = Path(self.path).expanduser()

    def load_sessions(self) -> list[dict[str, Any]]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError as exc:
            msg = f"Cannot read log file {self.path}: {exc}"
            raise LogStoreError(msg) from exc
        if not text.strip():
            return []
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            logger.warning("Log file %s is not valid JSON (%s); starting a new history", self.path, exc)
            return []
        if not isinstance(data, list):
            logger.warning("Log file %s does not hold a JSON array; starting a new history", self.path)
            return []
        return data

    def append(self, record: SessionRecord) -> int:
        sessions = self.load_sessions()
        sessions.append(record.to_dict())
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(sessions, indent=2) + "\n", encoding="utf-8")
        except OSError as exc:
            msg = f"Cannot write log file {self.path}: {exc}"
            raise LogStoreError(msg) from exc
        return len(sessions)

    def list_sessions(self) -> pd.DataFrame:
        rows = []
        for entry in self.load_sessions():
            if not isinstance(entry, dict):
                continue
            summary = entry.get("summary")
            if not isinstance(summary, dict):
                summary = {}
            rows.append(
                {
                    "sessionId": entry.get("sessionId"),
                    "timestamp": entry.get("timestamp"),
                    "apiUrl": entry.get("apiUrl"),
                    "totalRequests": summary.get("totalRequests"),
                    "successRate": summary.get("successRate"),
                    "averageLatency": summary.get("averageLatency"),
                    "averageCategory": summary.get("averageCategory"),
                }
            )
        frame = pd.DataFrame(rows, columns=SESSION_COLUMNS)
        if frame.empty:
            return frame
        return frame.iloc[::-1].reset_index(drop=True)

    def load_results(self, session_id: str) -> pd.DataFrame:
        for entry in self.load_sessions():
            if isinstance(entry, dict) and entry.get("sessionId") == session_id:
                results = entry.get("results")
                if not isinstance(results, list):
                    results = []
                rows = [r for r in results if isinstance(r, dict)]
                return pd.DataFrame(rows, columns=RESULT_COLUMNS)
        return pd.DataFrame(columns=RESULT_COLUMNS)
