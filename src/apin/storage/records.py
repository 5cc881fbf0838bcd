from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from apin.config import RunConfig
from apin.loadgen.clock import iso_timestamp
from apin.metrics import EVALUATION_CRITERIA, RequestOutcome, SequenceSummary


@dataclass(frozen=True, slots=True)
class SessionRecord:
    session_id: str
    timestamp: str
    api_url: str
    configuration: Mapping[str, Any]
    evaluation_criteria: Mapping[str, str]
    results: list[RequestOutcome]
    summary: SequenceSummary

    def to_dict(self) -> dict[str, Any]:
        return {
            "sessionId": self.session_id,
            "timestamp": self.timestamp,
            "apiUrl": self.api_url,
            "configuration": dict(self.configuration),
            "evaluationCriteria": dict(self.evaluation_criteria),
            "results": [dict(r.to_dict()) for r in self.results],
            "summary": dict(self.summary.to_dict()),
        }


def new_session_id() -> str:
    return str(uuid.uuid4())


def build_session_record(
    api_url: str,
    outcomes: Iterable[RequestOutcome],
    summary: SequenceSummary,
    config: RunConfig,
    *,
    started_at: datetime,
    session_id: str | None = None,
) -> SessionRecord:
    return SessionRecord(
        session_id=session_id or new_session_id(),
        timestamp=iso_timestamp(started_at),
        api_url=api_url,
        configuration=config.to_metadata(),
        evaluation_criteria=MappingProxyType(dict(EVALUATION_CRITERIA)),
        results=list(outcomes),
        summary=summary,
    )
