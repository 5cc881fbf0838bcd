from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable

import httpx

from apin.config import RunConfig, validate_sequence_args
from apin.loadgen.client import ProgressCallback, send_request
from apin.loadgen.clock import Clock, SystemClock
from apin.metrics import RequestOutcome, SequenceSummary, aggregate
from apin.storage import LogStore, LogStoreError, SessionRecord, build_session_record

logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]


@dataclass(frozen=True, slots=True)
class SessionResult:
    record: SessionRecord
    persist_error: LogStoreError | None = None

    @property
    def outcomes(self) -> list[RequestOutcome]:
        return self.record.results

    @property
    def summary(self) -> SequenceSummary:
        return self.record.summary

    @property
    def exit_code(self) -> int:
        return 0 if self.summary.all_succeeded else 1


async def run_sequence(
    url: str,
    count: int,
    timeout_ms: int,
    delay_ms: int,
    *,
    client: httpx.AsyncClient | None = None,
    clock: Clock | None = None,
    progress: ProgressCallback | None = None,
    sleep: SleepFunc = asyncio.sleep,
) -> list[RequestOutcome]:
    validate_sequence_args(count, timeout_ms, delay_ms)
    clock = clock or SystemClock()
    if client is None:
        async with httpx.AsyncClient() as own_client:
            return await _sequential(own_client, url, count, timeout_ms, delay_ms, clock, progress, sleep)
    return await _sequential(client, url, count, timeout_ms, delay_ms, clock, progress, sleep)


async def _sequential(
    client: httpx.AsyncClient,
    url: str,
    count: int,
    timeout_ms: int,
    delay_ms: int,
    clock: Clock,
    progress: ProgressCallback | None,
    sleep: SleepFunc,
) -> list[RequestOutcome]:
    outcomes: list[RequestOutcome] = []
    for request_number in range(1, count + 1):
        outcome = await send_request(
            client,
            url,
            request_number,
            timeout_ms,
            clock=clock,
            progress=progress,
        )
        outcomes.append(outcome)
        if request_number < count:
            await sleep(delay_ms / 1000.0)
    return outcomes


async def run_session(
    config: RunConfig,
    store: LogStore,
    *,
    client: httpx.AsyncClient | None = None,
    clock: Clock | None = None,
    progress: ProgressCallback | None = None,
    sleep: SleepFunc = asyncio.sleep,
) -> SessionResult:
    config.validate()
    clock = clock or SystemClock()
    started_at = clock.now()
    logger.info(
        "Starting %d requests against %s (timeout %dms, delay %dms)",
        config.request_count,
        config.api_url,
        config.timeout_ms,
        config.delay_ms,
    )
    outcomes = await run_sequence(
        config.api_url,
        config.request_count,
        config.timeout_ms,
        config.delay_ms,
        client=client,
        clock=clock,
        progress=progress,
        sleep=sleep,
    )
    summary = aggregate(outcomes)
    record = build_session_record(config.api_url, outcomes, summary, config, started_at=started_at)
    try:
        stored = store.append(record)
    except LogStoreError as exc:
        logger.warning("Could not save results to %s: %s", store.path, exc)
        return SessionResult(record=record, persist_error=exc)
    logger.info("Session %s saved to %s (%d sessions stored)", record.session_id, store.path, stored)
    return SessionResult(record=record)
