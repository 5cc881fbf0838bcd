from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

from apin.config import ConfigError, RunConfig
from apin.loadgen.runner import run_sequence, run_session
from apin.metrics import LatencyCategory, RequestOutcome, aggregate
from apin.storage import LogStore, LogStoreError


def _client(handler: Callable[[httpx.Request], Any]) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def _sequence(handler: Callable[[httpx.Request], Any], count: int, **kwargs: Any) -> list[RequestOutcome]:
    async def go() -> list[RequestOutcome]:
        async with _client(handler) as client:
            return await run_sequence("http://success-always", count, 5000, 0, client=client, **kwargs)

    return asyncio.run(go())


def test_all_successful_sequence() -> None:
    outcomes = _sequence(lambda request: httpx.Response(200), 3)
    assert [o.request_number for o in outcomes] == [1, 2, 3]
    assert all(o.success and o.status_code == 200 for o in outcomes)
    assert all(o.category is LatencyCategory.FAST for o in outcomes)
    assert aggregate(outcomes).success_rate == 100


def test_failures_do_not_stop_the_sequence() -> None:
    calls = {"n": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["n"] += 1
        if calls["n"] % 2 == 0:
            raise httpx.ConnectError("Connection refused", request=request)
        return httpx.Response(500 if calls["n"] == 3 else 200)

    outcomes = _sequence(handler, 5)
    assert calls["n"] == 5
    assert [o.request_number for o in outcomes] == [1, 2, 3, 4, 5]
    assert [o.success for o in outcomes] == [True, False, False, False, True]
    assert [o.status_code for o in outcomes] == [200, 0, 500, 0, 200]


def test_delay_only_between_requests() -> None:
    delays: list[float] = []
    order: list[str] = []

    async def fake_sleep(seconds: float) -> None:
        order.append("sleep")
        delays.append(seconds)

    def handler(request: httpx.Request) -> httpx.Response:
        order.append("request")
        return httpx.Response(200)

    async def go() -> list[RequestOutcome]:
        async with _client(handler) as client:
            return await run_sequence("http://stub.local", 3, 1000, 250, client=client, sleep=fake_sleep)

    outcomes = asyncio.run(go())
    assert len(outcomes) == 3
    assert delays == [0.25, 0.25]
    assert order == ["request", "sleep", "request", "sleep", "request"]


def test_requests_never_overlap() -> None:
    in_flight = {"now": 0, "max": 0}

    async def handler(request: httpx.Request) -> httpx.Response:
        in_flight["now"] += 1
        in_flight["max"] = max(in_flight["max"], in_flight["now"])
        await asyncio.sleep(0.01)
        in_flight["now"] -= 1
        return httpx.Response(200)

    _sequence(handler, 4)
    assert in_flight["max"] == 1


@pytest.mark.parametrize(("count", "timeout_ms", "delay_ms"), [(0, 1000, 0), (3, 0, 0), (3, 1000, -1)])
def test_invalid_arguments_fail_before_any_request(count: int, timeout_ms: int, delay_ms: int) -> None:
    calls: list[httpx.Request] = []

    async def go() -> None:
        async with _client(lambda request: calls.append(request) or httpx.Response(200)) as client:
            await run_sequence("http://stub.local", count, timeout_ms, delay_ms, client=client)

    with pytest.raises(ConfigError):
        asyncio.run(go())
    assert calls == []


def _session(config: RunConfig, store: LogStore, handler: Callable[[httpx.Request], Any]) -> Any:
    async def go() -> Any:
        async with _client(handler) as client:
            return await run_session(config, store, client=client)

    return asyncio.run(go())


def test_session_is_recorded(tmp_path: Path) -> None:
    log_path = tmp_path / "results.json"
    config = RunConfig(api_url="http://stub.local/api", request_count=2, timeout_ms=1000, delay_ms=0, log_path=log_path)
    result = _session(config, LogStore(log_path), lambda request: httpx.Response(200))
    assert result.exit_code == 0
    assert result.persist_error is None
    saved = json.loads(log_path.read_text(encoding="utf-8"))
    assert len(saved) == 1
    entry = saved[0]
    assert entry["sessionId"] == result.record.session_id
    assert entry["apiUrl"] == "http://stub.local/api"
    assert entry["configuration"] == {"requestCount": 2, "timeout": 1000, "delayMs": 0}
    assert entry["evaluationCriteria"] == {"fast": "<300ms", "medium": "300-1000ms", "slow": ">1000ms"}
    assert [r["requestNumber"] for r in entry["results"]] == [1, 2]
    assert entry["summary"]["successRate"] == 100


def test_failed_request_sets_exit_code(tmp_path: Path) -> None:
    log_path = tmp_path / "results.json"
    config = RunConfig(api_url="http://stub.local/api", request_count=2, timeout_ms=1000, delay_ms=0, log_path=log_path)
    result = _session(config, LogStore(log_path), lambda request: httpx.Response(404))
    assert result.exit_code == 1
    assert result.summary.failed_requests == 2
    assert result.summary.average_category is LatencyCategory.NOT_APPLICABLE


def test_persist_failure_keeps_summary(tmp_path: Path) -> None:
    config = RunConfig(api_url="http://stub.local/api", request_count=1, timeout_ms=1000, delay_ms=0, log_path=tmp_path)
    result = _session(config, LogStore(tmp_path), lambda request: httpx.Response(200))
    assert isinstance(result.persist_error, LogStoreError)
    assert result.summary.successful_requests == 1
    assert result.exit_code == 0
