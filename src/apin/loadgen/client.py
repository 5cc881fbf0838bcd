from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

import httpx

from apin import __version__
from apin.loadgen.clock import Clock, SystemClock, elapsed_ms, iso_timestamp
from apin.metrics import RequestOutcome, categorize

logger = logging.getLogger(__name__)

USER_AGENT = f"API-Latency-Tester/{__version__}"

# Called with ``None`` when an attempt starts and with its outcome when it ends.
ProgressCallback = Callable[[int, RequestOutcome | None], Awaitable[None]]


async def send_request(
    client: httpx.AsyncClient,
    url: str,
    request_number: int,
    timeout_ms: int,
    *,
    clock: Clock | None = None,
    progress: ProgressCallback | None = None,
) -> RequestOutcome:
    clock = clock or SystemClock()
    start_mono = clock.monotonic()
    timestamp = iso_timestamp(clock.now())
    if progress:
        await progress(request_number, None)
    timeout_sec = timeout_ms / 1000.0
    try:
        resp = await asyncio.wait_for(
            client.get(
                url,
                headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
                timeout=timeout_sec,
                follow_redirects=True,
            ),
            timeout=timeout_sec,
        )
    except (asyncio.TimeoutError, httpx.TimeoutException):
        error = f"Request timeout after {timeout_ms}ms"
    except httpx.ConnectError as exc:
        error = f"Network connectivity issue: {_describe(exc)}"
    except (httpx.HTTPError, httpx.InvalidURL, OSError) as exc:
        error = _describe(exc)
    else:
        latency_ms = elapsed_ms(start_mono, clock.monotonic())
        if resp.is_success:
            outcome = RequestOutcome(
                request_number=request_number,
                latency_ms=latency_ms,
                timestamp=timestamp,
                status_code=resp.status_code,
                success=True,
                error_message=None,
                category=categorize(latency_ms),
            )
        else:
            outcome = RequestOutcome(
                request_number=request_number,
                latency_ms=latency_ms,
                timestamp=timestamp,
                status_code=resp.status_code,
                success=False,
                error_message=f"HTTP {resp.status_code}: {resp.reason_phrase}",
                category=None,
            )
        return await _finish(outcome, progress)
    outcome = RequestOutcome(
        request_number=request_number,
        latency_ms=elapsed_ms(start_mono, clock.monotonic()),
        timestamp=timestamp,
        status_code=0,
        success=False,
        error_message=error,
        category=None,
    )
    return await _finish(outcome, progress)


async def _finish(outcome: RequestOutcome, progress: ProgressCallback | None) -> RequestOutcome:
    if outcome.success:
        logger.debug(
            "Request %d: %dms (status %d)",
            outcome.request_number,
            outcome.latency_ms,
            outcome.status_code,
        )
    else:
        logger.warning("Request %d failed: %s", outcome.request_number, outcome.error_message)
    if progress:
        await progress(outcome.request_number, outcome)
    return outcome


def _describe(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__
