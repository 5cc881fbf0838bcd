from __future__ import annotations

from pathlib import Path
from typing import Sequence

import pandas as pd

from apin import __version__
from apin.config import RunConfig
from apin.metrics import RequestOutcome, SequenceSummary

RULE = "=" * 60
THIN_RULE = "-" * 60


def print_header(config: RunConfig) -> None:
    print(f"API Latency Testing Tool v{__version__}")
    print(RULE)
    print(f"Target URL:             {config.api_url}")
    print(f"Number of requests:     {config.request_count}")
    print(f"Timeout:                {config.timeout_ms}ms")
    print(f"Delay between requests: {config.delay_ms}ms")
    print(f"Log file:               {Path(config.log_path).expanduser().resolve()}")
    print(RULE + "\n")


async def print_progress(request_number: int, outcome: RequestOutcome | None) -> None:
    if outcome is None:
        print(f"Request {request_number}: starting...")
    elif outcome.success:
        category = f" - {outcome.category.value}" if outcome.category else ""
        print(
            f"Request {request_number}: {outcome.latency_ms}ms "
            f"(status {outcome.status_code}){category}"
        )
    else:
        print(f"Request {request_number}: failed - {outcome.error_message}")


def print_results(outcomes: Sequence[RequestOutcome], summary: SequenceSummary) -> None:
    print(f"\n{RULE}")
    print("TEST RESULTS SUMMARY")
    print(RULE)
    print("\nIndividual request results:")
    print(THIN_RULE)
    for outcome in outcomes:
        if outcome.success:
            category = f" ({outcome.category.value})" if outcome.category else ""
            print(f"[OK]   Request {outcome.request_number}: {outcome.latency_ms}ms - SUCCESS{category}")
        else:
            print(f"[FAIL] Request {outcome.request_number}: {outcome.latency_ms}ms - FAILED")
            if outcome.error_message:
                print(f"       Error: {outcome.error_message}")

    print("\nPerformance metrics:")
    print(THIN_RULE)
    print(f"Total requests:   {summary.total_requests}")
    print(f"Successful:       {summary.successful_requests}")
    print(f"Failed:           {summary.failed_requests}")
    print(f"Success rate:     {summary.success_rate}%")
    if summary.successful_requests > 0:
        print(f"Average latency:  {summary.average_latency}ms")
        print(f"Average category: {summary.average_category.value}")
        print(f"Fastest request:  {summary.min_latency}ms")
        print(f"Slowest request:  {summary.max_latency}ms")
    print(f"{RULE}\n")


def print_history(sessions: pd.DataFrame, limit: int) -> None:
    if sessions.empty:
        print("No sessions recorded yet.")
        return
    print(sessions.head(limit).to_string(index=False))


def print_session_results(session_id: str, results: pd.DataFrame) -> None:
    if results.empty:
        print(f"No results found for session {session_id}.")
        return
    print(f"Session {session_id}")
    print(results.to_string(index=False))
