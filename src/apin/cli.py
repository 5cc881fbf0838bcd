from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from apin import __version__
from apin.config import (
    DEFAULT_DELAY_MS,
    DEFAULT_REQUEST_COUNT,
    DEFAULT_TIMEOUT_MS,
    ConfigError,
    RunConfig,
    load_env_config,
)
from apin.loadgen.runner import run_session
from apin.report import (
    print_header,
    print_history,
    print_progress,
    print_results,
    print_session_results,
)
from apin.storage import LogStore, LogStoreError, default_log_path


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _execute(config: RunConfig) -> int:
    print_header(config)
    store = LogStore(config.log_path)
    result = asyncio.run(run_session(config, store, progress=print_progress))
    print_results(result.outcomes, result.summary)
    if result.persist_error is not None:
        print(f"Warning: results were not saved: {result.persist_error}", file=sys.stderr)
    else:
        print(f"Results saved to {store.path.resolve()}")
    return result.exit_code


def _parse_int(raw: str, name: str) -> int:
    try:
        return int(raw)
    except ValueError:
        msg = f"{name} must be an integer, got {raw!r}"
        raise ConfigError(msg) from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="apin",
        description="Measure API latency through sequential HTTP GET requests",
    )
    parser.add_argument("url", help="API endpoint URL to test")
    parser.add_argument("-c", "--count", default=str(DEFAULT_REQUEST_COUNT), help="number of requests")
    parser.add_argument("-t", "--timeout", default=str(DEFAULT_TIMEOUT_MS), help="request timeout in ms")
    parser.add_argument("-d", "--delay", default=str(DEFAULT_DELAY_MS), help="delay between requests in ms")
    parser.add_argument("-l", "--log-path", type=Path, default=default_log_path(), help="where to save results")
    parser.add_argument("-v", "--verbose", action="store_true")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)
    try:
        config = RunConfig(
            api_url=args.url,
            request_count=_parse_int(args.count, "Count"),
            timeout_ms=_parse_int(args.timeout, "Timeout"),
            delay_ms=_parse_int(args.delay, "Delay"),
            log_path=args.log_path,
        ).validate()
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return _execute(config)


def env_main() -> int:
    _configure_logging(verbose=False)
    try:
        config = load_env_config()
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        print("Create a .env file with API_URL=<your endpoint> and run again.", file=sys.stderr)
        return 1
    return _execute(config)


def history_main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="apin-history", description="Show past latency test sessions")
    parser.add_argument("-l", "--log-path", type=Path, default=default_log_path())
    parser.add_argument("-n", "--limit", type=int, default=10)
    parser.add_argument("--session", help="show the per-request results of one session")
    args = parser.parse_args(argv)
    _configure_logging(verbose=False)
    store = LogStore(args.log_path)
    try:
        if args.session:
            print_session_results(args.session, store.load_results(args.session))
        else:
            print_history(store.list_sessions(), args.limit)
    except LogStoreError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
