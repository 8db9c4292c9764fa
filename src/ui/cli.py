"""Command-line entry point: ``wordpace PATH`` prints sorted word counts."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Dict

from common.config import DEFAULT_PROFILE, load_runtime_config
from common.errors import ErrorCode, WordCountError
from common.models import BatchProgress, RunSummary, RuntimeConfig
from common.progress import ProgressLogger
from core.counting import WordCountRunner

EXIT_OK = 0
EXIT_IO_ERROR = 1
EXIT_USAGE_ERROR = 2


def render_summary(summary: RunSummary) -> None:
    print(
        f"[wordpace] {summary.file_path} lines={summary.total_lines} batches={summary.batches}"
        f" words={summary.total_words} unique={summary.unique_words}"
        f" seconds={summary.duration_seconds:.3f} paused={summary.pause_seconds:.3f}",
        file=sys.stderr,
    )


def build_overrides(args: argparse.Namespace) -> Dict[str, Dict[str, Any]]:
    profile: Dict[str, Any] = {}
    if args.batch_size is not None:
        profile["batch_size"] = args.batch_size
    if args.pause_ms is not None:
        profile["pause_ms"] = args.pause_ms
    if args.stream:
        profile["streaming"] = True
    return {"profile": profile} if profile else {}


def resolve_runtime(args: argparse.Namespace) -> RuntimeConfig:
    config_path = Path(args.config) if args.config else None
    return load_runtime_config(
        profile=args.profile,
        config_path=config_path,
        overrides=build_overrides(args),
    )


def command_count(args: argparse.Namespace) -> int:
    runtime = resolve_runtime(args)
    progress_log = ProgressLogger(Path(args.progress_log) if args.progress_log else None)

    def on_batch(progress: BatchProgress) -> None:
        progress_log.emit(progress)

    runner = WordCountRunner(runtime)
    summary = runner.run(Path(args.path), output=sys.stdout, progress_callback=on_batch)
    progress_log.finish(summary)
    if args.summary:
        render_summary(summary)
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wordpace",
        description="Count whitespace-delimited words in paced batches and print them sorted",
    )
    parser.add_argument("path", help="The path to the file to read")
    parser.add_argument(
        "--profile",
        default=DEFAULT_PROFILE,
        help="Profile from config/defaults.json (e.g., default, throughput, low_memory)",
    )
    parser.add_argument(
        "--config",
        help="Path to an alternative configuration JSON",
    )
    parser.add_argument(
        "--batch-size",
        type=int,
        help="Lines per batch (overrides the profile)",
    )
    parser.add_argument(
        "--pause-ms",
        type=int,
        help="Pause after each batch in milliseconds; 0 disables it (overrides the profile)",
    )
    parser.add_argument(
        "--stream",
        action="store_true",
        help="Read lines straight into batches instead of loading the whole file first",
    )
    parser.add_argument(
        "--progress-log",
        help="Path to JSONL file for per-batch progress events",
    )
    parser.add_argument(
        "--summary",
        action="store_true",
        help="Print a one-line run summary to stderr",
    )
    parser.set_defaults(func=command_count)
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return args.func(args)
    except WordCountError as exc:
        if exc.code == ErrorCode.CONFIG_ERROR:
            parser.exit(EXIT_USAGE_ERROR, f"{parser.prog}: error: {exc}\n")
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_IO_ERROR


if __name__ == "__main__":
    sys.exit(main())
