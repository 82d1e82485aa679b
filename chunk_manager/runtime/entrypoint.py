from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from chunk_manager.core.domain.selection import SelectionModel, UnknownBucketError
from chunk_manager.core.domain.types import ChunkDate
from chunk_manager.runtime.config import AppConfig
from chunk_manager.runtime.report import (
    print_dataset_summary,
    print_delete_result,
    print_download_result,
    print_heatmap,
)
from chunk_manager.runtime.session import ChunkSession, build_session
from chunk_manager.services.mock_service import MockChunkService

LOGGER = logging.getLogger(__name__)

COMMANDS = ("summary", "heatmap", "download", "delete")

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _parse_bucket(raw: str) -> tuple[int, int]:
    """Parse ``HOUR:MINUTE`` into a tuple."""
    try:
        hour_str, minute_str = raw.split(":", 1)
        return int(hour_str), int(minute_str)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(
            f"expected HOUR:MINUTE, got {raw!r}"
        ) from exc


def _apply_selection(
    selection: SelectionModel,
    *,
    select_all: bool,
    hours: list[int],
    buckets: list[tuple[int, int]],
) -> None:
    """Apply CLI selection flags in order: --all, then --hour, then --bucket."""
    if select_all:
        selection.toggle_all()

    for hour in hours:
        selection.toggle_group(hour)

    for hour, minute in buckets:
        group = selection.find_group(hour)
        if group is None:
            raise UnknownBucketError(f"no group for hour {hour}")
        selection.toggle_bucket(
            ChunkDate(
                year=group.date.year,
                month=group.date.month,
                day=group.date.day,
                hour=hour,
                minute=minute,
            )
        )


async def _run(command: str, session: ChunkSession, args: argparse.Namespace) -> int:
    orchestrator = session.orchestrator

    dataset = await orchestrator.fetch_chunks()
    if dataset is None:
        print(f"Error: {orchestrator.error}", file=sys.stderr)
        return 1

    _apply_selection(
        session.selection,
        select_all=args.all,
        hours=args.hour,
        buckets=args.bucket,
    )

    if command == "summary":
        print_dataset_summary(dataset, session.selection)
        return 0

    if command == "heatmap":
        print_heatmap(dataset, session.selection)
        return 0

    if session.selection.selected_count == 0:
        print("Nothing selected; use --all, --hour or --bucket.", file=sys.stderr)
        return 2

    if command == "download":
        files = await orchestrator.download_selected()
        if files is None:
            print(f"Error: {orchestrator.error}", file=sys.stderr)
            return 1
        print_download_result(files)
        return 0

    result = await orchestrator.delete_selected()
    if result is None:
        print(f"Error: {orchestrator.error}", file=sys.stderr)
        return 1
    print_delete_result(result)
    print(f"Remaining selection: {session.selection.selected_count} chunks")
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Inspect chunk density and run bulk download/delete on a selection."
    )

    parser.add_argument(
        "command",
        choices=COMMANDS,
        help="Action to run against the selected chunks.",
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a JSON config file (defaults apply when omitted).",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Override the configured log level.",
    )

    parser.add_argument(
        "--all",
        action="store_true",
        help="Select every chunk.",
    )

    parser.add_argument(
        "--hour",
        type=int,
        action="append",
        default=[],
        help="Toggle every chunk of an hour group (repeatable).",
    )

    parser.add_argument(
        "--bucket",
        type=_parse_bucket,
        action="append",
        default=[],
        help="Toggle a single chunk given as HOUR:MINUTE (repeatable).",
    )

    return parser


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    cfg = AppConfig.from_file(args.config) if args.config is not None else AppConfig()

    logging.basicConfig(
        level=args.log_level or cfg.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    session = build_session(cfg, MockChunkService.from_config(cfg))
    try:
        return asyncio.run(_run(args.command, session, args))
    except UnknownBucketError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2
    finally:
        session.close()


if __name__ == "__main__":
    sys.exit(main())
