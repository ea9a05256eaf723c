"""Block sync CLI entry point.

This module parses the two store locations, runs one sync pass,
and prints a single status line describing the outcome.
"""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from core.config import SyncConfig
from core.errors import BlockSyncError
from core.types import SyncResult, SyncStatus
from ingest.pipeline import sync_blocks


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="blocksync",
        description="Decode verified ledger blocks from a source store into a target store",
    )
    parser.add_argument(
        "-s",
        "--source-store-location",
        required=True,
        help="SQLite file holding encoded blocks",
    )
    parser.add_argument(
        "-t",
        "--target-store-location",
        required=True,
        help="SQLite file receiving decoded block rows",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run one sync pass.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    args = build_parser().parse_args(argv)
    try:
        config = SyncConfig.from_paths(args.source_store_location, args.target_store_location)
        result = sync_blocks(config)
    except BlockSyncError as error:
        print(f"error: {error}", file=sys.stderr)
        return 1
    print(render_status(config, result))
    return 0


def render_status(config: SyncConfig, result: SyncResult) -> str:
    """Render the one-line status for a finished run."""
    if result.status is SyncStatus.SOURCE_EMPTY:
        return f"Source table at {config.source_path} is empty"
    if result.status is SyncStatus.FULLY_SYNCED:
        return f"All blocks decoded. Last block {result.last_source_idx}"
    return (
        f"Synced blocks {result.next_start}..{result.last_source_idx} "
        f"({result.rows_written} rows in {result.windows_written} windows)"
    )
