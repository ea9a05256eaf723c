"""Target block store writes.

This module creates the decoded ``blocks`` table and appends one
window of rows per transaction, so an interrupted run always leaves
the target at a window boundary.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Sequence

from core.errors import BlockSyncStoreError
from core.types import FlattenedBlock, TargetRow
from store.block_table import (
    CREATE_TARGET_TABLE_SQL,
    INSERT_TARGET_ROW_SQL,
    query_last_verified_idx,
)


class TargetStoreWriter:
    """Append-only writer for the target ``blocks`` table."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._connection = connection
        self._schema_ready = False

    def ensure_schema(self) -> None:
        """Create the target table if it does not exist.

        Raises:
            BlockSyncStoreError: If table creation fails.
        """
        if self._schema_ready:
            return
        try:
            with self._connection:
                self._connection.execute(CREATE_TARGET_TABLE_SQL)
        except sqlite3.Error as error:
            raise BlockSyncStoreError(f"Failed to create target blocks table: {error}") from error
        self._schema_ready = True

    def last_verified_idx(self) -> int | None:
        """Return the highest verified target index, or None when empty."""
        self.ensure_schema()
        return query_last_verified_idx(self._connection, "target")

    def append_window(self, flattened_blocks: Sequence[FlattenedBlock]) -> int:
        """Insert one window of rows atomically.

        Args:
            flattened_blocks: Rows in ascending idx order with raw payloads.

        Returns:
            Number of rows inserted.

        Raises:
            BlockSyncStoreError: If any row fails; no row of the window is kept.
        """
        self.ensure_schema()
        with self._connection:
            for flattened in flattened_blocks:
                self._insert(flattened)
        return len(flattened_blocks)

    def _insert(self, flattened: FlattenedBlock) -> None:
        try:
            self._connection.execute(INSERT_TARGET_ROW_SQL, _row_params(flattened.row))
        except (sqlite3.Error, OverflowError) as error:
            raise BlockSyncStoreError(
                f"Unable to write block {flattened.row.idx}: {error}. "
                f"Raw block: {flattened.raw_block.hex()}"
            ) from error


def _row_params(row: TargetRow) -> tuple[object, ...]:
    return (
        row.idx,
        row.hash,
        row.parent_hash,
        row.memo,
        row.created_at_time,
        row.from_account,
        row.to_account,
        row.amount,
        row.fee,
        row.timestamp,
        row.verified,
    )
