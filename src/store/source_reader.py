"""Source block log reads.

This module streams ordered block rows for one index window at a time
so large migrations never hold more than a window in memory.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator

from core.errors import BlockSyncDecodeError, BlockSyncStoreError
from core.types import SourceRecord, SyncWindow
from store.block_table import SELECT_SOURCE_WINDOW_SQL, query_last_verified_idx


class SourceStoreReader:
    """Read-only view over the source ``blocks`` table."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._connection = connection

    def last_verified_idx(self) -> int | None:
        """Return the highest verified source index, or None when empty."""
        return query_last_verified_idx(self._connection, "source")

    def read_window(self, window: SyncWindow) -> Iterator[SourceRecord]:
        """Yield source rows with ``window.start <= idx < window.end``.

        Rows come back in ascending idx order, verified or not; callers
        only request windows inside the verified prefix.

        Args:
            window: Half-open index range.

        Yields:
            Source records in idx order.

        Raises:
            BlockSyncDecodeError: If a hash or block cell is not a BLOB.
            BlockSyncStoreError: If the source table cannot be queried.
        """
        try:
            cursor = self._connection.execute(
                SELECT_SOURCE_WINDOW_SQL, (window.start, window.end)
            )
        except sqlite3.Error as error:
            raise _window_read_error(window, error) from error
        try:
            for idx, block_hash, block, verified in cursor:
                yield SourceRecord(
                    idx=int(idx),
                    hash=_blob_column(idx, "hash", block_hash),
                    block=_blob_column(idx, "block", block),
                    verified=bool(verified),
                )
        except sqlite3.Error as error:
            raise _window_read_error(window, error) from error
        finally:
            cursor.close()


def _blob_column(idx: int, column: str, value: object) -> bytes:
    """Return a BLOB column value, rejecting NULL and TEXT cells."""
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise BlockSyncDecodeError(
        f"Unable to decode block {idx}: {column} column holds "
        f"{type(value).__name__}, expected BLOB"
    )


def _window_read_error(window: SyncWindow, error: sqlite3.Error) -> BlockSyncStoreError:
    return BlockSyncStoreError(
        f"Failed to read source blocks [{window.start}, {window.end}): {error}"
    )
