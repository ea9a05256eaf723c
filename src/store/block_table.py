"""Shared SQL for the ``blocks`` table.

Source and target stores both name their table ``blocks`` and both
mark finalized rows with ``verified = 1``.
"""

from __future__ import annotations

import sqlite3

from core.constants import BLOCKS_TABLE_NAME
from core.errors import BlockSyncStoreError

CREATE_TARGET_TABLE_SQL = f"""
CREATE TABLE IF NOT EXISTS {BLOCKS_TABLE_NAME} (
    idx INTEGER NOT NULL PRIMARY KEY,
    hash BLOB NOT NULL,
    parent_hash BLOB,
    memo INTEGER,
    created_at_time DATETIME,
    from_account BLOB,
    to_account BLOB,
    amount INTEGER NOT NULL,
    fee INTEGER,
    timestamp DATETIME,
    verified BOOL
)
"""

INSERT_TARGET_ROW_SQL = f"""
INSERT INTO {BLOCKS_TABLE_NAME} (
    idx, hash, parent_hash, memo, created_at_time,
    from_account, to_account, amount, fee, timestamp, verified
) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
"""

SELECT_SOURCE_WINDOW_SQL = f"""
SELECT idx, hash, block, verified
FROM {BLOCKS_TABLE_NAME}
WHERE idx >= ? AND idx < ?
ORDER BY idx
"""

SELECT_LAST_VERIFIED_SQL = f"SELECT MAX(idx) FROM {BLOCKS_TABLE_NAME} WHERE verified = 1"


def query_last_verified_idx(connection: sqlite3.Connection, store_name: str) -> int | None:
    """Return the highest verified block index, or None for an empty table.

    Args:
        connection: Open store handle.
        store_name: Store label used in error messages.

    Raises:
        BlockSyncStoreError: If the blocks table cannot be queried.
    """
    try:
        row = connection.execute(SELECT_LAST_VERIFIED_SQL).fetchone()
    except sqlite3.Error as error:
        raise BlockSyncStoreError(
            f"Failed to read last verified block from {store_name} store: {error}"
        ) from error
    return None if row is None or row[0] is None else int(row[0])
