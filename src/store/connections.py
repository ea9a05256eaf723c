"""SQLite connection management.

This module opens the source store read-only and the target store
read-write, translating open failures into typed connection errors.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from core.errors import BlockSyncConnectionError


@contextmanager
def open_source_store(source_path: Path) -> Iterator[sqlite3.Connection]:
    """Open the source store read-only for the duration of a sync.

    Read-only mode never creates a missing database file.

    Raises:
        BlockSyncConnectionError: If the store cannot be opened.
    """
    uri = f"{source_path.resolve().as_uri()}?mode=ro"
    connection = _connect(uri, source_path, uri=True)
    try:
        yield connection
    finally:
        connection.close()


@contextmanager
def open_target_store(target_path: Path) -> Iterator[sqlite3.Connection]:
    """Open the target store, creating the database file when missing.

    Raises:
        BlockSyncConnectionError: If the store cannot be opened.
    """
    connection = _connect(str(target_path), target_path, uri=False)
    try:
        yield connection
    finally:
        connection.close()


def _connect(database: str, store_path: Path, uri: bool) -> sqlite3.Connection:
    try:
        connection = sqlite3.connect(database, uri=uri)
        connection.execute("PRAGMA schema_version").fetchone()
    except sqlite3.Error as error:
        raise BlockSyncConnectionError(
            f"Unable to open block store at {store_path}: {error}"
        ) from error
    return connection
