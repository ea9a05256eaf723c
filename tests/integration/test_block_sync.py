"""Integration tests for resumable block sync between SQLite stores."""

from __future__ import annotations

import sqlite3
from pathlib import Path

import pytest

from core.config import SyncConfig
from core.errors import BlockSyncDecodeError, BlockSyncStoreError
from core.types import Burn, Mint, SyncStatus, Transfer
from ingest.pipeline import sync_blocks
from tests.block_factory import (
    account,
    add_source_blocks,
    create_source_store,
    create_verified_source,
    encode_block,
    target_indices,
    transfer_block,
)


def test_sync_migrates_2500_blocks_in_three_windows(tmp_path: Path) -> None:
    """2500 verified blocks should land exactly once via 1000/1000/500 windows."""
    source_path = create_verified_source(tmp_path / "source.db", count=2500)
    config = SyncConfig.from_paths(source_path, tmp_path / "target.db")

    result = sync_blocks(config)

    assert (result.windows_written, result.rows_written) == (3, 2500)
    assert target_indices(config.target_path) == list(range(2500))


@pytest.mark.parametrize("window_size", [1, 7, 2500, 10_000])
def test_sync_result_is_independent_of_window_size(tmp_path: Path, window_size: int) -> None:
    """Every window size should yield the same complete target."""
    source_path = create_verified_source(tmp_path / "source.db", count=25)
    config = SyncConfig.from_paths(source_path, tmp_path / "target.db", window_size)

    sync_blocks(config)

    assert target_indices(config.target_path) == list(range(25))


def test_second_run_is_idempotent(tmp_path: Path) -> None:
    """Re-running against unchanged source should write nothing."""
    source_path = create_verified_source(tmp_path / "source.db", count=10)
    config = SyncConfig.from_paths(source_path, tmp_path / "target.db")
    sync_blocks(config)

    result = sync_blocks(config)

    assert result.status is SyncStatus.FULLY_SYNCED and result.rows_written == 0
    assert target_indices(config.target_path) == list(range(10))


def test_sync_resumes_after_new_source_blocks(tmp_path: Path) -> None:
    """A later run should copy only blocks appended since the last run."""
    source_path = create_verified_source(tmp_path / "source.db", count=10)
    config = SyncConfig.from_paths(source_path, tmp_path / "target.db", window_size=4)
    sync_blocks(config)
    connection = sqlite3.connect(source_path)
    try:
        add_source_blocks(connection, [(idx, transfer_block(idx), True) for idx in range(10, 15)])
    finally:
        connection.close()

    result = sync_blocks(config)

    assert (result.next_start, result.rows_written) == (10, 5)
    assert target_indices(config.target_path) == list(range(15))


def test_sync_writes_flattened_operation_columns(tmp_path: Path) -> None:
    """Burn, mint, and transfer rows should have their documented shapes."""
    blocks = [
        (0, encode_block(Mint(to_account=account(2), amount=7), created_at_time=1_000_000_000), True),
        (1, encode_block(Burn(from_account=account(1), amount=5)), True),
        (
            2,
            encode_block(
                Transfer(from_account=account(1), to_account=account(2), amount=3, fee=1)
            ),
            True,
        ),
    ]
    source_path = create_source_store(tmp_path / "source.db", blocks)
    config = SyncConfig.from_paths(source_path, tmp_path / "target.db")

    sync_blocks(config)
    connection = sqlite3.connect(config.target_path)
    try:
        rows = connection.execute(
            "SELECT from_account, to_account, amount, fee, created_at_time "
            "FROM blocks ORDER BY idx"
        ).fetchall()
    finally:
        connection.close()

    assert rows == [
        (None, account(2), 7, None, 1.0),
        (account(1), None, 5, None, None),
        (account(1), account(2), 3, 1, None),
    ]


def test_decode_failure_aborts_before_later_windows(tmp_path: Path) -> None:
    """A malformed block should stop the run and leave later windows unwritten."""
    blocks = [(idx, transfer_block(idx), True) for idx in range(30)]
    blocks[15] = (15, b"\x1a\x05\x01", True)
    source_path = create_source_store(tmp_path / "source.db", blocks)
    config = SyncConfig.from_paths(source_path, tmp_path / "target.db", window_size=10)

    with pytest.raises(BlockSyncDecodeError, match="block 15"):
        sync_blocks(config)

    assert target_indices(config.target_path) == list(range(10))


def test_conflicting_target_row_fails_with_block_details(tmp_path: Path) -> None:
    """A target row that blocks an insert should surface idx and payload."""
    source_path = create_verified_source(tmp_path / "source.db", count=5)
    target_path = tmp_path / "target.db"
    connection = sqlite3.connect(target_path)
    try:
        with connection:
            connection.execute(
                "CREATE TABLE blocks (idx INTEGER NOT NULL PRIMARY KEY, hash BLOB NOT NULL, "
                "parent_hash BLOB, memo INTEGER, created_at_time DATETIME, from_account BLOB, "
                "to_account BLOB, amount INTEGER NOT NULL, fee INTEGER, timestamp DATETIME, "
                "verified BOOL)"
            )
            connection.execute(
                "INSERT INTO blocks (idx, hash, amount, verified) VALUES (3, x'00', 1, 0)"
            )
    finally:
        connection.close()
    config = SyncConfig.from_paths(source_path, target_path)

    with pytest.raises(BlockSyncStoreError, match="block 3") as error_info:
        sync_blocks(config)

    assert transfer_block(3).hex() in str(error_info.value)
    assert target_indices(target_path) == [3]
