"""Unit tests for CLI command handling."""

from __future__ import annotations

import sqlite3
from pathlib import Path

from cli.main import main
from tests.block_factory import create_source_store, create_verified_source


def _args(source_path: Path, target_path: Path) -> list[str]:
    return ["-s", str(source_path), "-t", str(target_path)]


def test_cli_reports_empty_source(tmp_path: Path, capsys) -> None:
    """CLI should print the empty-source status and succeed."""
    source_path = create_source_store(tmp_path / "source.db")

    exit_code = main(_args(source_path, tmp_path / "target.db"))
    output = capsys.readouterr().out.strip()

    assert exit_code == 0 and output == f"Source table at {source_path.resolve()} is empty"


def test_cli_syncs_then_reports_fully_synced(tmp_path: Path, capsys) -> None:
    """A second CLI run should report the target as fully decoded."""
    source_path = create_verified_source(tmp_path / "source.db", count=3)
    target_path = tmp_path / "target.db"

    first_exit = main(_args(source_path, target_path))
    first_output = capsys.readouterr().out.strip()
    second_exit = main(_args(source_path, target_path))
    second_output = capsys.readouterr().out.strip()

    assert (first_exit, second_exit) == (0, 0)
    assert first_output == "Synced blocks 0..2 (3 rows in 1 windows)"
    assert second_output == "All blocks decoded. Last block 2"


def test_cli_fails_for_missing_source(tmp_path: Path, capsys) -> None:
    """A missing source should exit non-zero with an error message."""
    exit_code = main(_args(tmp_path / "missing.db", tmp_path / "target.db"))
    captured = capsys.readouterr()

    assert exit_code == 1 and captured.err.startswith("error: Source store not found")
    assert not (tmp_path / "target.db").exists()


def test_cli_reports_failing_block(tmp_path: Path, capsys) -> None:
    """Decode failures should identify the offending block index."""
    source_path = create_source_store(tmp_path / "source.db", [(0, b"\x1a\x05\x01", True)])

    exit_code = main(_args(source_path, tmp_path / "target.db"))
    captured = capsys.readouterr()

    assert exit_code == 1 and "Unable to decode block 0" in captured.err


def test_cli_reports_block_with_null_payload(tmp_path: Path, capsys) -> None:
    """A NULL block cell should exit non-zero and name the offending idx."""
    source_path = tmp_path / "source.db"
    connection = sqlite3.connect(source_path)
    try:
        with connection:
            connection.execute(
                "CREATE TABLE blocks (hash BLOB, block BLOB, parent_hash BLOB, "
                "idx INTEGER NOT NULL PRIMARY KEY, verified BOOLEAN)"
            )
            connection.execute(
                "INSERT INTO blocks (hash, block, idx, verified) VALUES (x'00', NULL, 1, 1)"
            )
    finally:
        connection.close()

    exit_code = main(_args(source_path, tmp_path / "target.db"))
    captured = capsys.readouterr()

    assert exit_code == 1 and "Unable to decode block 1" in captured.err
