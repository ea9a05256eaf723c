"""Sync orchestration for block replication.

This module coordinates resume planning, windowed source reads,
block decoding, field extraction, and atomic target writes.
"""

from __future__ import annotations

from codec.block_decoder import decode_block
from core.config import SyncConfig
from core.errors import BlockSyncDecodeError, BlockSyncError
from core.logging_config import get_logger
from core.types import FlattenedBlock, SyncPlan, SyncResult, SyncStatus, SyncWindow
from ingest.resume_plan import plan_sync
from store.connections import open_source_store, open_target_store
from store.source_reader import SourceStoreReader
from store.target_writer import TargetStoreWriter
from transforms.field_extraction import flatten_block

_LOGGER = get_logger(__name__)


class BlockSyncRunner:
    """Runner that copies missing verified blocks window by window."""

    def __init__(
        self,
        reader: SourceStoreReader,
        writer: TargetStoreWriter,
        window_size: int,
    ) -> None:
        self._reader = reader
        self._writer = writer
        self._window_size = window_size

    def plan(self) -> SyncPlan:
        """Compute remaining windows from both stores' last verified index."""
        return plan_sync(
            target_last_idx=self._writer.last_verified_idx(),
            source_last_idx=self._reader.last_verified_idx(),
            window_size=self._window_size,
        )

    def run(self) -> SyncResult:
        """Execute the sync and return a run summary.

        Raises:
            BlockSyncDecodeError: If a source block cannot be decoded.
            BlockSyncStoreError: If a store read or write fails.
        """
        plan = self.plan()
        if plan.status is not SyncStatus.SYNCED:
            _LOGGER.info(
                "sync_skipped",
                status=plan.status.value,
                next_start=plan.next_start,
                last_source_idx=plan.last_source_idx,
            )
            return SyncResult(
                status=plan.status,
                next_start=plan.next_start,
                last_source_idx=plan.last_source_idx,
                windows_written=0,
                rows_written=0,
            )
        _LOGGER.info(
            "sync_planned",
            next_start=plan.next_start,
            last_source_idx=plan.last_source_idx,
            window_count=len(plan.windows),
            window_size=self._window_size,
        )
        rows_written = 0
        for window in plan.windows:
            try:
                rows_written += self._sync_window(window)
            except BlockSyncError as error:
                _LOGGER.error(
                    "sync_failed",
                    window_start=window.start,
                    window_end=window.end,
                    rows_written=rows_written,
                    error=str(error),
                )
                raise
        _LOGGER.info(
            "sync_completed",
            next_start=plan.next_start,
            last_source_idx=plan.last_source_idx,
            windows_written=len(plan.windows),
            rows_written=rows_written,
        )
        return SyncResult(
            status=SyncStatus.SYNCED,
            next_start=plan.next_start,
            last_source_idx=plan.last_source_idx,
            windows_written=len(plan.windows),
            rows_written=rows_written,
        )

    def _sync_window(self, window: SyncWindow) -> int:
        flattened_blocks = self._decode_window(window)
        written = self._writer.append_window(flattened_blocks)
        _LOGGER.info(
            "window_written",
            window_start=window.start,
            window_end=window.end,
            row_count=written,
        )
        return written

    def _decode_window(self, window: SyncWindow) -> list[FlattenedBlock]:
        """Decode a full window before writing any of it."""
        flattened_blocks: list[FlattenedBlock] = []
        for record in self._reader.read_window(window):
            try:
                block = decode_block(record.block)
            except BlockSyncDecodeError as error:
                raise BlockSyncDecodeError(
                    f"Unable to decode block {record.idx}: {error}. "
                    f"Raw block: {record.block.hex()}"
                ) from error
            flattened_blocks.append(flatten_block(record, block))
        return flattened_blocks


def sync_blocks(config: SyncConfig) -> SyncResult:
    """Bring the target store up to the source's last verified block.

    Args:
        config: Validated store locations and window size.

    Returns:
        Summary of the run.

    Raises:
        BlockSyncConnectionError: If either store cannot be opened.
        BlockSyncDecodeError: If a source block cannot be decoded.
        BlockSyncStoreError: If a store read or write fails.
    """
    with open_source_store(config.source_path) as source_connection:
        with open_target_store(config.target_path) as target_connection:
            runner = BlockSyncRunner(
                reader=SourceStoreReader(source_connection),
                writer=TargetStoreWriter(target_connection),
                window_size=config.window_size,
            )
            return runner.run()
