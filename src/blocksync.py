"""Public SDK surface for block sync.

This module provides a stable import path for library users.
It re-exports the sync entry point, config, and typed models.
"""

from __future__ import annotations

from codec.block_decoder import decode_block
from core.config import SyncConfig
from core.errors import (
    BlockSyncConfigError,
    BlockSyncConnectionError,
    BlockSyncDecodeError,
    BlockSyncError,
    BlockSyncStoreError,
)
from core.types import Block, Burn, Mint, SyncResult, SyncStatus, TargetRow, Transaction, Transfer
from ingest.pipeline import BlockSyncRunner, sync_blocks
from ingest.resume_plan import plan_sync
from transforms.field_extraction import build_target_row, extract_operation_fields

__all__ = [
    "Block",
    "BlockSyncConfigError",
    "BlockSyncConnectionError",
    "BlockSyncDecodeError",
    "BlockSyncError",
    "BlockSyncRunner",
    "BlockSyncStoreError",
    "Burn",
    "Mint",
    "SyncConfig",
    "SyncResult",
    "SyncStatus",
    "TargetRow",
    "Transaction",
    "Transfer",
    "build_target_row",
    "decode_block",
    "extract_operation_fields",
    "plan_sync",
    "sync_blocks",
]
