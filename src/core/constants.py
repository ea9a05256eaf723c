"""Core constants used across block sync modules.

This module centralizes store names, sizes, and unit conversions.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

BLOCKS_TABLE_NAME = "blocks"
DEFAULT_WINDOW_SIZE = 1000
NANOS_PER_SECOND = 1_000_000_000
BLOCK_HASH_LENGTH = 32
ACCOUNT_HASH_LENGTH = 28
ACCOUNT_CHECKSUM_LENGTH = 4
ACCOUNT_IDENTIFIER_LENGTH = ACCOUNT_CHECKSUM_LENGTH + ACCOUNT_HASH_LENGTH
LEDGER_PROTO_PACKAGE = "ic_ledger.pb.v1"
LEDGER_PROTO_FILE_NAME = "ic_ledger/pb/v1/block.proto"
