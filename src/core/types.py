"""Shared typed models.

This module defines immutable data models used by the codec, transform,
store, and ingest layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

EncodedBlock = bytes


@dataclass(frozen=True)
class Burn:
    """Tokens removed from circulation.

    Attributes:
        from_account: 32-byte account identifier tokens are burned from.
        amount: Burned amount in e8s.
    """

    from_account: bytes
    amount: int


@dataclass(frozen=True)
class Mint:
    """Tokens created into an account.

    Attributes:
        to_account: 32-byte account identifier receiving tokens.
        amount: Minted amount in e8s.
    """

    to_account: bytes
    amount: int


@dataclass(frozen=True)
class Transfer:
    """Tokens moved between two accounts.

    Attributes:
        from_account: Sender account identifier.
        to_account: Receiver account identifier.
        amount: Transferred amount in e8s.
        fee: Fee charged to the sender in e8s.
    """

    from_account: bytes
    to_account: bytes
    amount: int
    fee: int


Operation = Union[Burn, Mint, Transfer]


@dataclass(frozen=True)
class Transaction:
    """Decoded ledger transaction.

    Attributes:
        operation: Burn, Mint, or Transfer payload.
        memo: Caller-supplied memo number.
        created_at_time: Caller-supplied creation time in nanoseconds, if any.
    """

    operation: Operation
    memo: int
    created_at_time: int | None


@dataclass(frozen=True)
class Block:
    """Decoded ledger block.

    Attributes:
        parent_hash: Hash of the previous block, absent for the first block.
        transaction: Transaction recorded by this block.
        timestamp: Block creation time in nanoseconds since the Unix epoch.
    """

    parent_hash: bytes | None
    transaction: Transaction
    timestamp: int


@dataclass(frozen=True)
class SourceRecord:
    """Block row as stored in the source log."""

    idx: int
    hash: bytes
    block: EncodedBlock
    verified: bool


@dataclass(frozen=True)
class OperationFields:
    """Operation columns shared by every operation kind."""

    from_account: bytes | None
    to_account: bytes | None
    amount: int
    fee: int | None


@dataclass(frozen=True)
class TargetRow:
    """Flattened block row written to the target store.

    Timestamps are fractional seconds since the Unix epoch.
    """

    idx: int
    hash: bytes
    parent_hash: bytes | None
    memo: int
    created_at_time: float | None
    from_account: bytes | None
    to_account: bytes | None
    amount: int
    fee: int | None
    timestamp: float | None
    verified: bool


@dataclass(frozen=True)
class FlattenedBlock:
    """Target row paired with the raw payload it was decoded from."""

    row: TargetRow
    raw_block: EncodedBlock


@dataclass(frozen=True)
class SyncWindow:
    """Half-open block index range ``[start, end)``."""

    start: int
    end: int

    @property
    def size(self) -> int:
        return self.end - self.start


class SyncStatus(str, Enum):
    """Outcome of one sync invocation."""

    SOURCE_EMPTY = "source_empty"
    FULLY_SYNCED = "fully_synced"
    SYNCED = "synced"


@dataclass(frozen=True)
class SyncPlan:
    """Index windows still needing migration.

    Attributes:
        status: Planned outcome before any window is copied.
        next_start: First index missing from the target.
        last_source_idx: Highest verified source index, if any.
        windows: Ascending, non-overlapping windows covering the range.
    """

    status: SyncStatus
    next_start: int
    last_source_idx: int | None
    windows: tuple[SyncWindow, ...]


@dataclass(frozen=True)
class SyncResult:
    """Summary of a completed sync run."""

    status: SyncStatus
    next_start: int
    last_source_idx: int | None
    windows_written: int
    rows_written: int
