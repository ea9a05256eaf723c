"""Flatten decoded blocks into fixed target columns.

This module maps each operation kind onto the shared
(from, to, amount, fee) shape and converts nanosecond timestamps
into the fractional-second form the target schema stores.
"""

from __future__ import annotations

from core.constants import NANOS_PER_SECOND
from core.types import (
    Block,
    Burn,
    FlattenedBlock,
    Mint,
    Operation,
    OperationFields,
    SourceRecord,
    TargetRow,
    Transfer,
)


def extract_operation_fields(operation: Operation) -> OperationFields:
    """Map an operation onto its flattened column values.

    Args:
        operation: Burn, Mint, or Transfer payload.

    Returns:
        Flattened columns; fields the operation does not carry are None.

    Raises:
        TypeError: If the operation is not a known operation kind.
    """
    if isinstance(operation, Burn):
        return OperationFields(
            from_account=operation.from_account,
            to_account=None,
            amount=operation.amount,
            fee=None,
        )
    if isinstance(operation, Mint):
        return OperationFields(
            from_account=None,
            to_account=operation.to_account,
            amount=operation.amount,
            fee=None,
        )
    if isinstance(operation, Transfer):
        return OperationFields(
            from_account=operation.from_account,
            to_account=operation.to_account,
            amount=operation.amount,
            fee=operation.fee,
        )
    raise TypeError(f"Unsupported operation type: {type(operation).__name__}")


def nanos_to_seconds(nanos: int | None) -> float | None:
    """Convert nanoseconds since the epoch into fractional seconds."""
    if nanos is None:
        return None
    return nanos / NANOS_PER_SECOND


def build_target_row(record: SourceRecord, block: Block) -> TargetRow:
    """Build the target row for one decoded source record.

    Args:
        record: Source row the block was decoded from.
        block: Decoded block payload.

    Returns:
        Flattened target row.
    """
    transaction = block.transaction
    fields = extract_operation_fields(transaction.operation)
    return TargetRow(
        idx=record.idx,
        hash=record.hash,
        parent_hash=block.parent_hash,
        memo=transaction.memo,
        created_at_time=nanos_to_seconds(transaction.created_at_time),
        from_account=fields.from_account,
        to_account=fields.to_account,
        amount=fields.amount,
        fee=fields.fee,
        timestamp=nanos_to_seconds(block.timestamp),
        verified=record.verified,
    )


def flatten_block(record: SourceRecord, block: Block) -> FlattenedBlock:
    """Pair a target row with the raw payload it came from."""
    return FlattenedBlock(row=build_target_row(record, block), raw_block=record.block)
