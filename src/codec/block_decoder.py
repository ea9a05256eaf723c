"""Encoded block decoding.

This module turns raw protobuf block payloads into typed ``Block``
values. Decoding is all-or-nothing: malformed input raises instead of
producing a partially populated block.
"""

from __future__ import annotations

import zlib
from typing import Any

from google.protobuf.message import DecodeError

from codec.ledger_proto import BlockMessage
from core.constants import (
    ACCOUNT_CHECKSUM_LENGTH,
    ACCOUNT_HASH_LENGTH,
    ACCOUNT_IDENTIFIER_LENGTH,
    BLOCK_HASH_LENGTH,
)
from core.errors import BlockSyncDecodeError
from core.types import Block, Burn, EncodedBlock, Mint, Operation, Transaction, Transfer


def decode_block(encoded: EncodedBlock) -> Block:
    """Decode one encoded block payload.

    Args:
        encoded: Raw protobuf bytes of a ledger block.

    Returns:
        Decoded block.

    Raises:
        BlockSyncDecodeError: If bytes are not a well-formed block.
    """
    try:
        message = BlockMessage.FromString(bytes(encoded))
    except DecodeError as error:
        raise BlockSyncDecodeError(f"Malformed block payload: {error}") from error
    if not message.HasField("timestamp"):
        raise BlockSyncDecodeError("Malformed block payload: timestamp missing")
    if not message.HasField("transaction"):
        raise BlockSyncDecodeError("Malformed block payload: transaction missing")
    return Block(
        parent_hash=_decode_parent_hash(message),
        transaction=_decode_transaction(message.transaction),
        timestamp=message.timestamp.timestamp_nanos,
    )


def _decode_parent_hash(message: Any) -> bytes | None:
    if not message.HasField("parent_hash"):
        return None
    parent_hash = bytes(message.parent_hash.hash)
    if len(parent_hash) != BLOCK_HASH_LENGTH:
        raise BlockSyncDecodeError(
            f"Malformed block payload: parent hash has {len(parent_hash)} bytes, "
            f"expected {BLOCK_HASH_LENGTH}"
        )
    return parent_hash


def _decode_transaction(message: Any) -> Transaction:
    memo = message.memo.memo if message.HasField("memo") else 0
    created_at_time = (
        message.created_at_time.timestamp_nanos
        if message.HasField("created_at_time")
        else None
    )
    return Transaction(
        operation=_decode_operation(message),
        memo=memo,
        created_at_time=created_at_time,
    )


def _decode_operation(message: Any) -> Operation:
    kind = message.WhichOneof("transfer")
    if kind == "burn":
        return Burn(
            from_account=_decode_account(message.burn, "from"),
            amount=_decode_tokens(message.burn, "amount"),
        )
    if kind == "mint":
        return Mint(
            to_account=_decode_account(message.mint, "to"),
            amount=_decode_tokens(message.mint, "amount"),
        )
    if kind == "send":
        return Transfer(
            from_account=_decode_account(message.send, "from"),
            to_account=_decode_account(message.send, "to"),
            amount=_decode_tokens(message.send, "amount"),
            fee=_decode_tokens(message.send, "max_fee"),
        )
    raise BlockSyncDecodeError("Malformed block payload: transaction has no operation")


def _decode_tokens(message: Any, field_name: str) -> int:
    if not message.HasField(field_name):
        raise BlockSyncDecodeError(f"Malformed block payload: {field_name} missing")
    return getattr(message, field_name).e8s


def _decode_account(message: Any, field_name: str) -> bytes:
    """Decode an account identifier, normalizing to checksum + hash form.

    Identifiers arrive either as the bare 28-byte hash or as 32 bytes with
    a big-endian CRC32 of the hash in front, which must match.
    """
    if not message.HasField(field_name):
        raise BlockSyncDecodeError(f"Malformed block payload: {field_name} account missing")
    account = bytes(getattr(message, field_name).hash)
    if len(account) == ACCOUNT_HASH_LENGTH:
        return account_checksum(account) + account
    if len(account) != ACCOUNT_IDENTIFIER_LENGTH:
        raise BlockSyncDecodeError(
            f"Malformed block payload: {field_name} account has {len(account)} bytes, "
            f"expected {ACCOUNT_HASH_LENGTH} or {ACCOUNT_IDENTIFIER_LENGTH}"
        )
    checksum, account_hash = account[:ACCOUNT_CHECKSUM_LENGTH], account[ACCOUNT_CHECKSUM_LENGTH:]
    if checksum != account_checksum(account_hash):
        raise BlockSyncDecodeError(
            f"Malformed block payload: {field_name} account checksum mismatch"
        )
    return account


def account_checksum(account_hash: bytes) -> bytes:
    """Return the 4-byte big-endian CRC32 of an account hash."""
    return zlib.crc32(account_hash).to_bytes(ACCOUNT_CHECKSUM_LENGTH, "big")
