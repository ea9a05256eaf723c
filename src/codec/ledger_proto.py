"""Protobuf schema for encoded ledger blocks.

This module builds the ledger ``Block`` message descriptors at import
time and exposes the generated message classes. Building descriptors in
code keeps the wire schema reviewable next to the decoder without a
protoc build step.
"""

from __future__ import annotations

from typing import Any

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory

from core.constants import LEDGER_PROTO_FILE_NAME, LEDGER_PROTO_PACKAGE

_FIELD = descriptor_pb2.FieldDescriptorProto

# name, number, scalar type or message name, oneof index
_MESSAGES: dict[str, list[tuple[Any, ...]]] = {
    "Hash": [("hash", 1, _FIELD.TYPE_BYTES, None)],
    "TimeStamp": [("timestamp_nanos", 1, _FIELD.TYPE_UINT64, None)],
    "Memo": [("memo", 1, _FIELD.TYPE_UINT64, None)],
    "BlockIndex": [("height", 1, _FIELD.TYPE_UINT64, None)],
    "Tokens": [("e8s", 1, _FIELD.TYPE_UINT64, None)],
    "AccountIdentifier": [("hash", 1, _FIELD.TYPE_BYTES, None)],
    "Burn": [
        ("from", 1, "AccountIdentifier", None),
        ("amount", 3, "Tokens", None),
    ],
    "Mint": [
        ("to", 2, "AccountIdentifier", None),
        ("amount", 3, "Tokens", None),
    ],
    "Send": [
        ("from", 1, "AccountIdentifier", None),
        ("to", 2, "AccountIdentifier", None),
        ("amount", 3, "Tokens", None),
        ("max_fee", 4, "Tokens", None),
    ],
    "Transaction": [
        ("burn", 1, "Burn", 0),
        ("mint", 2, "Mint", 0),
        ("send", 3, "Send", 0),
        ("memo", 4, "Memo", None),
        ("created_at", 5, "BlockIndex", None),
        ("created_at_time", 6, "TimeStamp", None),
    ],
    "Block": [
        ("parent_hash", 1, "Hash", None),
        ("timestamp", 2, "TimeStamp", None),
        ("transaction", 3, "Transaction", None),
    ],
}

_ONEOFS = {"Transaction": ("transfer",)}


def build_file_descriptor() -> descriptor_pb2.FileDescriptorProto:
    """Build the proto3 file descriptor for ledger blocks."""
    file_proto = descriptor_pb2.FileDescriptorProto(
        name=LEDGER_PROTO_FILE_NAME,
        package=LEDGER_PROTO_PACKAGE,
        syntax="proto3",
    )
    for message_name, fields in _MESSAGES.items():
        message_proto = file_proto.message_type.add(name=message_name)
        for oneof_name in _ONEOFS.get(message_name, ()):
            message_proto.oneof_decl.add(name=oneof_name)
        for field_name, number, field_type, oneof_index in fields:
            field_proto = message_proto.field.add(
                name=field_name,
                number=number,
                label=_FIELD.LABEL_OPTIONAL,
            )
            if isinstance(field_type, str):
                field_proto.type = _FIELD.TYPE_MESSAGE
                field_proto.type_name = f".{LEDGER_PROTO_PACKAGE}.{field_type}"
            else:
                field_proto.type = field_type
            if oneof_index is not None:
                field_proto.oneof_index = oneof_index
    return file_proto


def _load_message_classes() -> dict[str, Any]:
    pool = descriptor_pool.DescriptorPool()
    pool.AddSerializedFile(build_file_descriptor().SerializeToString())
    return {
        message_name: message_factory.GetMessageClass(
            pool.FindMessageTypeByName(f"{LEDGER_PROTO_PACKAGE}.{message_name}")
        )
        for message_name in _MESSAGES
    }


MESSAGE_CLASSES = _load_message_classes()
BlockMessage = MESSAGE_CLASSES["Block"]
