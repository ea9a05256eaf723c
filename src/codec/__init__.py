"""Ledger block codec.

This package decodes raw protobuf block payloads into typed blocks.
It owns the wire schema so other layers never touch encoded bytes.
"""
