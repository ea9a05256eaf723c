"""Block sync exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class BlockSyncError(Exception):
    """Base exception for all block sync failures."""


class BlockSyncConfigError(BlockSyncError):
    """Raised for invalid runtime configuration."""


class BlockSyncConnectionError(BlockSyncError):
    """Raised when a source or target store cannot be opened."""


class BlockSyncDecodeError(BlockSyncError):
    """Raised for malformed encoded block payloads."""


class BlockSyncStoreError(BlockSyncError):
    """Raised for store query, schema, and constraint failures."""
