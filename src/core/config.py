"""Runtime configuration model for block sync.

This module owns store path resolution and validation.
Other modules consume a typed config object instead of raw CLI values.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from core.constants import DEFAULT_WINDOW_SIZE
from core.errors import BlockSyncConfigError


@dataclass(frozen=True)
class SyncConfig:
    """Validated runtime configuration.

    Attributes:
        source_path: SQLite file holding the encoded block log.
        target_path: SQLite file receiving decoded block rows.
        window_size: Number of block indices copied per transaction.
    """

    source_path: Path
    target_path: Path
    window_size: int = DEFAULT_WINDOW_SIZE

    @classmethod
    def from_paths(
        cls,
        source_path: str | Path,
        target_path: str | Path,
        window_size: int = DEFAULT_WINDOW_SIZE,
    ) -> "SyncConfig":
        """Build config from raw store locations.

        Args:
            source_path: Source store location.
            target_path: Target store location.
            window_size: Indices per window.

        Returns:
            A validated config object.

        Raises:
            BlockSyncConfigError: If paths or window size are invalid.
        """
        source = Path(source_path).expanduser().resolve()
        target = Path(target_path).expanduser().resolve()
        if not source.is_file():
            raise BlockSyncConfigError(
                f"Source store not found at {source}. "
                "Pass the path of an existing SQLite block store."
            )
        if not target.parent.is_dir():
            raise BlockSyncConfigError(
                f"Target directory {target.parent} does not exist. "
                "Create it before running the sync."
            )
        if source == target:
            raise BlockSyncConfigError(
                f"Source and target both point at {source}. Use two different store files."
            )
        return cls(
            source_path=source,
            target_path=target,
            window_size=validate_window_size(window_size),
        )


def validate_window_size(window_size: int) -> int:
    """Validate the number of indices per window.

    Args:
        window_size: Requested window size.

    Returns:
        The validated window size.

    Raises:
        BlockSyncConfigError: If window size is not a positive integer.
    """
    if isinstance(window_size, bool) or not isinstance(window_size, int) or window_size < 1:
        raise BlockSyncConfigError(
            f"Invalid window size: expected positive integer, got {window_size!r}."
        )
    return window_size
