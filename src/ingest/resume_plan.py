"""Resume range computation.

This module decides which block indices still need migration and
splits them into fixed-size windows processed in ascending order.
"""

from __future__ import annotations

from core.config import validate_window_size
from core.constants import DEFAULT_WINDOW_SIZE
from core.types import SyncPlan, SyncStatus, SyncWindow


def plan_sync(
    target_last_idx: int | None,
    source_last_idx: int | None,
    window_size: int = DEFAULT_WINDOW_SIZE,
) -> SyncPlan:
    """Compute the windows needed to bring the target up to the source.

    Args:
        target_last_idx: Highest verified index in the target, None if empty.
        source_last_idx: Highest verified index in the source, None if empty.
        window_size: Indices per window.

    Returns:
        Sync plan; windows are empty when there is nothing to copy.

    Raises:
        BlockSyncConfigError: If window size is not positive.
    """
    validate_window_size(window_size)
    next_start = 0 if target_last_idx is None else target_last_idx + 1
    if source_last_idx is None:
        return SyncPlan(
            status=SyncStatus.SOURCE_EMPTY,
            next_start=next_start,
            last_source_idx=None,
            windows=(),
        )
    if source_last_idx < next_start:
        return SyncPlan(
            status=SyncStatus.FULLY_SYNCED,
            next_start=next_start,
            last_source_idx=source_last_idx,
            windows=(),
        )
    return SyncPlan(
        status=SyncStatus.SYNCED,
        next_start=next_start,
        last_source_idx=source_last_idx,
        windows=split_windows(next_start, source_last_idx, window_size),
    )


def split_windows(first_idx: int, last_idx: int, window_size: int) -> tuple[SyncWindow, ...]:
    """Split inclusive ``[first_idx, last_idx]`` into half-open windows."""
    stop = last_idx + 1
    return tuple(
        SyncWindow(start=start, end=min(start + window_size, stop))
        for start in range(first_idx, stop, window_size)
    )
