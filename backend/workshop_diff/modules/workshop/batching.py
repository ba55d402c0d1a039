from __future__ import annotations

from collections.abc import Sequence

MAX_BATCH_SIZE = 100  # GetPublishedFileDetails limit


def split_batches(ids: Sequence[str], size: int = MAX_BATCH_SIZE) -> list[list[str]]:
    """Split ids into consecutive batches of at most ``size``, keeping order and duplicates."""
    if not 1 <= size <= MAX_BATCH_SIZE:
        raise ValueError(f"Batch size must be between 1 and {MAX_BATCH_SIZE}, got {size}")
    return [list(ids[i : i + size]) for i in range(0, len(ids), size)]
