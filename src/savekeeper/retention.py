from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional, Tuple

from .errors import SaveConfigError
from .scanner import SaveFile


def _order_key(save: SaveFile) -> Tuple[datetime, str]:
    # Same-second timestamps fall back to the file name so the choice never
    # depends on directory listing order.
    return (save.timestamp, save.name)


def oldest(files: Iterable[SaveFile]) -> Optional[SaveFile]:
    return min(files, key=_order_key, default=None)


def newest(files: Iterable[SaveFile]) -> Optional[SaveFile]:
    return max(files, key=_order_key, default=None)


def sort_saves(files: Iterable[SaveFile]) -> list[SaveFile]:
    """Oldest first."""
    return sorted(files, key=_order_key)


def should_evict(count: int, limit: int) -> bool:
    """True when a directory holding count saves must drop one to stay under limit.

    A limit of 0 means unlimited.
    """
    return limit > 0 and count >= limit


@dataclass(frozen=True)
class RetentionPolicy:
    """Counting retention: keep at most max_files saves (None = unlimited)."""

    max_files: Optional[int] = None

    def __post_init__(self) -> None:
        if self.max_files is None:
            return
        if isinstance(self.max_files, bool) or not isinstance(self.max_files, int):
            raise SaveConfigError(f"max_files must be an integer, got {self.max_files!r}")
        if self.max_files < 1:
            raise SaveConfigError(f"max_files must be >= 1, got {self.max_files}")

    @property
    def enabled(self) -> bool:
        return self.max_files is not None

    @property
    def limit(self) -> int:
        return self.max_files or 0

    def should_evict(self, count: int) -> bool:
        return should_evict(count, self.limit)

    def next_eviction(self, files: Iterable[SaveFile]) -> Optional[SaveFile]:
        """Return the save to delete next, or None if the limit is respected."""
        files = list(files)
        if not self.should_evict(len(files)):
            return None
        return oldest(files)
