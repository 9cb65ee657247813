from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Iterator, List

from .naming import parse_save_timestamp

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SaveFile:
    """A regular file in the managed directory whose name carries a save timestamp."""

    name: str
    path: Path
    timestamp: datetime


@dataclass
class DirectoryScan:
    """Result of listing a save directory once.

    entry_count counts every entry, including foreign files and
    subdirectories, so callers can tell an empty directory from one that
    simply holds no save files.
    """

    directory: Path
    entry_count: int = 0
    save_files: List[SaveFile] = field(default_factory=list)

    def __iter__(self) -> Iterator[SaveFile]:
        return iter(self.save_files)

    def __len__(self) -> int:
        return len(self.save_files)

    @property
    def is_empty(self) -> bool:
        return self.entry_count == 0


def scan_directory(directory: Path) -> DirectoryScan:
    """List save files in directory.

    Skips anything that is not a regular file (symlinks are not followed)
    and any name that does not parse as a save file. The order of
    ``save_files`` is whatever the OS returns. OSError from listing
    propagates.
    """
    result = DirectoryScan(directory=Path(directory))
    with os.scandir(directory) as entries:
        for entry in entries:
            result.entry_count += 1
            if not entry.is_file(follow_symlinks=False):
                logger.debug("Skipping non-regular entry %s", entry.name)
                continue
            timestamp = parse_save_timestamp(entry.name)
            if timestamp is None:
                logger.debug("Skipping non-save file %s", entry.name)
                continue
            result.save_files.append(SaveFile(name=entry.name, path=Path(entry.path), timestamp=timestamp))
    return result
