from __future__ import annotations

import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, List, Optional, Union

from .codec import Codec, JsonCodec
from .errors import (
    InvalidSaveNameError,
    NoSaveFilesError,
    NoValidSaveFilesError,
    SaveNotFoundError,
)
from .naming import format_save_name
from .paths import ensure_dir
from .retention import RetentionPolicy, newest, oldest, sort_saves
from .scanner import SaveFile, scan_directory

if TYPE_CHECKING:  # pragma: no cover
    from .config import SaveConfig

logger = logging.getLogger(__name__)

TEMP_PREFIX = ".save-"
TEMP_SUFFIX = ".tmp"


class SaveManager:
    """Timestamped save files in one directory, with optional count-based retention.

    The directory is the only state: every operation rescans it, nothing is
    cached between calls. One manager per directory and one caller at a time;
    there is no locking, so two managers on the same directory can race
    between scan and delete.

    Usage:
        mgr = SaveManager("saves", PickleCodec(), max_files=3)
        mgr.save({"floor": 2})
        state = mgr.load_latest()
    """

    def __init__(
        self,
        path: Union[str, os.PathLike],
        codec: Optional[Codec] = None,
        max_files: Optional[int] = None,
        *,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.policy = RetentionPolicy(max_files)
        self.codec = codec or JsonCodec()
        self.clock = clock
        self.directory = ensure_dir(Path(path).expanduser().resolve())
        logger.debug(
            "SaveManager ready at %s (codec=%s, max_files=%s)", self.directory, self.codec, max_files
        )

    @classmethod
    def from_config(cls, config: "SaveConfig", **kwargs: Any) -> "SaveManager":
        return cls(config.directory, config.build_codec(), config.max_files, **kwargs)

    @property
    def max_files(self) -> Optional[int]:
        return self.policy.max_files

    # Public API

    def save(self, value: Any) -> Path:
        """Write value to a new save file named after the current time.

        With a retention limit, old saves are evicted first so the directory
        never holds more than max_files saves, even for a moment. The flip
        side: eviction happens before encoding, so if the encode fails the
        evicted saves are already gone (with max_files=1 the directory is
        left with no save at all). A save in the same second as an existing
        one replaces it.
        """
        if self.policy.enabled:
            self.delete_old()
        name = format_save_name(self.clock(), self.codec.extension)
        path = self.directory / name
        self._atomic_write(path, value)
        logger.debug("Saved %s", path)
        return path

    def load(self, name: str, target: Optional[Any] = None) -> Any:
        """Decode the named save file. See Codec.decode_as for target."""
        path = self._resolve(name)
        try:
            with path.open("rb") as f:
                return self.codec.decode_as(f, target)
        except FileNotFoundError as e:
            raise SaveNotFoundError(f"Save file not found: {path}") from e

    def load_latest(self, target: Optional[Any] = None) -> Any:
        scan = scan_directory(self.directory)
        if scan.is_empty:
            raise NoSaveFilesError(f"No save files found in {self.directory}")
        latest = newest(scan)
        if latest is None:
            raise NoValidSaveFilesError(f"No valid save files found in {self.directory}")
        return self.load(latest.name, target)

    def delete_file(self, name: str) -> None:
        """Remove a file from the save directory. Any name is accepted, not only saves."""
        path = self._resolve(name)
        try:
            path.stat()
        except FileNotFoundError as e:
            raise SaveNotFoundError(f"File not found: {path}") from e
        path.unlink()
        logger.info("Deleted %s", path)

    def delete_old(self) -> List[str]:
        """Evict old saves and return the deleted names.

        With a limit, deletes oldest saves until fewer than max_files remain
        (leaving room for the next save). Without one, deletes the single
        oldest save if there is any.
        """
        removed: List[str] = []
        if not self.policy.enabled:
            target = oldest(scan_directory(self.directory))
            if target is not None:
                self._evict(target)
                removed.append(target.name)
            return removed

        while True:
            # Always rescan; a count from before the last delete is stale.
            victim = self.policy.next_eviction(scan_directory(self.directory))
            if victim is None:
                return removed
            self._evict(victim)
            removed.append(victim.name)

    def list_saves(self) -> List[SaveFile]:
        """Valid saves, oldest first."""
        return sort_saves(scan_directory(self.directory))

    def latest(self) -> Optional[SaveFile]:
        return newest(scan_directory(self.directory))

    # Internal utilities

    def _evict(self, save: SaveFile) -> None:
        logger.info("Removing old save %s (limit=%s)", save.name, self.max_files)
        save.path.unlink()

    def _resolve(self, name: str) -> Path:
        separators = {"/", os.sep, os.altsep} - {None}
        if not name or name in (".", "..") or any(sep in name for sep in separators):
            raise InvalidSaveNameError(f"Not a plain file name: {name!r}")
        return self.directory / name

    def _atomic_write(self, path: Path, value: Any) -> None:
        """Encode value into a temp file next to path, then rename it into place.

        The temp name starts with a dot, so it never parses as a save file
        and a failed encode leaves nothing a scan would pick up. mkstemp
        creates the file with mode 0600 and the rename keeps it, so saves are
        readable by the owner only, whatever the umask.
        """
        fd, tmp_name = tempfile.mkstemp(prefix=TEMP_PREFIX, suffix=TEMP_SUFFIX, dir=self.directory)
        try:
            with os.fdopen(fd, "wb") as f:
                self.codec.encode(f, value)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
        finally:
            if os.path.exists(tmp_name):
                try:
                    os.remove(tmp_name)
                except OSError:
                    logger.debug("Could not remove temp file %s", tmp_name, exc_info=True)
