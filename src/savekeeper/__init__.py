"""Timestamped save files with count-based retention.

This package provides:
- Codecs (pickle, JSON) that name their own file extension
- A filename scheme embedding the save time: save_YYYYMMDD_HHMMSS<ext>
- A directory scanner that ignores anything that is not a save file
- A SaveManager that saves, loads the latest or a named save, and evicts
  the oldest saves when a retention limit is reached
"""

from importlib.metadata import PackageNotFoundError, version

from .codec import Codec, JsonCodec, PickleCodec
from .config import CODECS, SaveConfig, get_codec
from .errors import (
    CodecError,
    InvalidSaveNameError,
    NoSaveFilesError,
    NoValidSaveFilesError,
    SaveConfigError,
    SaveDecodeError,
    SaveEncodeError,
    SaveError,
    SaveNotFoundError,
)
from .logging_config import configure_logging, install_null_handler
from .manager import SaveManager
from .naming import format_save_name, parse_save_timestamp
from .retention import RetentionPolicy, newest, oldest, should_evict
from .scanner import DirectoryScan, SaveFile, scan_directory

try:
    __version__ = version("savekeeper")
except PackageNotFoundError:  # pragma: no cover - during tests without packaging
    __version__ = "0.0.0"

install_null_handler()

__all__ = [
    "__version__",
    "Codec",
    "JsonCodec",
    "PickleCodec",
    "CODECS",
    "SaveConfig",
    "get_codec",
    "SaveError",
    "SaveConfigError",
    "SaveNotFoundError",
    "InvalidSaveNameError",
    "NoSaveFilesError",
    "NoValidSaveFilesError",
    "CodecError",
    "SaveEncodeError",
    "SaveDecodeError",
    "SaveManager",
    "configure_logging",
    "format_save_name",
    "parse_save_timestamp",
    "RetentionPolicy",
    "oldest",
    "newest",
    "should_evict",
    "DirectoryScan",
    "SaveFile",
    "scan_directory",
]
