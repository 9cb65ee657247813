from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from platformdirs import PlatformDirs

APP_NAME = "savekeeper"

logger = logging.getLogger(__name__)


def default_save_dir(app_name: str = APP_NAME, app_author: Optional[str] = None) -> Path:
    """Return the per-user directory for save files.

    Linux: ~/.local/share/<app_name>/saves (or $XDG_DATA_HOME/<app_name>/saves)
    macOS: ~/Library/Application Support/<app_name>/saves
    Windows: %LOCALAPPDATA%\\[<app_author>\\]<app_name>\\saves
    """
    d = PlatformDirs(appname=app_name, appauthor=app_author or False)
    return Path(d.user_data_dir) / "saves"


def ensure_dir(path: Path) -> Path:
    """Create the directory (and parents) if it doesn't exist. Log and raise on failure."""
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        logger.error("Failed to create directory '%s': %s", path, exc)
        raise
    return path
