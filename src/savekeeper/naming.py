from __future__ import annotations

import re
from datetime import datetime
from typing import Optional

SAVE_PREFIX = "save_"
TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"

# The timestamp lives at name[5:20], right after the prefix, whatever the extension.
TIMESTAMP_OFFSET = len(SAVE_PREFIX)
TIMESTAMP_WIDTH = 15
MIN_NAME_LENGTH = TIMESTAMP_OFFSET + TIMESTAMP_WIDTH

_WINDOW_RE = re.compile(r"[0-9]{8}_[0-9]{6}")


def format_timestamp(timestamp: datetime) -> str:
    # strftime does not pad years below 1000 on every platform
    return f"{timestamp.year:04d}" + timestamp.strftime("%m%d_%H%M%S")


def format_save_name(timestamp: datetime, extension: str) -> str:
    """Return ``save_YYYYMMDD_HHMMSS<extension>`` for the given time.

    Fixed width and zero padded, so lexical and chronological order agree.
    """
    return f"{SAVE_PREFIX}{format_timestamp(timestamp)}{extension}"


def parse_save_timestamp(name: str) -> Optional[datetime]:
    """Parse the timestamp embedded in a save file name.

    Returns None for names that cannot be save files: shorter than 20
    characters, or whose 15-character window at offset 5 is not an exact
    ``YYYYMMDD_HHMMSS`` time. Never raises.
    """
    if len(name) < MIN_NAME_LENGTH:
        return None
    window = name[TIMESTAMP_OFFSET:MIN_NAME_LENGTH]
    if not _WINDOW_RE.fullmatch(window):
        return None
    try:
        return datetime.strptime(window, TIMESTAMP_FORMAT)
    except ValueError:
        # e.g. month 13 or Feb 30
        return None
