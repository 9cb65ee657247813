class SaveError(Exception):
    """Base exception for save/load errors."""


class SaveConfigError(SaveError, ValueError):
    """Raised when a manager or config is given invalid settings (e.g., max_files < 1)."""


class SaveNotFoundError(SaveError, FileNotFoundError):
    """Raised when a named save file does not exist in the managed directory."""


class InvalidSaveNameError(SaveError, ValueError):
    """Raised when a file name would resolve outside the managed directory."""


class NoSaveFilesError(SaveError):
    """Raised when the save directory has no entries at all."""


class NoValidSaveFilesError(NoSaveFilesError):
    """Raised when the directory has entries but none of them is a save file."""


class CodecError(SaveError):
    """Base exception for serialization failures."""


class SaveEncodeError(CodecError):
    """Raised when a value cannot be encoded by the codec."""


class SaveDecodeError(CodecError):
    """Raised when a save file cannot be decoded (malformed, truncated or wrong shape)."""
