from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Type, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .codec import Codec, JsonCodec, PickleCodec
from .errors import SaveConfigError
from .paths import default_save_dir

logger = logging.getLogger(__name__)

CODECS: Dict[str, Type[Codec]] = {
    "json": JsonCodec,
    "pickle": PickleCodec,
}


def get_codec(name: str) -> Codec:
    """Instantiate a registered codec by name (case-insensitive)."""
    try:
        return CODECS[name.strip().lower()]()
    except KeyError:
        raise SaveConfigError(f"Unknown codec {name!r}; expected one of {sorted(CODECS)}") from None


class SaveConfig(BaseModel):
    """Settings for building a SaveManager.

    Example YAML:

        directory: ~/games/mygame/saves
        codec: pickle
        max_files: 5
    """

    directory: Path = Field(default_factory=default_save_dir, description="Save directory")
    codec: str = Field("json", description="Registered codec name")
    max_files: Optional[int] = Field(default=None, ge=1, description="Retention limit; None keeps everything")

    @field_validator("directory")
    @classmethod
    def _expand_directory(cls, v: Path) -> Path:
        return v.expanduser()

    @field_validator("codec")
    @classmethod
    def _known_codec(cls, v: str) -> str:
        name = v.strip().lower()
        if name not in CODECS:
            raise ValueError(f"unknown codec {v!r}; expected one of {sorted(CODECS)}")
        return name

    def build_codec(self) -> Codec:
        return get_codec(self.codec)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "SaveConfig":
        try:
            return cls.model_validate(dict(data))
        except ValidationError as e:
            raise SaveConfigError(f"Invalid save config: {e}") from e

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "SaveConfig":
        """Load settings from a YAML file. Missing keys fall back to defaults."""
        path = Path(path)
        with path.open("r", encoding="utf-8") as f:
            try:
                raw = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise SaveConfigError(f"Invalid YAML in {path}: {e}") from e
        if not isinstance(raw, dict):
            raise SaveConfigError(f"Save config {path} must be a mapping, got {type(raw).__name__}")
        cfg = cls.from_mapping(raw)
        logger.debug("Loaded save config from %s: %s", path, cfg)
        return cfg
