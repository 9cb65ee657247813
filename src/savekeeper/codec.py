from __future__ import annotations

import json
import math
import pickle
from abc import ABC, abstractmethod
from typing import Any, BinaryIO, Optional

from pydantic import TypeAdapter, ValidationError

from .errors import SaveDecodeError, SaveEncodeError

_ANY = TypeAdapter(Any)


def _reject_lossy(data: Any) -> None:
    """Raise if data holds something JSON would silently change.

    Walks the python-mode dump, where floats and bytes are still intact.
    """
    if isinstance(data, float):
        if not math.isfinite(data):
            raise ValueError(f"Out of range float values are not JSON compliant: {data!r}")
    elif isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError("bytes have no exact JSON form; use PickleCodec or encode them first")
    elif isinstance(data, dict):
        for key, item in data.items():
            _reject_lossy(key)
            _reject_lossy(item)
    elif isinstance(data, (list, tuple, set, frozenset)):
        for item in data:
            _reject_lossy(item)


class Codec(ABC):
    """Encode/decode strategy for stored values.

    Subclasses pick their own file extension; the manager never inspects the
    codec type to name files.
    """

    extension: str = ".dat"

    @abstractmethod
    def encode(self, stream: BinaryIO, value: Any) -> None:
        """Serialize value into a binary stream. Raises SaveEncodeError."""

    @abstractmethod
    def decode(self, stream: BinaryIO) -> Any:
        """Deserialize a value from a binary stream. Raises SaveDecodeError."""

    def decode_as(self, stream: BinaryIO, target: Optional[Any] = None) -> Any:
        """Decode and, when target is given, validate/coerce into that shape.

        target is anything pydantic's TypeAdapter accepts: ``list[str]``,
        ``tuple[str, str, str]``, a dataclass, a BaseModel subclass, etc.
        """
        value = self.decode(stream)
        if target is None:
            return value
        try:
            return TypeAdapter(target).validate_python(value)
        except ValidationError as e:
            raise SaveDecodeError(f"Decoded value does not match {target!r}: {e}") from e

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(extension={self.extension!r})"


class PickleCodec(Codec):
    """Binary, Python-native serialization."""

    extension = ".bin"

    def __init__(self, protocol: int = pickle.HIGHEST_PROTOCOL) -> None:
        self.protocol = protocol

    def encode(self, stream: BinaryIO, value: Any) -> None:
        try:
            pickle.dump(value, stream, protocol=self.protocol)
        except (pickle.PicklingError, TypeError, AttributeError) as e:
            raise SaveEncodeError(f"Cannot pickle value of type {type(value).__name__}: {e}") from e

    def decode(self, stream: BinaryIO) -> Any:
        try:
            return pickle.load(stream)
        except (pickle.UnpicklingError, EOFError, AttributeError, ImportError, IndexError, ValueError) as e:
            raise SaveDecodeError(f"Invalid pickle data: {e}") from e


class JsonCodec(Codec):
    """Text JSON serialization.

    Values are first converted with pydantic, so dataclasses, BaseModels,
    datetimes, sets and tuples are accepted; tuples and sets come back as
    lists unless a target is given on load. Values JSON cannot carry
    exactly (bytes, NaN, infinities) raise SaveEncodeError instead of being
    written as something else.
    """

    extension = ".json"

    def __init__(self, indent: Optional[int] = 2) -> None:
        self.indent = indent

    def encode(self, stream: BinaryIO, value: Any) -> None:
        try:
            _reject_lossy(_ANY.dump_python(value))
            data = _ANY.dump_python(value, mode="json")
            text = json.dumps(data, ensure_ascii=False, sort_keys=True, indent=self.indent, allow_nan=False)
        except (TypeError, ValueError) as e:
            raise SaveEncodeError(f"Cannot encode value of type {type(value).__name__} as JSON: {e}") from e
        stream.write(text.encode("utf-8"))
        stream.write(b"\n")

    def decode(self, stream: BinaryIO) -> Any:
        raw = stream.read()
        try:
            return json.loads(raw.decode("utf-8"))
        except UnicodeDecodeError as e:
            raise SaveDecodeError(f"Save file is not UTF-8 text: {e}") from e
        except json.JSONDecodeError as e:
            raise SaveDecodeError(f"Invalid JSON: {e}") from e
