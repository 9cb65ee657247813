import io
import threading
from dataclasses import dataclass
from typing import Tuple

import pytest

from savekeeper import Codec, JsonCodec, PickleCodec, SaveDecodeError, SaveEncodeError


@dataclass
class Position:
    x: int
    y: int


class RawCodec(Codec):
    """Codec without its own extension."""

    def encode(self, stream, value):
        stream.write(bytes(value))

    def decode(self, stream):
        return stream.read()


def test_extensions_come_from_the_codec():
    assert PickleCodec().extension == ".bin"
    assert JsonCodec().extension == ".json"
    assert RawCodec().extension == ".dat"


@pytest.mark.parametrize("codec", [PickleCodec(), JsonCodec()])
def test_roundtrip_common_values(codec):
    value = {"floor": 3, "party": ["ann", "bo"], "gold": 12.5, "boss": None, "alive": True}
    buf = io.BytesIO()
    codec.encode(buf, value)
    buf.seek(0)
    assert codec.decode(buf) == value


def test_pickle_keeps_python_types():
    codec = PickleCodec()
    value = (Position(1, 2), {"a", "b"})
    buf = io.BytesIO()
    codec.encode(buf, value)
    buf.seek(0)
    assert codec.decode(buf) == value


def test_json_encodes_dataclasses_and_decodes_into_target():
    codec = JsonCodec()
    buf = io.BytesIO()
    codec.encode(buf, Position(4, 5))
    buf.seek(0)
    assert codec.decode_as(buf, Position) == Position(4, 5)


def test_decode_as_target_shape_mismatch():
    codec = JsonCodec()
    buf = io.BytesIO()
    codec.encode(buf, ["a", "b"])
    buf.seek(0)
    with pytest.raises(SaveDecodeError):
        codec.decode_as(buf, Tuple[str, str, str])


def test_pickle_encode_failure():
    with pytest.raises(SaveEncodeError):
        PickleCodec().encode(io.BytesIO(), threading.Lock())


def test_json_encode_failure():
    with pytest.raises(SaveEncodeError):
        JsonCodec().encode(io.BytesIO(), object())


@pytest.mark.parametrize("codec,payload", [
    (PickleCodec(), b"\x00\x01garbage"),
    (PickleCodec(), b""),
    (JsonCodec(), b"{ this is not valid json "),
    (JsonCodec(), b"\xff\xfe\x00"),
])
def test_decode_garbage(codec, payload):
    with pytest.raises(SaveDecodeError):
        codec.decode(io.BytesIO(payload))


@pytest.mark.parametrize("value", [
    float("inf"),
    float("nan"),
    [1.0, float("-inf")],
    {"ratio": float("nan")},
    b"raw",
    {"blob": bytearray(b"xy")},
    {"pos": [Position(1, 2), b"x"]},
])
def test_json_refuses_values_it_cannot_store_exactly(value):
    buf = io.BytesIO()
    with pytest.raises(SaveEncodeError):
        JsonCodec().encode(buf, value)
    assert buf.getvalue() == b""


def test_json_keeps_finite_floats():
    buf = io.BytesIO()
    JsonCodec().encode(buf, {"ratio": 0.25, "big": 1e300, "neg": -3.5})
    buf.seek(0)
    assert JsonCodec().decode(buf) == {"ratio": 0.25, "big": 1e300, "neg": -3.5}
