"""A small CBOR encoder and decoder with explicit, step-by-step control."""

from __future__ import annotations

import enum
from typing import Any, Callable, TypeVar

T = TypeVar("T")

_UINT_MAX = 2**64 - 1
_I64_MIN = -(2**63)
_BREAK = 0xFF


class CborError(ValueError):
    """Raised for malformed, truncated or unexpected CBOR data."""


class DataType(enum.Enum):
    """The kind of the next CBOR item in a decoder's input."""

    BOOL = "bool"
    NULL = "null"
    UNDEFINED = "undefined"
    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    U64 = "u64"
    I8 = "i8"
    I16 = "i16"
    I32 = "i32"
    I64 = "i64"
    INT = "int"
    F16 = "f16"
    F32 = "f32"
    F64 = "f64"
    SIMPLE = "simple"
    BYTES = "bytes"
    BYTES_INDEF = "bytes (indefinite)"
    STRING = "string"
    STRING_INDEF = "string (indefinite)"
    ARRAY = "array"
    ARRAY_INDEF = "array (indefinite)"
    MAP = "map"
    MAP_INDEF = "map (indefinite)"
    TAG = "tag"
    BREAK = "break"
    UNKNOWN = "unknown"


_UNSIGNED_TYPES = (DataType.U8, DataType.U16, DataType.U32, DataType.U64)
_SIGNED_TYPES = (DataType.I8, DataType.I16, DataType.I32, DataType.I64)
_FLOAT_TYPES = (DataType.F16, DataType.F32, DataType.F64)


def _width_type(info: int, types: tuple[DataType, ...]) -> DataType:
    if info <= 24:
        return types[0]
    if info <= 27:
        return types[info - 24]
    return DataType.UNKNOWN


class Encoder:
    """Builds a CBOR byte string item by item; every method returns the encoder."""

    def __init__(self) -> None:
        self._buffer = bytearray()

    def _head(self, major: int, argument: int) -> Encoder:
        if argument < 0 or argument > _UINT_MAX:
            raise CborError(f"argument {argument} does not fit in 64 bits")
        if argument < 24:
            self._buffer.append(major << 5 | argument)
            return self
        for info, size in ((24, 1), (25, 2), (26, 4), (27, 8)):
            if argument < 1 << (8 * size):
                self._buffer.append(major << 5 | info)
                self._buffer += argument.to_bytes(size, "big")
                break
        return self

    def uint(self, value: int) -> Encoder:
        return self._head(0, value)

    def int(self, value: int) -> Encoder:
        if value >= 0:
            return self._head(0, value)
        return self._head(1, -1 - value)

    def bytes(self, value: bytes) -> Encoder:
        data = bytes(value)
        self._head(2, len(data))
        self._buffer += data
        return self

    def text(self, value: str) -> Encoder:
        data = value.encode("utf-8")
        self._head(3, len(data))
        self._buffer += data
        return self

    def array(self, length: int) -> Encoder:
        return self._head(4, length)

    def map(self, length: int) -> Encoder:
        return self._head(5, length)

    def begin_array(self) -> Encoder:
        self._buffer.append(0x9F)
        return self

    def begin_map(self) -> Encoder:
        self._buffer.append(0xBF)
        return self

    def end(self) -> Encoder:
        self._buffer.append(_BREAK)
        return self

    def tag(self, tag: int) -> Encoder:
        return self._head(6, tag)

    def null(self) -> Encoder:
        self._buffer.append(0xF6)
        return self

    def undefined(self) -> Encoder:
        self._buffer.append(0xF7)
        return self

    def bool(self, value: bool) -> Encoder:
        self._buffer.append(0xF5 if value else 0xF4)
        return self

    def raw(self, data: bytes) -> Encoder:
        """Append already-encoded CBOR verbatim."""
        self._buffer += data
        return self

    def encode(self, value: Any) -> Encoder:
        """Encode a value that has an ``encode_cbor`` method or is a plain Python value."""
        hook = getattr(value, "encode_cbor", None)
        if callable(hook):
            hook(self)
            return self
        if value is None:
            return self.null()
        if isinstance(value, bool):
            return self.bool(value)
        if isinstance(value, int):
            return self.int(value)
        if isinstance(value, (bytes, bytearray, memoryview)):
            return self.bytes(bytes(value))
        if isinstance(value, str):
            return self.text(value)
        if isinstance(value, (list, tuple)):
            self.array(len(value))
            for item in value:
                self.encode(item)
            return self
        if isinstance(value, dict):
            self.map(len(value))
            for key, item in value.items():
                self.encode(key)
                self.encode(item)
            return self
        raise CborError(f"cannot encode value of type {type(value).__name__}")

    def getvalue(self) -> bytes:
        return bytes(self._buffer)


class Decoder:
    """Reads CBOR items one by one from a byte string."""

    def __init__(self, data: bytes, position: int = 0) -> None:
        self.data = bytes(data)
        self.position = position

    def _peek(self) -> int:
        if self.position >= len(self.data):
            raise CborError("unexpected end of input")
        return self.data[self.position]

    def _take(self, size: int) -> bytes:
        end = self.position + size
        if end > len(self.data):
            raise CborError("unexpected end of input")
        chunk = self.data[self.position:end]
        self.position = end
        return chunk

    def _head(self) -> tuple[int, int, int | None]:
        initial = self._take(1)[0]
        major, info = initial >> 5, initial & 0x1F
        if info < 24:
            return major, info, info
        if info <= 27:
            return major, info, int.from_bytes(self._take(1 << (info - 24)), "big")
        if info == 31:
            return major, info, None
        raise CborError(f"reserved additional information {info}")

    def _expect(self, major: int, name: str, indefinite: bool = False) -> int | None:
        start = self.position
        found, _, argument = self._head()
        if found != major:
            self.position = start
            raise CborError(f"expected {name}, found {self.datatype().value}")
        if argument is None and not indefinite:
            self.position = start
            raise CborError(f"unexpected indefinite length for {name}")
        return argument

    def datatype(self) -> DataType:
        """Report the type of the next item without consuming it."""
        initial = self._peek()
        major, info = initial >> 5, initial & 0x1F
        if major == 0:
            return _width_type(info, _UNSIGNED_TYPES)
        if major == 1:
            if info == 27:
                start = self.position + 1
                raw = self.data[start:start + 8]
                if len(raw) == 8 and -1 - int.from_bytes(raw, "big") < _I64_MIN:
                    return DataType.INT
            return _width_type(info, _SIGNED_TYPES)
        if major in (2, 3, 4, 5):
            definite, indefinite = {
                2: (DataType.BYTES, DataType.BYTES_INDEF),
                3: (DataType.STRING, DataType.STRING_INDEF),
                4: (DataType.ARRAY, DataType.ARRAY_INDEF),
                5: (DataType.MAP, DataType.MAP_INDEF),
            }[major]
            if info == 31:
                return indefinite
            return definite if info <= 27 else DataType.UNKNOWN
        if major == 6:
            return DataType.TAG if info <= 27 else DataType.UNKNOWN
        if info in (20, 21):
            return DataType.BOOL
        if info == 22:
            return DataType.NULL
        if info == 23:
            return DataType.UNDEFINED
        if info <= 24:
            return DataType.SIMPLE
        if info <= 27:
            return _FLOAT_TYPES[info - 25]
        if info == 31:
            return DataType.BREAK
        return DataType.UNKNOWN

    def uint(self) -> int:
        return self._expect(0, "unsigned integer")

    def _bounded(self, bits: int) -> int:
        start = self.position
        value = self.uint()
        if value >= 1 << bits:
            self.position = start
            raise CborError(f"value {value} overflows u{bits}")
        return value

    def u8(self) -> int:
        return self._bounded(8)

    def u16(self) -> int:
        return self._bounded(16)

    def u32(self) -> int:
        return self._bounded(32)

    def u64(self) -> int:
        return self._bounded(64)

    def int(self) -> int:
        major = self._peek() >> 5
        if major == 0:
            return self.uint()
        return -1 - self._expect(1, "integer")

    def _chunked(self, major: int, name: str) -> bytes:
        length = self._expect(major, name, indefinite=True)
        if length is not None:
            return self._take(length)
        chunks = []
        while not self.at_break():
            chunks.append(self._take(self._expect(major, f"{name} chunk")))
        return b"".join(chunks)

    def bytes(self) -> bytes:
        return self._chunked(2, "bytes")

    def text(self) -> str:
        raw = self._chunked(3, "text")
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise CborError("invalid utf-8 in text string") from exc

    def array(self) -> int | None:
        """Read an array header: its length, or None if indefinite."""
        return self._expect(4, "array", indefinite=True)

    def map(self) -> int | None:
        """Read a map header: its number of pairs, or None if indefinite."""
        return self._expect(5, "map", indefinite=True)

    def tag(self) -> int:
        return self._expect(6, "tag")

    def _simple(self, byte: int, name: str) -> None:
        if self._peek() != byte:
            raise CborError(f"expected {name}, found {self.datatype().value}")
        self.position += 1

    def null(self) -> None:
        self._simple(0xF6, "null")

    def undefined(self) -> None:
        self._simple(0xF7, "undefined")

    def bool(self) -> bool:
        byte = self._peek()
        if byte not in (0xF4, 0xF5):
            raise CborError(f"expected bool, found {self.datatype().value}")
        self.position += 1
        return byte == 0xF5

    def at_break(self) -> bool:
        """Consume a break marker if one is next and report whether it was."""
        if self._peek() == _BREAK:
            self.position += 1
            return True
        return False

    def skip(self) -> None:
        """Skip over one complete item, including nested and indefinite ones."""
        major, info, argument = self._head()
        if major in (0, 1, 6) and argument is None:
            raise CborError("unexpected indefinite length")
        if major in (2, 3):
            if argument is None:
                while not self.at_break():
                    chunk_major, _, size = self._head()
                    if chunk_major != major or size is None:
                        raise CborError("invalid chunk in indefinite string")
                    self._take(size)
            else:
                self._take(argument)
        elif major in (4, 5):
            per_entry = 1 if major == 4 else 2
            if argument is None:
                while not self.at_break():
                    for _ in range(per_entry):
                        self.skip()
            else:
                for _ in range(argument * per_entry):
                    self.skip()
        elif major == 6:
            self.skip()
        elif major == 7 and info == 31:
            raise CborError("unexpected break")

    def read(self, reader: Callable[[Decoder], T]) -> T:
        """Read one value with ``reader``, a callable that takes this decoder."""
        return reader(self)


def encode(value: Any) -> bytes:
    """Encode ``value`` to CBOR bytes."""
    return Encoder().encode(value).getvalue()


def decode(data: bytes, reader: Callable[[Decoder], T]) -> T:
    """Decode the start of ``data`` with ``reader``."""
    return reader(Decoder(data))