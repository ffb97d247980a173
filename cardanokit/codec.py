"""Round-trip friendly CBOR helper structures."""

from __future__ import annotations

import binascii
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Iterator, TypeVar

from .cbor import CborError, DataType, Decoder, Encoder, encode as _encode_value

T = TypeVar("T")
K = TypeVar("K")
V = TypeVar("V")
O = TypeVar("O")

Reader = Callable[[Decoder], T]

_CBOR_TAG = 24
_WIDTH_INFO = {1: 24, 2: 25, 4: 26, 8: 27}
_INT_MIN = -(2**64)
_INT_MAX = 2**64 - 1


def _entries(decoder: Decoder, length: int | None) -> Iterator[None]:
    """Yield once per entry of a definite or indefinite container."""
    if length is None:
        while not decoder.at_break():
            yield None
    else:
        for _ in range(length):
            yield None


@dataclass
class KeyValuePairs(Generic[K, V]):
    """Ordered key/value pairs that remember whether the map was indefinite."""

    items: list[tuple[K, V]] = field(default_factory=list)
    indefinite: bool = False

    def __post_init__(self) -> None:
        self.items = [(key, value) for key, value in self.items]

    def __iter__(self) -> Iterator[tuple[K, V]]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> tuple[K, V]:
        return self.items[index]

    @classmethod
    def decode(cls, decoder: Decoder, key: Reader[K], value: Reader[V]) -> KeyValuePairs[K, V]:
        datatype = decoder.datatype()
        if datatype not in (DataType.MAP, DataType.MAP_INDEF):
            raise CborError("invalid data type for key-value pairs")
        length = decoder.map()
        items = [(key(decoder), value(decoder)) for _ in _entries(decoder, length)]
        return cls(items, indefinite=datatype is DataType.MAP_INDEF)

    def encode_cbor(self, encoder: Encoder) -> None:
        if self.indefinite:
            encoder.begin_map()
        else:
            encoder.map(len(self.items))
        for key, value in self.items:
            encoder.encode(key)
            encoder.encode(value)
        if self.indefinite:
            encoder.end()


@dataclass
class MaybeIndefArray(Generic[T]):
    """An array that remembers whether it was encoded with indefinite length."""

    items: list[T] = field(default_factory=list)
    indefinite: bool = False

    def __post_init__(self) -> None:
        self.items = list(self.items)

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> T:
        return self.items[index]

    @classmethod
    def decode(cls, decoder: Decoder, item: Reader[T]) -> MaybeIndefArray[T]:
        datatype = decoder.datatype()
        if datatype not in (DataType.ARRAY, DataType.ARRAY_INDEF):
            raise CborError("unknown data type of maybe indef array")
        length = decoder.array()
        items = [item(decoder) for _ in _entries(decoder, length)]
        return cls(items, indefinite=datatype is DataType.ARRAY_INDEF)

    def encode_cbor(self, encoder: Encoder) -> None:
        if self.indefinite:
            encoder.begin_array()
        else:
            encoder.array(len(self.items))
        for item in self.items:
            encoder.encode(item)
        if self.indefinite:
            encoder.end()


@dataclass
class OrderPreservingProperties(Generic[T]):
    """Map entries kept as properties in their original order.

    Each property encodes its own key and value. An indefinite map decodes
    to no properties.
    """

    items: list[T] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.items = list(self.items)

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> T:
        return self.items[index]

    @classmethod
    def decode(cls, decoder: Decoder, item: Reader[T]) -> OrderPreservingProperties[T]:
        length = decoder.map() or 0
        return cls([item(decoder) for _ in range(length)])

    def encode_cbor(self, encoder: Encoder) -> None:
        encoder.map(len(self.items))
        for item in self.items:
            encoder.encode(item)


@dataclass
class CborWrap(Generic[T]):
    """A value carried as tagged CBOR inside a byte string."""

    value: T

    @classmethod
    def decode(cls, decoder: Decoder, inner: Reader[T]) -> CborWrap[T]:
        decoder.tag()
        payload = decoder.bytes()
        return cls(inner(Decoder(payload)))

    def encode_cbor(self, encoder: Encoder) -> None:
        try:
            payload = _encode_value(self.value)
        except CborError as exc:
            raise CborError("error encoding cbor-wrapped structure") from exc
        encoder.tag(_CBOR_TAG).bytes(payload)


@dataclass
class TagWrap(Generic[T]):
    """A value preceded by a fixed tag; the tag found when decoding is not checked."""

    tag: int
    value: T

    @classmethod
    def decode(cls, decoder: Decoder, tag: int, inner: Reader[T]) -> TagWrap[T]:
        decoder.tag()
        return cls(tag, inner(decoder))

    def encode_cbor(self, encoder: Encoder) -> None:
        encoder.tag(self.tag).encode(self.value)


@dataclass(frozen=True)
class EmptyMap:
    """An empty map; anything found in its place is skipped when decoding."""

    @classmethod
    def decode(cls, decoder: Decoder) -> EmptyMap:
        decoder.skip()
        return cls()

    def encode_cbor(self, encoder: Encoder) -> None:
        encoder.map(0)


@dataclass
class ZeroOrOneArray(Generic[T]):
    """An optional value encoded as an array of zero or one items."""

    value: T | None = None

    @classmethod
    def decode(cls, decoder: Decoder, item: Reader[T]) -> ZeroOrOneArray[T]:
        length = decoder.array()
        if length is None:
            raise CborError("found invalid indefinite len array for zero-or-one pattern")
        if length == 0:
            return cls(None)
        if length == 1:
            return cls(item(decoder))
        raise CborError("found invalid len for zero-or-one pattern")

    def encode_cbor(self, encoder: Encoder) -> None:
        if self.value is None:
            encoder.array(0)
        else:
            encoder.array(1).encode(self.value)


@dataclass(frozen=True, order=True)
class AnyUInt:
    """An unsigned integer that keeps its encoded width in bytes.

    A width of 0 means the value lives in the initial byte itself.
    """

    width: int
    value: int

    def __post_init__(self) -> None:
        if self.width == 0:
            limit = 24
        elif self.width in _WIDTH_INFO:
            limit = 1 << (8 * self.width)
        else:
            raise ValueError(f"invalid width {self.width}")
        if not 0 <= self.value < limit:
            raise ValueError(f"value {self.value} does not fit width {self.width}")

    def __int__(self) -> int:
        return self.value

    def __index__(self) -> int:
        return self.value

    @classmethod
    def decode(cls, decoder: Decoder) -> AnyUInt:
        datatype = decoder.datatype()
        if datatype is DataType.U8:
            value = decoder.u8()
            return cls(0 if value <= 0x17 else 1, value)
        if datatype is DataType.U16:
            return cls(2, decoder.u16())
        if datatype is DataType.U32:
            return cls(4, decoder.u32())
        if datatype is DataType.U64:
            return cls(8, decoder.u64())
        raise CborError("invalid data type for AnyUInt")

    def encode_cbor(self, encoder: Encoder) -> None:
        if self.width == 0:
            encoder.raw(bytes([self.value]))
        else:
            encoder.raw(bytes([_WIDTH_INFO[self.width]]) + self.value.to_bytes(self.width, "big"))


@dataclass(frozen=True)
class KeepRaw(Generic[T]):
    """A decoded value together with the exact CBOR bytes it came from."""

    raw: bytes
    value: T

    @classmethod
    def decode(cls, decoder: Decoder, inner: Reader[T]) -> KeepRaw[T]:
        start = decoder.position
        value = inner(decoder)
        return cls(decoder.data[start:decoder.position], value)

    def encode_cbor(self, encoder: Encoder) -> None:
        encoder.raw(self.raw)


_NULLABLE_KINDS = ("some", "null", "undefined")


@dataclass(frozen=True)
class Nullable(Generic[T]):
    """A value that may also be CBOR null or undefined.

    ``Nullable(x)`` holds a value; ``Nullable.NULL`` and ``Nullable.UNDEFINED``
    stand for the two empty forms.
    """

    value: T | None = None
    kind: str = "some"

    def __post_init__(self) -> None:
        if self.kind not in _NULLABLE_KINDS:
            raise ValueError(f"invalid nullable kind {self.kind!r}")
        if self.kind != "some" and self.value is not None:
            raise ValueError("an empty nullable cannot hold a value")

    @classmethod
    def decode(cls, decoder: Decoder, inner: Reader[T]) -> Nullable[T]:
        datatype = decoder.datatype()
        if datatype is DataType.NULL:
            decoder.null()
            return cls(kind="null")
        if datatype is DataType.UNDEFINED:
            decoder.undefined()
            return cls(kind="undefined")
        return cls(inner(decoder))

    def encode_cbor(self, encoder: Encoder) -> None:
        if self.kind == "null":
            encoder.null()
        elif self.kind == "undefined":
            encoder.undefined()
        else:
            encoder.encode(self.value)

    def map(self, func: Callable[[T], O]) -> Nullable[O]:
        if self.kind == "some":
            return Nullable(func(self.value))
        return Nullable(kind=self.kind)

    @classmethod
    def from_optional(cls, value: T | None) -> Nullable[T]:
        return cls(kind="null") if value is None else cls(value)

    def to_optional(self) -> T | None:
        return self.value if self.kind == "some" else None


Nullable.NULL = Nullable(kind="null")
Nullable.UNDEFINED = Nullable(kind="undefined")


@dataclass(frozen=True, order=True)
class Bytes:
    """A CBOR byte string whose text form is lower-case hex."""

    data: bytes = b""

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", bytes(self.data))

    def __bytes__(self) -> bytes:
        return self.data

    def __len__(self) -> int:
        return len(self.data)

    def __iter__(self) -> Iterator[int]:
        return iter(self.data)

    def __getitem__(self, index: Any) -> Any:
        return self.data[index]

    def __str__(self) -> str:
        return self.data.hex()

    @classmethod
    def decode(cls, decoder: Decoder) -> Bytes:
        return cls(decoder.bytes())

    def encode_cbor(self, encoder: Encoder) -> None:
        encoder.bytes(self.data)

    @classmethod
    def from_hex(cls, text: str) -> Bytes:
        try:
            return cls(binascii.unhexlify(text))
        except (binascii.Error, ValueError) as exc:
            raise ValueError(f"invalid hex string: {text!r}") from exc


class Int(int):
    """An integer in the CBOR range from -2**64 to 2**64 - 1."""

    def __new__(cls, value: int) -> Int:
        number = super().__new__(cls, value)
        if not _INT_MIN <= number <= _INT_MAX:
            raise ValueError(f"integer {int(number)} is out of CBOR range")
        return number

    @classmethod
    def decode(cls, decoder: Decoder) -> Int:
        return cls(decoder.int())

    def encode_cbor(self, encoder: Encoder) -> None:
        encoder.int(int(self))