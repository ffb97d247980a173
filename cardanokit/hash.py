"""Blake2b hashes of fixed size and a streaming hasher for them."""

from __future__ import annotations

import binascii
import hashlib
from typing import Any

from .cbor import CborError, Decoder, Encoder, encode as _encode_cbor

_SUPPORTED_BITS = (224, 256)


class Hash(bytes):
    """A cryptographic digest of a fixed number of bytes.

    Compares, orders and hashes like the bytes it holds; its text form is
    lower-case hex.
    """

    def __new__(cls, data: Any) -> Hash:
        if isinstance(data, int):
            raise TypeError("a hash is built from bytes, not an integer")
        return super().__new__(cls, data)

    @property
    def size(self) -> int:
        return len(self)

    @classmethod
    def from_hex(cls, text: str, size: int) -> Hash:
        """Parse a hex string that must describe exactly ``size`` bytes."""
        try:
            data = binascii.unhexlify(text)
        except (binascii.Error, ValueError, TypeError) as exc:
            raise ValueError(f"invalid hex string: {text!r}") from exc
        if len(data) != size:
            raise ValueError(f"invalid hex string length for {size} bytes: {text!r}")
        return cls(data)

    def hex(self) -> str:  # type: ignore[override]
        return bytes.hex(self)

    def __str__(self) -> str:
        return self.hex()

    def __repr__(self) -> str:
        return f"Hash<{len(self)}>({self.hex()!r})"

    def encode_cbor(self, encoder: Encoder) -> None:
        encoder.bytes(bytes(self))

    @classmethod
    def decode(cls, decoder: Decoder, size: int) -> Hash:
        data = decoder.bytes()
        if len(data) != size:
            raise CborError("Invalid hash size")
        return cls(data)


def serialize_hash(value: Hash) -> str:
    """Give the text form of a hash for serialization."""
    return bytes(value).hex()


def deserialize_hash(value: Any, size: int) -> Hash:
    """Read a hash of ``size`` bytes from its serialized text form."""
    if not isinstance(value, str):
        raise TypeError(
            f"invalid type: {type(value).__name__}, "
            f"expected a hex string representing {size} bytes"
        )
    try:
        return Hash.from_hex(value, size)
    except ValueError as exc:
        raise ValueError(
            f'invalid value: string "{value}", '
            f"expected a hex string representing {size} bytes"
        ) from exc


class Hasher:
    """Streaming Blake2b hasher producing a digest of 224 or 256 bits."""

    def __init__(self, bits: int) -> None:
        if bits not in _SUPPORTED_BITS:
            raise ValueError(f"unsupported digest size of {bits} bits")
        self.bits = bits
        self._state = hashlib.blake2b(digest_size=bits // 8)

    def update(self, data: bytes) -> None:
        self._state.update(bytes(data))

    def finalize(self) -> Hash:
        return Hash(self._state.digest())

    @classmethod
    def hash(cls, bits: int, data: bytes) -> Hash:
        hasher = cls(bits)
        hasher.update(data)
        return hasher.finalize()

    @classmethod
    def hash_tagged(cls, bits: int, data: bytes, tag: int) -> Hash:
        hasher = cls(bits)
        hasher.update(bytes([tag]))
        hasher.update(data)
        return hasher.finalize()

    @classmethod
    def hash_cbor(cls, bits: int, value: Any) -> Hash:
        """Hash the CBOR encoding of ``value``."""
        return cls.hash(bits, _encode_cbor(value))

    @classmethod
    def hash_tagged_cbor(cls, bits: int, value: Any, tag: int) -> Hash:
        return cls.hash_tagged(bits, _encode_cbor(value), tag)