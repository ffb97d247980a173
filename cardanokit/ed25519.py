"""Ed25519 and extended Ed25519 keys, signatures and verification."""

from __future__ import annotations

import binascii
import hashlib
import secrets
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Optional, Tuple, Union

from .memsec import scrub as _scrub

_P = 2**255 - 19
_L = 2**252 + 27742317777372353535851937790883648493
_D = -121665 * pow(121666, -1, _P) % _P
_SQRT_M1 = pow(2, (_P - 1) // 4, _P)

_Point = Tuple[int, int, int, int]
_IDENTITY: _Point = (0, 1, 1, 0)

Rng = Union[Callable[[int], bytes], Any]


def _recover_x(y: int, sign: int) -> Optional[int]:
    if y >= _P:
        return None
    x2 = (y * y - 1) * pow(_D * y * y + 1, -1, _P) % _P
    if x2 == 0:
        return None if sign else 0
    x = pow(x2, (_P + 3) // 8, _P)
    if (x * x - x2) % _P != 0:
        x = x * _SQRT_M1 % _P
    if (x * x - x2) % _P != 0:
        return None
    if x & 1 != sign:
        x = _P - x
    return x


def _add(p: _Point, q: _Point) -> _Point:
    x1, y1, z1, t1 = p
    x2, y2, z2, t2 = q
    a = (y1 - x1) * (y2 - x2) % _P
    b = (y1 + x1) * (y2 + x2) % _P
    c = 2 * t1 * t2 * _D % _P
    d = 2 * z1 * z2 % _P
    e, f, g, h = b - a, d - c, d + c, b + a
    return (e * f % _P, g * h % _P, f * g % _P, e * h % _P)


def _negate(p: _Point) -> _Point:
    x, y, z, t = p
    return (-x % _P, y, z, -t % _P)


def _multiply(scalar: int, point: _Point) -> _Point:
    result = _IDENTITY
    while scalar > 0:
        if scalar & 1:
            result = _add(result, point)
        point = _add(point, point)
        scalar >>= 1
    return result


def _encode_point(point: _Point) -> bytes:
    x, y, z, _ = point
    z_inv = pow(z, -1, _P)
    x = x * z_inv % _P
    y = y * z_inv % _P
    return (y | (x & 1) << 255).to_bytes(32, "little")


def _decode_point(data: bytes) -> Optional[_Point]:
    value = int.from_bytes(data, "little")
    sign = value >> 255
    y = value & ((1 << 255) - 1)
    x = _recover_x(y, sign)
    if x is None:
        return None
    return (x, y, 1, x * y % _P)


_BASE_Y = 4 * pow(5, -1, _P) % _P
_BASE_X = _recover_x(_BASE_Y, 0)
_BASE: _Point = (_BASE_X, _BASE_Y, 1, _BASE_X * _BASE_Y % _P)


def _hash_int(*parts: bytes) -> int:
    return int.from_bytes(hashlib.sha512(b"".join(parts)).digest(), "little")


def _public_bytes(scalar: int) -> bytes:
    return _encode_point(_multiply(scalar, _BASE))


def _sign(scalar: int, prefix: bytes, public: bytes, message: bytes) -> bytes:
    r = _hash_int(prefix, message) % _L
    encoded_r = _encode_point(_multiply(r, _BASE))
    k = _hash_int(encoded_r, public, message) % _L
    s = (r + k * scalar) % _L
    return encoded_r + s.to_bytes(32, "little")


def _random_bytes(rng: Optional[Rng], size: int) -> bytes:
    if rng is None:
        data = secrets.token_bytes(size)
    elif hasattr(rng, "randbytes"):
        data = rng.randbytes(size)
    else:
        data = rng(size)
    data = bytes(data)
    if len(data) != size:
        raise ValueError(f"random source gave {len(data)} bytes, expected {size}")
    return data


class InvalidSizeError(ValueError):
    """Raised when bytes of the wrong length are given for a key or signature."""

    def __init__(self, expected: int) -> None:
        super().__init__(f"Invalid size, expecting {expected}")
        self.expected = expected


def _from_hex(text: str, size: int) -> bytes:
    try:
        data = binascii.unhexlify(text)
    except (binascii.Error, ValueError, TypeError) as exc:
        raise ValueError(f"invalid hex string: {text!r}") from exc
    if len(data) != size:
        raise ValueError(f"invalid string length for {size} bytes")
    return data


@dataclass(frozen=True, repr=False)
class _FixedBytes:
    SIZE: ClassVar[int] = 0
    _LABEL: ClassVar[str] = ""

    data: bytes

    def __post_init__(self) -> None:
        data = bytes(self.data)
        if len(data) != self.SIZE:
            raise InvalidSizeError(self.SIZE)
        object.__setattr__(self, "data", data)

    def __bytes__(self) -> bytes:
        return self.data

    def __str__(self) -> str:
        return self.data.hex()

    def __repr__(self) -> str:
        return f"{self._LABEL}({self.data.hex()!r})"


class PublicKey(_FixedBytes):
    """An Ed25519 public key, used to verify signatures."""

    SIZE: ClassVar[int] = 32
    _LABEL: ClassVar[str] = "PublicKey<Ed25519>"

    @classmethod
    def from_hex(cls, text: str) -> PublicKey:
        return cls(_from_hex(text, cls.SIZE))

    def verify(self, message: bytes, signature: Signature) -> bool:
        """Check that ``signature`` was made over ``message`` by this key's owner."""
        point = _decode_point(self.data)
        if point is None:
            return False
        sig = signature.data
        if sig[63] & 0xE0:
            return False
        encoded_r = sig[:32]
        s = int.from_bytes(sig[32:], "little")
        message = bytes(message)
        k = _hash_int(encoded_r, self.data, message) % _L
        check = _add(_multiply(s, _BASE), _negate(_multiply(k, point)))
        return _encode_point(check) == encoded_r


class Signature(_FixedBytes):
    """An Ed25519 signature."""

    SIZE: ClassVar[int] = 64
    _LABEL: ClassVar[str] = "Signature<Ed25519>"

    @classmethod
    def from_hex(cls, text: str) -> Signature:
        return cls(_from_hex(text, cls.SIZE))


class _Secret:
    SIZE: ClassVar[int] = 0

    def __init__(self, data: bytes) -> None:
        if len(data) != self.SIZE:
            raise InvalidSizeError(self.SIZE)
        self._secret = bytearray(data)

    def __del__(self) -> None:
        try:
            buffer = self._secret
        except AttributeError:
            return
        _scrub(buffer)

    def __repr__(self) -> str:
        return f"SecretKey<{type(self).__name__}>(..)"


class SecretKey(_Secret):
    """An Ed25519 secret key given by its 32-byte seed."""

    SIZE: ClassVar[int] = 32

    @classmethod
    def generate(cls, rng: Optional[Rng] = None) -> SecretKey:
        """Make a new key from ``rng``: a ``random.Random``-like object or ``f(n) -> bytes``."""
        return cls(_random_bytes(rng, cls.SIZE))

    def _expand(self) -> tuple[int, bytes]:
        digest = hashlib.sha512(bytes(self._secret)).digest()
        scalar = int.from_bytes(digest[:32], "little")
        scalar &= (1 << 254) - 8
        scalar |= 1 << 254
        return scalar, digest[32:]

    def public_key(self) -> PublicKey:
        scalar, _ = self._expand()
        return PublicKey(_public_bytes(scalar))

    def sign(self, message: bytes) -> Signature:
        scalar, prefix = self._expand()
        public = _public_bytes(scalar)
        return Signature(_sign(scalar, prefix, public, bytes(message)))

    def scrub(self) -> None:
        """Overwrite the secret bytes with zeros."""
        _scrub(self._secret)


class SecretKeyExtended(_Secret):
    """A 64-byte extended Ed25519 secret key: a scalar followed by a nonce prefix."""

    SIZE: ClassVar[int] = 64

    def __init__(self, data: bytes) -> None:
        super().__init__(data)
        if not self._check_structure():
            self.scrub()
            raise ValueError("invalid bit structure for an extended Ed25519 key")

    def _check_structure(self) -> bool:
        s = self._secret
        return (s[0] & 0b0000_0111) == 0 and (s[31] & 0b0100_0000) != 0 and (s[31] & 0b1000_0000) == 0

    @classmethod
    def generate(cls, rng: Optional[Rng] = None) -> SecretKeyExtended:
        """Make a new key from ``rng`` with the required bit tweaks applied."""
        data = bytearray(_random_bytes(rng, cls.SIZE))
        data[0] &= 0b1111_1000
        data[31] &= 0b0011_1111
        data[31] |= 0b0100_0000
        try:
            return cls(bytes(data))
        finally:
            _scrub(data)

    def _scalar(self) -> int:
        return int.from_bytes(self._secret[:32], "little")

    def public_key(self) -> PublicKey:
        return PublicKey(_public_bytes(self._scalar()))

    def sign(self, message: bytes) -> Signature:
        scalar = self._scalar()
        public = _public_bytes(scalar)
        prefix = bytes(self._secret[32:])
        return Signature(_sign(scalar, prefix, public, bytes(message)))

    def scrub(self) -> None:
        """Overwrite the secret bytes with zeros."""
        _scrub(self._secret)