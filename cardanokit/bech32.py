"""Bech32 encoding of byte strings with a human-readable part."""

from __future__ import annotations

from typing import Iterable

_CHARSET = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"
_GENERATORS = (0x3B6A57B2, 0x26508E6D, 0x1EA119FA, 0x3D4233DD, 0x2A1462B3)
_BECH32_CONST = 1
_BECH32M_CONST = 0x2BC830A3
_CHECKSUM_LENGTH = 6


class Bech32Error(ValueError):
    """Raised for strings or parts that are not valid bech32."""


def _polymod(values: Iterable[int]) -> int:
    checksum = 1
    for value in values:
        top = checksum >> 25
        checksum = (checksum & 0x1FFFFFF) << 5 ^ value
        for bit, generator in enumerate(_GENERATORS):
            if (top >> bit) & 1:
                checksum ^= generator
    return checksum


def _hrp_expand(hrp: str) -> list[int]:
    return [ord(c) >> 5 for c in hrp] + [0] + [ord(c) & 31 for c in hrp]


def _convert_bits(data: Iterable[int], from_bits: int, to_bits: int, pad: bool) -> list[int]:
    accumulator = 0
    bits = 0
    result = []
    max_value = (1 << to_bits) - 1
    for value in data:
        accumulator = (accumulator << from_bits) | value
        bits += from_bits
        while bits >= to_bits:
            bits -= to_bits
            result.append((accumulator >> bits) & max_value)
    if pad:
        if bits:
            result.append((accumulator << (to_bits - bits)) & max_value)
    elif bits >= from_bits or (accumulator << (to_bits - bits)) & max_value:
        raise Bech32Error("invalid padding")
    return result


def _check_case(text: str) -> str:
    if any(not 33 <= ord(c) <= 126 for c in text):
        raise Bech32Error(f"invalid character in {text!r}")
    if text.lower() != text and text.upper() != text:
        raise Bech32Error("mixed-case string")
    return text.lower()


def encode(hrp: str, data: bytes) -> str:
    """Encode ``data`` as a bech32 string with human-readable part ``hrp``."""
    if not hrp:
        raise Bech32Error("invalid length: empty human-readable part")
    hrp = _check_case(hrp)
    values = _convert_bits(bytes(data), 8, 5, True)
    polymod = _polymod(_hrp_expand(hrp) + values + [0] * _CHECKSUM_LENGTH) ^ _BECH32_CONST
    checksum = [(polymod >> 5 * (5 - i)) & 31 for i in range(_CHECKSUM_LENGTH)]
    return hrp + "1" + "".join(_CHARSET[v] for v in values + checksum)


def decode(text: str) -> tuple[str, bytes]:
    """Decode a bech32 or bech32m string into its human-readable part and bytes."""
    text = _check_case(text)
    separator = text.rfind("1")
    if separator < 0:
        raise Bech32Error("missing separator")
    hrp, data_part = text[:separator], text[separator + 1:]
    if not hrp or len(data_part) < _CHECKSUM_LENGTH:
        raise Bech32Error("invalid length")
    values = [_CHARSET.find(c) for c in data_part]
    if -1 in values:
        raise Bech32Error(f"invalid character in {text!r}")
    if _polymod(_hrp_expand(hrp) + values) not in (_BECH32_CONST, _BECH32M_CONST):
        raise Bech32Error("invalid checksum")
    payload = _convert_bits(values[:-_CHECKSUM_LENGTH], 5, 8, False)
    return hrp, bytes(payload)