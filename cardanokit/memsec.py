"""Helpers for clearing secret buffers and comparing them in constant time."""

from __future__ import annotations

from typing import Any, Union

Buffer = Union[bytes, bytearray, memoryview]


def memset(buffer: bytearray | memoryview, value: int) -> None:
    """Overwrite every byte of a mutable buffer with ``value``."""
    if not 0 <= value <= 0xFF:
        raise ValueError(f"byte value {value} is out of range")
    view = memoryview(buffer).cast("B")
    if view.readonly:
        raise TypeError("cannot overwrite a read-only buffer")
    view[:] = bytes([value]) * len(view)


def scrub(buffer: Any) -> None:
    """Clear a secret in place.

    Byte buffers are zeroed, lists have their integers set to zero and
    their other items scrubbed, and ``None`` is left alone.
    """
    if buffer is None:
        return
    if isinstance(buffer, (bytearray, memoryview)):
        memset(buffer, 0)
        return
    if isinstance(buffer, list):
        for index, item in enumerate(buffer):
            if isinstance(item, int):
                buffer[index] = 0
            else:
                scrub(item)
        return
    raise TypeError(f"cannot scrub a value of type {type(buffer).__name__}")


def _prefixes(a: Buffer, b: Buffer, length: int, action: str) -> tuple[memoryview, memoryview]:
    if length == 0:
        raise ValueError(f"Cannot perform {action} comparison if the length is 0")
    view_a = memoryview(a).cast("B")
    view_b = memoryview(b).cast("B")
    if length < 0 or length > len(view_a) or length > len(view_b):
        raise ValueError(f"length {length} does not fit both buffers")
    return view_a[:length], view_b[:length]


def memeq(a: Buffer, b: Buffer, length: int) -> bool:
    """Compare the first ``length`` bytes of two buffers in constant time."""
    view_a, view_b = _prefixes(a, b, length, "equality")
    accumulated = 0
    for left, right in zip(view_a, view_b):
        accumulated |= left ^ right
    return accumulated == 0


def memcmp(a: Buffer, b: Buffer, length: int) -> int:
    """Order the first ``length`` bytes of two buffers in constant time.

    Returns -1, 0 or 1 as the first buffer sorts before, equal to or after
    the second.
    """
    view_a, view_b = _prefixes(a, b, length, "ordering")
    result = 0
    for left, right in reversed(list(zip(view_a, view_b))):
        diff = left - right
        result = (result & (((diff - 1) & ~diff) >> 8)) | diff
    result = ((result - 1) >> 8) + (result >> 8) + 1
    return (result > 0) - (result < 0)