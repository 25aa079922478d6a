"""
Unsigned LEB128 varints, as used by the multiformats family.

Multihash and multicodec prefixes are varints: each byte carries 7 bits of
the value, least significant group first, and the high bit flags that more
bytes follow::

    [C|D D D D D D D]
     ^-- 1 = another byte follows, 0 = last byte

    0x12        -> 18     (sha2-256 code, 1 byte)
    0xa0 0xe4 0x02 -> 45600 (blake2b-256 code, 3 bytes)

Only unsigned values are supported. Decoding stops after 10 bytes, which is
enough for any 64-bit value and bounds the work done on hostile input.

References:
    https://github.com/multiformats/unsigned-varint
"""

from __future__ import annotations

from typing import Final

_MAX_VARINT_BYTES: Final[int] = 10
"""A 64-bit value never needs more than 10 groups of 7 bits."""


class VarintError(Exception):
    """Raised when a byte string does not hold a well-formed varint."""


def encode_varint(value: int) -> bytes:
    """
    Encode a non-negative integer as an unsigned varint.

    Args:
        value: Integer to encode.

    Returns:
        The varint bytes, low 7-bit group first.

    Raises:
        ValueError: If value is negative.
    """
    if value < 0:
        raise ValueError("Varint must be non-negative")

    out = bytearray()
    while value >= 0x80:
        out.append((value & 0x7F) | 0x80)
        value >>= 7
    out.append(value)
    return bytes(out)


def decode_varint(data: bytes, offset: int = 0) -> tuple[int, int]:
    """
    Decode one varint starting at ``offset``.

    Args:
        data: Buffer holding the varint.
        offset: Index of the first varint byte.

    Returns:
        Tuple of (value, number of bytes consumed).

    Raises:
        VarintError: If the buffer ends before the final byte, or the
            varint runs past 10 bytes.
    """
    value = 0
    for index in range(_MAX_VARINT_BYTES):
        pos = offset + index
        if pos >= len(data):
            raise VarintError("Truncated varint")

        byte = data[pos]
        value |= (byte & 0x7F) << (7 * index)

        # High bit clear: this was the last group.
        if not byte & 0x80:
            return value, index + 1

    raise VarintError("Varint too long")
