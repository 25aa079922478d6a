"""
Peer identities carried in the ``/dms3fs/<id>`` address component.

A peer ID is a multihash of the peer's public key, shown to humans as a
Base58 string. Parsing a peer ID does no cryptography: it checks that the
text is Base58 and that the decoded bytes form a structurally valid
multihash::

    [code (varint)][length (varint)][digest (length bytes)]

Examples of the text forms seen on the network:

    - "Qm..."      sha2-256 multihash of a large (RSA) key, 34 bytes
    - "12D3KooW..." identity multihash of an Ed25519 key, 38 bytes
    - "5d..."      sha1 multihash, 22 bytes

References:
    - https://github.com/multiformats/multihash
    - https://github.com/libp2p/specs/blob/master/peer-ids/peer-ids.md
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Final

from typing_extensions import Self

from .varint import VarintError, decode_varint, encode_varint

__all__ = [
    "Base58",
    "Multihash",
    "MultihashCode",
    "PeerId",
    "PeerIdError",
    "is_valid_multihash_code",
]


class PeerIdError(ValueError):
    """Raised when text or bytes do not encode a valid peer ID."""


class MultihashCode(IntEnum):
    """
    Fixed-code hash functions from the multihash table.

    The blake2 families occupy whole code ranges and are checked separately
    by :func:`is_valid_multihash_code`.
    """

    IDENTITY = 0x00
    SHA1 = 0x11
    SHA2_256 = 0x12
    SHA2_512 = 0x13
    SHA3_512 = 0x14
    SHA3_384 = 0x15
    SHA3_256 = 0x16
    SHA3_224 = 0x17
    KECCAK_224 = 0x1A
    KECCAK_256 = 0x1B
    KECCAK_384 = 0x1C
    KECCAK_512 = 0x1D
    MURMUR3_128 = 0x22
    DBL_SHA2_256 = 0x56


_FIXED_CODES: Final[frozenset[int]] = frozenset(MultihashCode)

_BLAKE2B_CODES: Final[range] = range(0xB201, 0xB240 + 1)
"""blake2b-8 through blake2b-512."""

_BLAKE2S_CODES: Final[range] = range(0xB241, 0xB260 + 1)
"""blake2s-8 through blake2s-256."""


def is_valid_multihash_code(code: int) -> bool:
    """Return True if ``code`` names a known multihash function."""
    if code in _FIXED_CODES:
        return True
    return code in _BLAKE2B_CODES or code in _BLAKE2S_CODES


class Base58:
    """
    Base58 with the Bitcoin alphabet.

    The alphabet drops 0, O, I and l so identifiers survive being read
    aloud or retyped. Each leading zero byte is written as a leading '1'.
    """

    ALPHABET: Final[str] = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"

    @classmethod
    def encode(cls, data: bytes) -> str:
        """Encode bytes as Base58 text."""
        stripped = data.lstrip(b"\x00")
        zeros = len(data) - len(stripped)

        num = int.from_bytes(stripped, "big")
        digits: list[str] = []
        while num:
            num, rem = divmod(num, 58)
            digits.append(cls.ALPHABET[rem])

        return cls.ALPHABET[0] * zeros + "".join(reversed(digits))

    @classmethod
    def decode(cls, text: str) -> bytes:
        """
        Decode Base58 text to bytes.

        Raises:
            ValueError: If text contains a character outside the alphabet.
        """
        stripped = text.lstrip(cls.ALPHABET[0])
        zeros = len(text) - len(stripped)

        num = 0
        for char in stripped:
            digit = cls.ALPHABET.find(char)
            if digit < 0:
                raise ValueError(f"Invalid Base58 character: {char!r}")
            num = num * 58 + digit

        body = num.to_bytes((num.bit_length() + 7) // 8, "big") if num else b""
        return b"\x00" * zeros + body


@dataclass(frozen=True, slots=True)
class Multihash:
    """
    A decoded multihash.

    Attributes:
        code: Hash function code from the multihash table.
        digest: Digest bytes (the raw key for the identity function).
    """

    code: int
    """Hash function code."""

    digest: bytes
    """Digest bytes, exactly as long as the encoded length prefix says."""

    def encode(self) -> bytes:
        """Encode as ``[code][length][digest]`` with varint prefixes."""
        return encode_varint(self.code) + encode_varint(len(self.digest)) + self.digest

    @classmethod
    def decode(cls, data: bytes) -> Self:
        """
        Decode and validate multihash bytes.

        Args:
            data: Encoded multihash.

        Returns:
            The decoded multihash.

        Raises:
            PeerIdError: If the prefix is truncated, the hash code is unknown,
                or the digest length disagrees with the length prefix.
        """
        if not data:
            raise PeerIdError("Empty multihash")

        try:
            code, code_len = decode_varint(data)
            length, length_len = decode_varint(data, code_len)
        except VarintError as err:
            raise PeerIdError(f"Malformed multihash prefix: {err}") from err

        if not is_valid_multihash_code(code):
            raise PeerIdError(f"Unknown multihash code: 0x{code:x}")

        digest = data[code_len + length_len :]
        if len(digest) != length:
            raise PeerIdError(
                f"Multihash length mismatch: prefix says {length}, got {len(digest)}"
            )

        return cls(code=code, digest=digest)


@dataclass(frozen=True, slots=True)
class PeerId:
    """
    A peer identifier.

    Instances always hold a structurally valid multihash; the constructors
    below reject anything else. Two peer IDs are equal when their multihash
    bytes are equal.

    Attributes:
        multihash: The encoded multihash bytes.
    """

    multihash: bytes
    """Encoded multihash bytes (before Base58)."""

    def __str__(self) -> str:
        """Return the Base58 text form."""
        return self.to_base58()

    def __repr__(self) -> str:
        return f"PeerId({self!s})"

    def to_base58(self) -> str:
        """Return the Base58 text form."""
        return Base58.encode(self.multihash)

    def to_bytes(self) -> bytes:
        """Return the encoded multihash bytes."""
        return self.multihash

    def decoded(self) -> Multihash:
        """Return the multihash split into code and digest."""
        return Multihash.decode(self.multihash)

    @classmethod
    def from_bytes(cls, data: bytes) -> Self:
        """
        Build a peer ID from multihash bytes.

        Raises:
            PeerIdError: If data is not a valid multihash.
        """
        Multihash.decode(data)
        return cls(multihash=bytes(data))

    @classmethod
    def from_base58(cls, text: str) -> Self:
        """
        Parse the Base58 text form of a peer ID.

        Args:
            text: Base58-encoded multihash.

        Returns:
            The parsed peer ID.

        Raises:
            PeerIdError: If text is empty, not Base58, or not a multihash.
        """
        if not text:
            raise PeerIdError("Empty peer ID")

        try:
            raw = Base58.decode(text)
        except ValueError as err:
            raise PeerIdError(str(err)) from err

        return cls.from_bytes(raw)
