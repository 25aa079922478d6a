"""
Tests for the peer ID codec.

Peer IDs are Base58 text over multihash bytes:
    [code varint][length varint][digest]
"""

from __future__ import annotations

import pytest

from dms3fs_addr.peer_id import (
    Base58,
    Multihash,
    MultihashCode,
    PeerId,
    PeerIdError,
    is_valid_multihash_code,
)

QM_ID = "QmUCseQWXCSrhf9edzVKTvoj8o8Ts5aXFGNPameZRPJ6uR"


class TestBase58:
    """Tests for Base58 encoding/decoding."""

    def test_alphabet(self) -> None:
        """Base58 alphabet is Bitcoin-style (no 0, O, I, l)."""
        assert len(Base58.ALPHABET) == 58
        for char in "0OIl":
            assert char not in Base58.ALPHABET

    def test_encode_empty(self) -> None:
        """Empty bytes encode to an empty string."""
        assert Base58.encode(b"") == ""

    def test_leading_zeros(self) -> None:
        """Each leading zero byte becomes a leading '1'."""
        assert Base58.encode(b"\x00") == "1"
        assert Base58.encode(b"\x00\x00\x01") == "112"
        assert Base58.decode("112") == b"\x00\x00\x01"

    def test_known_vector(self) -> None:
        """'Hello World!' from the Base58 draft specification."""
        assert Base58.encode(b"Hello World!") == "2NEpo7TZRRrLZSi2U"
        assert Base58.decode("2NEpo7TZRRrLZSi2U") == b"Hello World!"

    @pytest.mark.parametrize("char", ["0", "O", "I", "l", "/", " "])
    def test_decode_invalid_char(self, char: str) -> None:
        """Characters outside the alphabet are rejected."""
        with pytest.raises(ValueError, match="Invalid Base58 character"):
            Base58.decode(f"Qm{char}")


class TestMultihash:
    """Tests for multihash decoding."""

    def test_decode_sha256(self) -> None:
        """A 'Qm' peer ID is a 32-byte sha2-256 multihash."""
        mh = Multihash.decode(Base58.decode(QM_ID))
        assert mh.code == MultihashCode.SHA2_256
        assert len(mh.digest) == 32

    def test_encode(self) -> None:
        """Encoding writes code and length prefixes."""
        mh = Multihash(code=MultihashCode.IDENTITY, digest=b"test")
        assert mh.encode() == b"\x00\x04test"

    def test_encode_multibyte_code(self) -> None:
        """blake2b-256 needs a three-byte code prefix."""
        mh = Multihash(code=0xB220, digest=bytes(32))
        encoded = mh.encode()
        assert encoded[:4] == b"\xa0\xe4\x02\x20"
        assert Multihash.decode(encoded) == mh

    def test_empty(self) -> None:
        """No bytes is not a multihash."""
        with pytest.raises(PeerIdError, match="Empty multihash"):
            Multihash.decode(b"")

    def test_truncated_prefix(self) -> None:
        """A code with no length prefix is rejected."""
        with pytest.raises(PeerIdError, match="Malformed multihash prefix"):
            Multihash.decode(b"\x12")

    def test_unknown_code(self) -> None:
        """Codes outside the multihash table are rejected."""
        with pytest.raises(PeerIdError, match="Unknown multihash code: 0x4f"):
            Multihash.decode(b"\x4f\x01\x00")

    @pytest.mark.parametrize("data", [b"\x12\x20" + bytes(31), b"\x12\x20" + bytes(33)])
    def test_length_mismatch(self, data: bytes) -> None:
        """The digest must be exactly as long as declared."""
        with pytest.raises(PeerIdError, match="length mismatch"):
            Multihash.decode(data)

    @pytest.mark.parametrize(
        ("code", "valid"),
        [
            (0x00, True),
            (0x11, True),
            (0x12, True),
            (0x56, True),
            (0xB201, True),
            (0xB260, True),
            (0x01, False),
            (0x18, False),
            (0xB200, False),
            (0xB261, False),
        ],
    )
    def test_valid_codes(self, code: int, valid: bool) -> None:
        """Fixed codes and the blake2 ranges are recognized."""
        assert is_valid_multihash_code(code) is valid


class TestPeerId:
    """Tests for the PeerId type."""

    def test_from_base58(self) -> None:
        """Parsing keeps the multihash bytes."""
        peer_id = PeerId.from_base58(QM_ID)
        assert peer_id.to_bytes() == Base58.decode(QM_ID)
        assert peer_id.decoded().code == MultihashCode.SHA2_256

    def test_text_forms(self) -> None:
        """str and to_base58 give back the input text."""
        peer_id = PeerId.from_base58(QM_ID)
        assert str(peer_id) == QM_ID
        assert peer_id.to_base58() == QM_ID
        assert repr(peer_id) == f"PeerId({QM_ID})"

    def test_equality(self) -> None:
        """Peer IDs compare by bytes."""
        assert PeerId.from_base58(QM_ID) == PeerId.from_bytes(Base58.decode(QM_ID))

    def test_empty(self) -> None:
        """Empty text is rejected."""
        with pytest.raises(PeerIdError, match="Empty peer ID"):
            PeerId.from_base58("")

    def test_invalid_base58(self) -> None:
        """Non-Base58 text is rejected with the codec error chained."""
        with pytest.raises(PeerIdError) as exc_info:
            PeerId.from_base58("QmO")
        assert isinstance(exc_info.value.__cause__, ValueError)

    @pytest.mark.parametrize(
        "text",
        [
            "5dru6bJPUM1B7N69528u49DJiWZno",
            "kTRX47RthhwNzWdi6ggwqju",
            "QmUCseQWXCSrhf9edzVKTvj8o8Ts5aXFGNPameZRPJ6uR",
        ],
    )
    def test_truncated_ids(self, text: str) -> None:
        """Dropping a character breaks the multihash structure."""
        with pytest.raises(PeerIdError):
            PeerId.from_base58(text)

    def test_from_bytes_validates(self) -> None:
        """Raw bytes must also be a valid multihash."""
        with pytest.raises(PeerIdError):
            PeerId.from_bytes(b"\x12\x20\x00")
