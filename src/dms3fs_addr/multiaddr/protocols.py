"""
Protocol registry for multiaddr components.

Every component of a multiaddr names a protocol by a multicodec code and a
text name. Some protocols carry a value (``/tcp/4001``), others stand alone
(``/p2p-circuit``). The value kind tells the text parser how to validate
and normalize the value.

Codes follow the multicodec table. ``dms3fs`` reuses the code of the
classic ``ipfs``/``p2p`` protocol.

References:
    https://github.com/multiformats/multicodec/blob/master/table.csv
"""

from __future__ import annotations

from enum import Enum
from typing import Final

from ..base import StrictBaseModel
from .exceptions import ProtocolNotFoundError

P_IP4: Final = 0x0004
P_TCP: Final = 0x0006
P_IP6: Final = 0x0029
P_DNS4: Final = 0x0036
P_DNS6: Final = 0x0037
P_DNSADDR: Final = 0x0038
P_UDP: Final = 0x0111
P_CIRCUIT: Final = 0x0122
"""Relay hop marker; addresses containing it dial through a relay."""
P_DMS3FS: Final = 0x01A5
"""Peer identity component, always the last component of a DMS3FS address."""
P_QUIC: Final = 0x01CC
P_QUIC_V1: Final = 0x01CD
P_WS: Final = 0x01DD
P_WSS: Final = 0x01DE


class ValueKind(Enum):
    """How a protocol's value is written in text form."""

    NONE = "none"
    """Protocol takes no value."""

    IP4 = "ip4"
    """Dotted-quad IPv4 literal."""

    IP6 = "ip6"
    """IPv6 literal, normalized to its compressed form."""

    PORT = "port"
    """Decimal port in [0, 65535]."""

    HOSTNAME = "hostname"
    """DNS name of letter, digit and hyphen labels, at most 253 characters."""

    BASE58 = "base58"
    """Non-empty Base58 text."""


class Protocol(StrictBaseModel):
    """A registered multiaddr protocol."""

    code: int
    """Multicodec code."""

    name: str
    """Text name used in the string form."""

    value_kind: ValueKind
    """Kind of value the protocol carries."""

    @property
    def has_value(self) -> bool:
        """Whether components of this protocol carry a value."""
        return self.value_kind is not ValueKind.NONE


PROTOCOLS: Final[tuple[Protocol, ...]] = (
    Protocol(code=P_IP4, name="ip4", value_kind=ValueKind.IP4),
    Protocol(code=P_TCP, name="tcp", value_kind=ValueKind.PORT),
    Protocol(code=P_IP6, name="ip6", value_kind=ValueKind.IP6),
    Protocol(code=P_DNS4, name="dns4", value_kind=ValueKind.HOSTNAME),
    Protocol(code=P_DNS6, name="dns6", value_kind=ValueKind.HOSTNAME),
    Protocol(code=P_DNSADDR, name="dnsaddr", value_kind=ValueKind.HOSTNAME),
    Protocol(code=P_UDP, name="udp", value_kind=ValueKind.PORT),
    Protocol(code=P_CIRCUIT, name="p2p-circuit", value_kind=ValueKind.NONE),
    Protocol(code=P_DMS3FS, name="dms3fs", value_kind=ValueKind.BASE58),
    Protocol(code=P_QUIC, name="quic", value_kind=ValueKind.NONE),
    Protocol(code=P_QUIC_V1, name="quic-v1", value_kind=ValueKind.NONE),
    Protocol(code=P_WS, name="ws", value_kind=ValueKind.NONE),
    Protocol(code=P_WSS, name="wss", value_kind=ValueKind.NONE),
)
"""All protocols known to the text parser."""

_BY_CODE: Final[dict[int, Protocol]] = {p.code: p for p in PROTOCOLS}
_BY_NAME: Final[dict[str, Protocol]] = {p.name: p for p in PROTOCOLS}


def protocol_with_code(code: int) -> Protocol:
    """
    Look up a protocol by multicodec code.

    Raises:
        ProtocolNotFoundError: If no protocol has this code.
    """
    try:
        return _BY_CODE[code]
    except KeyError:
        raise ProtocolNotFoundError(f"No protocol with code {code}") from None


def protocol_with_name(name: str) -> Protocol:
    """
    Look up a protocol by text name.

    Raises:
        ProtocolNotFoundError: If no protocol has this name.
    """
    try:
        return _BY_NAME[name]
    except KeyError:
        raise ProtocolNotFoundError(f"No protocol named {name!r}") from None
