"""Parse DMS3FS addresses and derive their transport addresses."""

from .address import IdentityAddress, parse_multiaddr, parse_string, transport
from .exceptions import InvalidAddressError
from .multiaddr import P_CIRCUIT, P_DMS3FS, Multiaddr
from .peer_id import PeerId

__all__ = [
    "IdentityAddress",
    "parse_multiaddr",
    "parse_string",
    "transport",
    "InvalidAddressError",
    "P_CIRCUIT",
    "P_DMS3FS",
    "Multiaddr",
    "PeerId",
]
