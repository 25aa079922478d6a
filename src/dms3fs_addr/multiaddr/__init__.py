"""Text multiaddr model: protocols, components and addresses."""

from .exceptions import MultiaddrError, ProtocolNotFoundError
from .multiaddr import SEPARATOR, Component, Multiaddr, join, split
from .protocols import (
    P_CIRCUIT,
    P_DMS3FS,
    P_DNS4,
    P_DNS6,
    P_DNSADDR,
    P_IP4,
    P_IP6,
    P_QUIC,
    P_QUIC_V1,
    P_TCP,
    P_UDP,
    P_WS,
    P_WSS,
    PROTOCOLS,
    Protocol,
    ValueKind,
    protocol_with_code,
    protocol_with_name,
)

__all__ = [
    "MultiaddrError",
    "ProtocolNotFoundError",
    "SEPARATOR",
    "Component",
    "Multiaddr",
    "join",
    "split",
    "P_CIRCUIT",
    "P_DMS3FS",
    "P_DNS4",
    "P_DNS6",
    "P_DNSADDR",
    "P_IP4",
    "P_IP6",
    "P_QUIC",
    "P_QUIC_V1",
    "P_TCP",
    "P_UDP",
    "P_WS",
    "P_WSS",
    "PROTOCOLS",
    "Protocol",
    "ValueKind",
    "protocol_with_code",
    "protocol_with_name",
]
