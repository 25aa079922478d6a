"""
Text multiaddrs.

A multiaddr is an ordered list of components, each a protocol with an
optional value, written as a path::

    /ip4/1.2.3.4/tcp/1234/dms3fs/QmUCseQWXCSrhf9edzVKTvoj8o8Ts5aXFGNPameZRPJ6uR
    |-- ip4 --|--- tcp --|------------------- dms3fs -----------------------|

Addresses compose by concatenation: a transport address followed by a peer
identity, or a relay address followed by ``/p2p-circuit`` and the target.
The model here is the text form only; component values are validated and
normalized on construction so that equal addresses have equal components.
"""

from __future__ import annotations

import ipaddress
import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Final

from typing_extensions import Self

from ..peer_id import Base58
from .exceptions import MultiaddrError, ProtocolNotFoundError
from .protocols import Protocol, ValueKind, protocol_with_name

SEPARATOR: Final = "/"
"""Separates protocol names and values in the text form."""

_MAX_PORT: Final = 65535
_BASE58_CHARS: Final[frozenset[str]] = frozenset(Base58.ALPHABET)

_MAX_HOSTNAME: Final = 253
_HOSTNAME_LABEL: Final = re.compile(r"(?!-)[A-Za-z0-9-]{1,63}(?<!-)")


def _normalize_value(protocol: Protocol, value: str) -> str:
    """
    Validate a component value and return its canonical text.

    Raises:
        MultiaddrError: If the value is not valid for the protocol.
    """
    kind = protocol.value_kind

    if kind is ValueKind.IP4 or kind is ValueKind.IP6:
        cls = ipaddress.IPv4Address if kind is ValueKind.IP4 else ipaddress.IPv6Address
        try:
            return str(cls(value))
        except ValueError as err:
            raise MultiaddrError(f"Invalid {protocol.name} address {value!r}: {err}") from err

    if kind is ValueKind.PORT:
        # Bound the length before int() so huge digit strings stay cheap.
        if not (value.isascii() and value.isdigit() and len(value) <= 5):
            raise MultiaddrError(f"Invalid {protocol.name} port {value!r}")
        port = int(value)
        if port > _MAX_PORT:
            raise MultiaddrError(f"{protocol.name} port {port} out of range")
        return str(port)

    if kind is ValueKind.BASE58:
        bad = set(value) - _BASE58_CHARS
        if bad:
            raise MultiaddrError(f"Invalid {protocol.name} value {value!r}: not Base58")
        return value

    # Hostnames: dot-separated labels of letters, digits and inner hyphens.
    labels = value.removesuffix(".").split(".")
    valid = all(_HOSTNAME_LABEL.fullmatch(label) for label in labels)
    if len(value) > _MAX_HOSTNAME or not valid:
        raise MultiaddrError(f"Invalid {protocol.name} hostname {value!r}")
    return value


@dataclass(frozen=True, slots=True)
class Component:
    """
    One protocol/value pair.

    The value is validated and normalized on construction, so a component
    built directly holds exactly what parsing its text form would give.

    Attributes:
        protocol: Registered protocol.
        value: Value text, empty for protocols without a value.

    Raises:
        MultiaddrError: If the value is missing, unexpected, or invalid
            for the protocol.
    """

    protocol: Protocol
    """Protocol of this component."""

    value: str = ""
    """Canonical value text."""

    def __post_init__(self) -> None:
        name = self.protocol.name
        if not self.protocol.has_value:
            if self.value:
                raise MultiaddrError(f"Protocol {name!r} takes no value, got {self.value!r}")
            return

        if not self.value:
            raise MultiaddrError(f"Protocol {name!r} requires a value")
        object.__setattr__(self, "value", _normalize_value(self.protocol, self.value))

    def __str__(self) -> str:
        if self.protocol.has_value:
            return f"{SEPARATOR}{self.protocol.name}{SEPARATOR}{self.value}"
        return f"{SEPARATOR}{self.protocol.name}"


@dataclass(frozen=True, slots=True)
class Multiaddr:
    """
    An immutable multiaddr.

    Equality compares components, so two addresses parsed from different
    but equivalent text (``/tcp/080`` and ``/tcp/80``) are equal.
    """

    components: tuple[Component, ...]
    """Components in address order."""

    def __str__(self) -> str:
        """Return the canonical text form."""
        return "".join(str(c) for c in self.components)

    def __repr__(self) -> str:
        return f"Multiaddr({self!s})"

    def __len__(self) -> int:
        return len(self.components)

    @classmethod
    def from_components(cls, components: Iterable[Component]) -> Self:
        """Build an address from components, in order."""
        return cls(components=tuple(components))

    @classmethod
    def from_string(cls, text: str) -> Self:
        """
        Parse the text form of a multiaddr.

        A single trailing separator is ignored. Every protocol name must be
        registered, and protocols that carry a value must be followed by a
        valid, non-empty one.

        Args:
            text: Address text such as ``/ip4/1.2.3.4/tcp/1234``.

        Returns:
            The parsed address.

        Raises:
            MultiaddrError: If text is not a valid multiaddr.
        """
        if not text.startswith(SEPARATOR):
            raise MultiaddrError(f"Multiaddr must begin with {SEPARATOR!r}: {text!r}")

        body = text[1:]
        if body.endswith(SEPARATOR):
            body = body[:-1]
        if not body:
            raise MultiaddrError("Empty multiaddr")

        parts = body.split(SEPARATOR)
        components: list[Component] = []
        i = 0
        while i < len(parts):
            name = parts[i]
            try:
                protocol = protocol_with_name(name)
            except ProtocolNotFoundError as err:
                raise MultiaddrError(f"Unknown protocol {name!r} in {text!r}") from err
            i += 1

            if not protocol.has_value:
                components.append(Component(protocol=protocol))
                continue

            if i >= len(parts) or not parts[i]:
                raise MultiaddrError(f"Protocol {name!r} requires a value in {text!r}")
            components.append(Component(protocol=protocol, value=parts[i]))
            i += 1

        return cls(components=tuple(components))

    def protocols(self) -> list[Protocol]:
        """Return the protocol of each component, in order."""
        return [c.protocol for c in self.components]

    def value_for_protocol(self, code: int) -> str:
        """
        Return the value of the first component with the given protocol code.

        Protocols without a value yield an empty string.

        Raises:
            ProtocolNotFoundError: If no component uses the protocol.
        """
        for component in self.components:
            if component.protocol.code == code:
                return component.value
        raise ProtocolNotFoundError(f"Protocol {code} not found in {self}")

    def split(self) -> list[Multiaddr]:
        """Return one single-component address per component."""
        return [Multiaddr(components=(c,)) for c in self.components]

    def encapsulate(self, other: Multiaddr) -> Multiaddr:
        """Return this address followed by ``other``."""
        return Multiaddr(components=self.components + other.components)

    def decapsulate(self, other: Multiaddr) -> Multiaddr:
        """
        Remove the last occurrence of ``other`` and everything after it.

        Returns an equal copy of this address when ``other`` does not occur.
        """
        size = len(other.components)
        if size:
            for start in range(len(self.components) - size, -1, -1):
                if self.components[start : start + size] == other.components:
                    return Multiaddr(components=self.components[:start])
        return Multiaddr(components=self.components)


def split(maddr: Multiaddr) -> list[Multiaddr]:
    """Split an address into single-component addresses."""
    return maddr.split()


def join(*maddrs: Multiaddr) -> Multiaddr:
    """Concatenate addresses into a new address."""
    return Multiaddr(components=tuple(c for m in maddrs for c in m.components))
