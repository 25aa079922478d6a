"""
DMS3FS addresses: multiaddrs that end in a peer identity.

A DMS3FS address is any multiaddr whose last component is ``/dms3fs/<id>``::

    /ip4/1.2.3.4/tcp/1234/dms3fs/QmUCseQWXCSrhf9edzVKTvoj8o8Ts5aXFGNPameZRPJ6uR
    |------ transport -----|---------------- identity ---------------------|

Parsing checks that shape, decodes the peer ID, and returns an
:class:`IdentityAddress`. The transport is the address minus the identity
component, which is what a dialer connects to.

Relay addresses are the exception. In::

    /ip4/5.6.7.8/tcp/4001/dms3fs/QmRelay.../p2p-circuit/dms3fs/QmTarget...

the trailing identity selects the target behind the relay, so the whole
address is the transport and nothing is stripped.

Parsing never lets a malformed or hostile input escape as anything other
than :class:`InvalidAddressError`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Final

from .exceptions import InvalidAddressError
from .multiaddr import (
    P_CIRCUIT,
    P_DMS3FS,
    SEPARATOR,
    Multiaddr,
    MultiaddrError,
    ProtocolNotFoundError,
    join,
    protocol_with_code,
    split,
)
from .peer_id import PeerId, PeerIdError

logger = logging.getLogger(__name__)

_IDENTITY_PROTOCOL: Final = protocol_with_code(P_DMS3FS).name


@dataclass(frozen=True, slots=True)
class IdentityAddress:
    """
    A multiaddr together with the peer ID in its last component.

    Build instances with :func:`parse_string` or :func:`parse_multiaddr`.
    Equality compares the addresses only; the peer ID is derived from it.

    Attributes:
        multiaddr: The full address, exactly as given to the parser.
        peer_id: Peer ID decoded from the trailing ``/dms3fs`` component.
    """

    multiaddr: Multiaddr
    """The full address, including the identity component."""

    peer_id: PeerId = field(compare=False)
    """Peer ID decoded from the last component."""

    def transport(self) -> Multiaddr | None:
        """Return the dial-able part of the address (see :func:`transport`)."""
        return transport(self)

    def __str__(self) -> str:
        return str(self.multiaddr)

    def __repr__(self) -> str:
        return f"IdentityAddress({self!s})"

    def equal(self, other: object) -> bool:
        """
        Compare against another DMS3FS address or a bare multiaddr.

        Returns False for any other type, including None.
        """
        if isinstance(other, IdentityAddress):
            return self.multiaddr == other.multiaddr
        if isinstance(other, Multiaddr):
            return self.multiaddr == other
        return False


def parse_string(text: str, *, log: logging.Logger | None = None) -> IdentityAddress:
    """
    Parse the text form of a DMS3FS address.

    Args:
        text: Address text, for example ``/ip4/1.2.3.4/tcp/1234/dms3fs/Qm...``.
        log: Logger for diagnostics; defaults to this module's logger.

    Returns:
        The parsed address.

    Raises:
        InvalidAddressError: If text is empty, is not a multiaddr, or is not
            a DMS3FS address. Multiaddr errors are chained as the cause.
    """
    if not isinstance(text, str):
        raise InvalidAddressError(f"expected str, got {type(text).__name__}")
    if not text:
        raise InvalidAddressError("empty address")

    try:
        maddr = Multiaddr.from_string(text)
    except MultiaddrError as err:
        raise InvalidAddressError(err.message) from err

    return parse_multiaddr(maddr, log=log)


def parse_multiaddr(
    maddr: Multiaddr | None, *, log: logging.Logger | None = None
) -> IdentityAddress:
    """
    Validate a multiaddr as a DMS3FS address.

    Every structural assumption is checked before use. Anything else that
    goes wrong while validating is logged at DEBUG and reported as
    :class:`InvalidAddressError` with the original exception as the cause.

    Args:
        maddr: Address to validate.
        log: Logger for diagnostics; defaults to this module's logger.

    Returns:
        The address paired with its decoded peer ID.

    Raises:
        InvalidAddressError: If maddr is None, has no components, does not
            end in a ``/dms3fs`` component, or carries an invalid peer ID.
    """
    log = log or logger
    try:
        return _validate(maddr)
    except InvalidAddressError:
        raise
    except Exception as err:
        log.debug("recovered from unexpected error while parsing %r: %s", maddr, err)
        raise InvalidAddressError(f"unexpected error: {err}") from err


def _validate(maddr: Multiaddr | None) -> IdentityAddress:
    if maddr is None:
        raise InvalidAddressError("no address")
    if not isinstance(maddr, Multiaddr):
        raise InvalidAddressError(f"expected Multiaddr, got {type(maddr).__name__}")

    parts = split(maddr)
    if not parts:
        raise InvalidAddressError("address has no components")

    last = parts[-1]
    protocols = last.protocols()
    if not protocols or protocols[0].code != P_DMS3FS:
        raise InvalidAddressError(f"{maddr} does not end in /{_IDENTITY_PROTOCOL}")

    # The identity text follows the final separator of "/dms3fs/<id>".
    rendered = str(last)
    if SEPARATOR not in rendered:
        raise InvalidAddressError(f"malformed identity component {rendered!r}")
    id_text = rendered.rsplit(SEPARATOR, 1)[-1]

    try:
        peer_id = PeerId.from_base58(id_text)
    except PeerIdError as err:
        raise InvalidAddressError(f"invalid peer ID {id_text!r}: {err}") from err

    return IdentityAddress(multiaddr=maddr, peer_id=peer_id)


def transport(iaddr: IdentityAddress) -> Multiaddr | None:
    """
    Return the part of a DMS3FS address a dialer connects to.

    Relay addresses are returned unchanged. Otherwise the trailing identity
    component is dropped; an address that is only an identity has no
    transport and yields None.

    Args:
        iaddr: A parsed DMS3FS address.

    Returns:
        A new multiaddr without the identity component, the original
        multiaddr for relay addresses, or None.
    """
    maddr = iaddr.multiaddr

    # /dms3fs/<id> is part of the transport for p2p-circuit addresses.
    try:
        maddr.value_for_protocol(P_CIRCUIT)
    except ProtocolNotFoundError:
        pass
    else:
        return maddr

    parts = split(maddr)
    if len(parts) == 1:
        return None
    return join(*parts[:-1])
