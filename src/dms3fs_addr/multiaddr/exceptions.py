"""Errors raised by the multiaddr model."""

from __future__ import annotations


class MultiaddrError(ValueError):
    """
    Raised when text or components do not form a valid multiaddr.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class ProtocolNotFoundError(MultiaddrError):
    """Raised when a protocol is missing from the registry or from an address."""
