"""Errors raised when parsing DMS3FS addresses."""

from __future__ import annotations

from typing import Final

INVALID_ADDRESS: Final = "invalid DMS3FS address"
"""Message prefix shared by every address parse failure."""


class InvalidAddressError(Exception):
    """
    Raised when input is not a valid DMS3FS address.

    Covers empty input, malformed multiaddr text, a missing or misplaced
    ``/dms3fs`` component, and undecodable peer IDs. The underlying library
    error, if any, is chained as ``__cause__``.

    Attributes:
        detail: What was wrong with the input, if known.
        message: Full human-readable error description.
    """

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail
        self.message = INVALID_ADDRESS if detail is None else f"{INVALID_ADDRESS}: {detail}"
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"
