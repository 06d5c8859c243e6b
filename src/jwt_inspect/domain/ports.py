from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from .entities import DecodedToken


class Clock(Protocol):
    """
    Port for reading the current time.

    Implementations must return timezone-aware datetimes.
    """

    def now(self) -> datetime:
        ...


class TokenDecoder(Protocol):
    """
    Port for decoding a compact token into its parts.

    Implementations live in the adapters layer (e.g. the compact decoder).
    """

    def decode(self, token: str) -> "DecodedToken":
        """
        Decode the given token without verifying its signature.

        Raises:
          - InvalidPartCountError
          - InvalidBase64UrlError
          - InvalidJSONError
        """
        ...
