import binascii
import json
import logging
import re
from typing import Any, Mapping, Optional

from jwt.utils import base64url_decode

from ...domain.constants import EXPECTED_PART_COUNT
from ...domain.entities import DecodedToken
from ...domain.exceptions import (
    InvalidBase64UrlError,
    InvalidJSONError,
    InvalidPartCountError,
)
from ...domain.ports import Clock, TokenDecoder
from ...domain.value_objects import freeze_json

logger = logging.getLogger(__name__)

# URL-safe alphabet, optionally followed by padding
_BASE64URL_SEGMENT = re.compile(r"[A-Za-z0-9_-]*={0,2}")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


class CompactTokenDecoder(TokenDecoder):
    """
    Adapter implementing TokenDecoder for the JWS compact serialization.

    - Splits `header.payload.signature`
    - base64url-decodes header and payload (padded or unpadded)
    - parses both as JSON objects
    - keeps the signature verbatim, without verifying it
    """

    def __init__(self, clock: Optional[Clock] = None) -> None:
        self._clock = clock

    # ------------------------------------------------------------------ #
    # Port implementation
    # ------------------------------------------------------------------ #

    def decode(self, token: str) -> DecodedToken:
        """
        Decode a compact token.

        Raises:
            InvalidPartCountError
            InvalidBase64UrlError
            InvalidJSONError
        """
        parts = token.split(".")
        if len(parts) != EXPECTED_PART_COUNT:
            logger.debug("Token has %d parts, expected %d", len(parts), EXPECTED_PART_COUNT)
            raise InvalidPartCountError(token, len(parts))

        header_segment, payload_segment, signature = parts
        header = self._decode_part(header_segment, "header")
        payload = self._decode_part(payload_segment, "payload")

        return DecodedToken(
            header=header,
            payload=payload,
            signature=signature or None,
            raw=token,
            clock=self._clock,
        )

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    def _decode_part(self, segment: str, part: str) -> Mapping[str, Any]:
        data = self._base64url_decode(segment, part)

        try:
            value = json.loads(data.decode("utf-8"), parse_constant=_reject_constant)
        except (ValueError, RecursionError) as exc:
            # ValueError covers JSONDecodeError and UnicodeDecodeError
            logger.debug("Token %s is not valid JSON: %s", part, exc)
            raise InvalidJSONError(segment, part) from exc

        if not isinstance(value, dict):
            logger.debug("Token %s is a JSON %s, not an object", part, type(value).__name__)
            raise InvalidJSONError(segment, part)

        try:
            return freeze_json(value)
        except RecursionError as exc:
            raise InvalidJSONError(segment, part) from exc

    @staticmethod
    def _base64url_decode(segment: str, part: str) -> bytes:
        # base64url_decode silently skips characters outside the alphabet
        if not _BASE64URL_SEGMENT.fullmatch(segment):
            raise InvalidBase64UrlError(segment, part)

        try:
            return base64url_decode(segment)
        except (binascii.Error, ValueError) as exc:
            logger.debug("Token %s is not valid base64url: %s", part, exc)
            raise InvalidBase64UrlError(segment, part) from exc


def decode(token: str, *, clock: Optional[Clock] = None) -> DecodedToken:
    """Decode a compact token; see `CompactTokenDecoder.decode`."""
    return CompactTokenDecoder(clock=clock).decode(token)
