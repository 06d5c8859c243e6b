from __future__ import annotations

from typing import Optional

from .constants import EXPECTED_PART_COUNT


class DecodeError(Exception):
    """Raised when a compact token cannot be decoded."""
    pass


class InvalidBase64UrlError(DecodeError):
    """Raised when the header or payload part is not valid base64url."""

    def __init__(self, segment: str, part: Optional[str] = None) -> None:
        self.segment = segment
        self.part = part
        super().__init__(
            f"Malformed jwt token, failed to decode base64Url value {segment}"
        )


class InvalidJSONError(DecodeError):
    """Raised when a decoded part is not a JSON object."""

    def __init__(self, segment: str, part: Optional[str] = None) -> None:
        self.segment = segment
        self.part = part
        super().__init__(
            f"Malformed jwt token, failed to parse JSON value from base64Url {segment}"
        )


class InvalidPartCountError(DecodeError):
    """Raised when the token does not have header, payload and signature parts."""

    def __init__(self, token: str, count: int) -> None:
        self.token = token
        self.count = count
        super().__init__(
            f"Malformed jwt token {token} has {count} parts when it should have {EXPECTED_PART_COUNT} parts"
        )
