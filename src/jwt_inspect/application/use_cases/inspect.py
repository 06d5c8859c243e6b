from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

from ...domain.entities import DecodedToken
from ...domain.exceptions import DecodeError
from ...domain.ports import Clock, TokenDecoder
from ...domain.value_objects import thaw_json

logger = logging.getLogger(__name__)


def _render(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    return thaw_json(value)


@dataclass(frozen=True, slots=True)
class TokenInspection:
    """
    Report about a decoded token at a given instant.

    Dates in `claims` are kept as datetimes; `to_dict` renders them as
    ISO-8601 strings so the report can be dumped as JSON.
    """
    header: Mapping[str, Any]
    payload: Mapping[str, Any]
    signature: Optional[str]
    claims: Mapping[str, Any] = field(default_factory=dict)
    checked_at: Optional[datetime] = None
    expired: bool = False
    active: bool = True
    unsigned: bool = False
    expires_in_seconds: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "header": thaw_json(self.header),
            "payload": thaw_json(self.payload),
            "signature": self.signature,
            "claims": {k: _render(v) for k, v in self.claims.items()},
            "checked_at": _render(self.checked_at),
            "expired": self.expired,
            "active": self.active,
            "unsigned": self.unsigned,
            "expires_in_seconds": self.expires_in_seconds,
        }


@dataclass(slots=True)
class InspectTokenUseCase:
    """
    Application use case:
    - Decode a token via TokenDecoder port
    - Evaluate its registered claims against the clock

    Nothing is verified; the report is for inspection and debugging.
    """

    token_decoder: TokenDecoder
    clock: Clock

    def decode(self, token: str) -> DecodedToken:
        """
        Raises:
            DecodeError (InvalidPartCountError, InvalidBase64UrlError, InvalidJSONError)
        """
        try:
            decoded = self.token_decoder.decode(token)
        except DecodeError as exc:
            logger.info("Token decode failed: %s", exc)
            raise

        logger.debug(
            "Decoded token alg=%s claims=%s",
            decoded.algorithm,
            sorted(decoded.payload),
        )
        return decoded

    def execute(self, token: str) -> TokenInspection:
        return self.inspect(self.decode(token))

    def inspect(self, decoded: DecodedToken) -> TokenInspection:
        now = self.clock.now()
        remaining = decoded.expires_in(now)

        return TokenInspection(
            header=decoded.header,
            payload=decoded.payload,
            signature=decoded.signature,
            claims=decoded.registered_claims(),
            checked_at=now,
            expired=decoded.is_expired(now),
            active=decoded.is_active(now),
            unsigned=decoded.is_unsigned,
            expires_in_seconds=remaining.total_seconds() if remaining is not None else None,
        )
