from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Mapping, Optional

from .constants import HeaderParameter, RegisteredClaim, UNSIGNED_ALGORITHM
from .ports import Clock
from .value_objects import ABSENT, Claim, freeze_json


@dataclass(frozen=True, slots=True)
class DecodedToken:
    """
    The decoded parts of a compact JWT.

    Header and payload are deeply read-only: JSON objects are exposed as
    mappings that cannot be modified and arrays as tuples. Registered
    claims are derived on demand through `Claim`, never stored twice.
    The signature is kept verbatim and is never verified.
    """
    header: Mapping[str, Any]
    payload: Mapping[str, Any]
    signature: Optional[str]
    raw: str
    clock: Optional[Clock] = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "header", freeze_json(self.header))
        object.__setattr__(self, "payload", freeze_json(self.payload))

    def __hash__(self) -> int:
        return hash(self.raw)

    # --- Aliases ------------------------------------------------------------

    @property
    def body(self) -> Mapping[str, Any]:
        return self.payload

    @property
    def string(self) -> str:
        return self.raw

    # --- Claim lookup -------------------------------------------------------

    def claim(self, name: str) -> Claim:
        """Return a claim of the payload by its name."""
        return Claim(self.payload.get(name, ABSENT))

    def header_claim(self, name: str) -> Claim:
        """Return a parameter of the header by its name."""
        return Claim(self.header.get(name, ABSENT))

    def __getitem__(self, name: str) -> Claim:
        return self.claim(name)

    # --- Registered claims --------------------------------------------------

    @property
    def expires_at(self) -> Optional[datetime]:
        return self.claim(RegisteredClaim.EXPIRES_AT.value).as_date()

    @property
    def issuer(self) -> Optional[str]:
        return self.claim(RegisteredClaim.ISSUER.value).as_string()

    @property
    def subject(self) -> Optional[str]:
        return self.claim(RegisteredClaim.SUBJECT.value).as_string()

    @property
    def audience(self) -> Optional[List[str]]:
        return self.claim(RegisteredClaim.AUDIENCE.value).as_array_of_strings()

    @property
    def issued_at(self) -> Optional[datetime]:
        return self.claim(RegisteredClaim.ISSUED_AT.value).as_date()

    @property
    def not_before(self) -> Optional[datetime]:
        return self.claim(RegisteredClaim.NOT_BEFORE.value).as_date()

    @property
    def identifier(self) -> Optional[str]:
        return self.claim(RegisteredClaim.IDENTIFIER.value).as_string()

    def registered_claims(self) -> Dict[str, Any]:
        """Registered claims present in the payload, keyed by claim name."""
        values = {
            RegisteredClaim.EXPIRES_AT: self.expires_at,
            RegisteredClaim.ISSUER: self.issuer,
            RegisteredClaim.SUBJECT: self.subject,
            RegisteredClaim.AUDIENCE: self.audience,
            RegisteredClaim.ISSUED_AT: self.issued_at,
            RegisteredClaim.NOT_BEFORE: self.not_before,
            RegisteredClaim.IDENTIFIER: self.identifier,
        }
        return {key.value: value for key, value in values.items() if value is not None}

    # --- Header shortcuts ---------------------------------------------------

    @property
    def algorithm(self) -> Optional[str]:
        return self.header_claim(HeaderParameter.ALGORITHM.value).as_string()

    @property
    def token_type(self) -> Optional[str]:
        return self.header_claim(HeaderParameter.TOKEN_TYPE.value).as_string()

    @property
    def key_id(self) -> Optional[str]:
        return self.header_claim(HeaderParameter.KEY_ID.value).as_string()

    @property
    def is_unsigned(self) -> bool:
        alg = self.algorithm
        return self.signature is None or (
            alg is not None and alg.lower() == UNSIGNED_ALGORITHM
        )

    # --- Time checks --------------------------------------------------------

    def _now(self, now: Optional[datetime]) -> datetime:
        if now is not None:
            return now
        if self.clock is not None:
            return self.clock.now()
        return datetime.now(timezone.utc)

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """
        Check the `exp` claim against `now` (or the injected clock).

        A token without an `exp` claim is never considered expired.
        """
        expires_at = self.expires_at
        if expires_at is None:
            return False
        return expires_at <= self._now(now)

    @property
    def expired(self) -> bool:
        return self.is_expired()

    def expires_in(self, now: Optional[datetime] = None) -> Optional[timedelta]:
        """Time left until `exp`, negative once expired, None without `exp`."""
        expires_at = self.expires_at
        if expires_at is None:
            return None
        return expires_at - self._now(now)

    def is_active(self, now: Optional[datetime] = None) -> bool:
        current = self._now(now)
        if self.is_expired(current):
            return False
        not_before = self.not_before
        return not_before is None or not_before <= current
