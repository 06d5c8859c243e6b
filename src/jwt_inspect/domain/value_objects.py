# src/jwt_inspect/domain/value_objects.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, List, Mapping, Optional


class _Absent:
    """Marker for a claim that is not present in the token."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT: Any = _Absent()


# --- JSON helpers ----------------------------------------------------------


def _is_number(value: Any) -> bool:
    # bool is a subclass of int, but JSON keeps them apart
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def freeze_json(value: Any) -> Any:
    """
    Deep read-only copy of a parsed JSON value.

    Objects become ``MappingProxyType`` and arrays become tuples. A mapping
    that is already a ``MappingProxyType`` is taken as frozen.
    """
    if isinstance(value, MappingProxyType):
        return value
    if isinstance(value, Mapping):
        return MappingProxyType({k: freeze_json(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze_json(v) for v in value)
    return value


def thaw_json(value: Any) -> Any:
    """Plain dict/list copy of a frozen JSON value, ready for ``json.dumps``."""
    if isinstance(value, Mapping):
        return {k: thaw_json(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [thaw_json(v) for v in value]
    return value


# --- Claim value object ----------------------------------------------------


@dataclass(frozen=True, slots=True)
class Claim:
    """
    Read-only view over a single claim value of a decoded token.

    Every ``as_*`` accessor is independent: a value of the wrong shape
    yields ``None`` instead of raising, so callers can probe optional or
    untrusted claims freely. An absent claim and a JSON ``null`` both
    coerce to ``None``; use ``is_present`` / ``is_null`` to tell them apart.
    """

    raw_value: Any = ABSENT

    @property
    def is_present(self) -> bool:
        return self.raw_value is not ABSENT

    @property
    def is_null(self) -> bool:
        return self.raw_value is None

    @property
    def value(self) -> Any:
        """The underlying JSON value, or None when the claim is absent."""
        return None if self.raw_value is ABSENT else self.raw_value

    def as_string(self) -> Optional[str]:
        if isinstance(self.raw_value, str):
            return self.raw_value
        return None

    def as_array_of_strings(self) -> Optional[List[str]]:
        """
        Strings of a JSON array, or a single string as a one-element list.

        The single-string form follows the `aud` claim convention.
        """
        value = self.raw_value
        if isinstance(value, str):
            return [value]
        if isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
            return list(value)
        return None

    def as_int(self) -> Optional[int]:
        """
        Integer value of a JSON number.

        Numbers with a fractional part are rejected rather than truncated.
        """
        value = self.raw_value
        if not _is_number(value):
            return None
        if isinstance(value, int):
            return value
        if value.is_integer():
            return int(value)
        return None

    def as_double(self) -> Optional[float]:
        value = self.raw_value
        if not _is_number(value):
            return None
        try:
            return float(value)
        except OverflowError:
            return None

    def as_date(self) -> Optional[datetime]:
        """NumericDate (seconds since the epoch) as an aware UTC datetime."""
        value = self.raw_value
        if not _is_number(value):
            return None
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None

    def as_bool(self) -> Optional[bool]:
        if isinstance(self.raw_value, bool):
            return self.raw_value
        return None
