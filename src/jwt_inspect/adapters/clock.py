from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from ..domain.ports import Clock


class SystemClock(Clock):
    """Wall-clock time in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


@dataclass(frozen=True, slots=True)
class FixedClock(Clock):
    """
    Clock frozen at a given instant.

    Handy for tests and for answering "was this token expired at ...?".
    """
    instant: datetime

    def __post_init__(self) -> None:
        if self.instant.tzinfo is None:
            object.__setattr__(self, "instant", self.instant.replace(tzinfo=timezone.utc))

    @classmethod
    def at_timestamp(cls, seconds: float) -> "FixedClock":
        return cls(datetime.fromtimestamp(seconds, tz=timezone.utc))

    def now(self) -> datetime:
        return self.instant
