"""
Certificate validity window.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _from_timestamp(timestamp: int) -> datetime:
    """Convert epoch seconds to UTC, falling back to the epoch when out of range."""
    try:
        return datetime.fromtimestamp(timestamp, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return EPOCH


@dataclass(frozen=True)
class CertificateValidity:
    """
    Normalized ``[begin, end]`` validity interval.

    ``begin <= end`` always holds: the two raw bounds are ordered at
    construction, so a certificate encoded with reversed dates still yields
    a well-formed interval.
    """

    begin: datetime
    end: datetime

    @classmethod
    def from_timestamps(cls, begin: int, end: int) -> "CertificateValidity":
        """
        Build an interval from two epoch-second values in either order.

        Args:
            begin: Raw not-before timestamp
            end: Raw not-after timestamp

        Returns:
            CertificateValidity with the earlier value as ``begin``
        """
        first = _from_timestamp(min(begin, end))
        second = _from_timestamp(max(begin, end))
        # Out-of-range fallback can invert the pair
        return cls(begin=min(first, second), end=max(first, second))

    @property
    def timestamp_begin(self) -> int:
        return int(self.begin.timestamp())

    @property
    def time_begin(self) -> datetime:
        return self.begin

    @property
    def timestamp_end(self) -> int:
        return int(self.end.timestamp())

    @property
    def time_end(self) -> datetime:
        return self.end

    def is_within_valid_time(self, now: Optional[datetime] = None) -> bool:
        """
        Check whether ``now`` falls strictly inside the interval.

        Without ``now`` the current wall-clock time is read on every call, so
        repeated calls on the same value may give different answers.

        Args:
            now: Instant to test (timezone-aware), defaults to the current time

        Returns:
            True if ``begin < now < end``
        """
        if now is None:
            now = datetime.now(timezone.utc)
        return self.end > now and self.begin < now
