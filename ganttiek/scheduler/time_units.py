"""Time Units - Granularity used for durations, lag and window snapping."""

from datetime import datetime, timedelta
from enum import Enum

QUARTER_HOURS = 6


class TimeUnit(str, Enum):
    """Scheduling granularity.

    DAY keeps instants as given and counts whole days between them.
    QUARTER_DAY snaps instants to 6-hour boundaries (00, 06, 12, 18).
    """

    DAY = "day"
    QUARTER_DAY = "quarter_day"

    @property
    def step(self) -> timedelta:
        """Length of one unit."""
        if self is TimeUnit.QUARTER_DAY:
            return timedelta(hours=QUARTER_HOURS)
        return timedelta(days=1)

    def floor(self, instant: datetime) -> datetime:
        """Snap an instant down to the previous unit boundary."""
        if self is TimeUnit.DAY:
            return instant
        floored_hour = (instant.hour // QUARTER_HOURS) * QUARTER_HOURS
        return instant.replace(hour=floored_hour, minute=0, second=0, microsecond=0)

    def ceil(self, instant: datetime) -> datetime:
        """Snap an instant up to the next unit boundary (no-op on a boundary)."""
        down = self.floor(instant)
        if down == instant:
            return down
        return down + self.step

    def between(self, start: datetime, end: datetime) -> int:
        """Whole units from start to end; zero when end is not after start."""
        if end <= start:
            return 0
        return (end - start) // self.step

    def add(self, instant: datetime, units: int) -> datetime:
        """Move an instant by a number of units."""
        return instant + self.step * units
