"""Time window evaluation for authorization records."""

import re
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo

from door_access.domain.records import Reservation, TemporaryAccess

DEFAULT_GRACE = timedelta(minutes=30)

_CLOCK_PATTERN = re.compile(r"\d{2}:\d{2}(:\d{2}(\.\d+)?)?")


@dataclass(frozen=True)
class TimeWindow:
    """Closed interval of instants during which access is permitted."""

    start: datetime
    end: datetime

    @property
    def is_empty(self) -> bool:
        return self.end < self.start

    def contains(self, now: datetime) -> bool:
        """Return True if `now` lies inside the window, bounds included."""
        if self.is_empty:
            return False
        return self.start <= now <= self.end


def reservation_window(
    reservation: Reservation, tz: ZoneInfo, grace: timedelta = DEFAULT_GRACE
) -> TimeWindow | None:
    """Return the grace-extended window for a reservation.

    The booking's wall-clock times are interpreted in `tz`. An end time earlier
    than the start time means the booking runs past midnight, so the end moves
    to the following day before the grace period is applied. Returns None when
    the stored date or times cannot be parsed.
    """
    try:
        day = _parse_day(reservation.date)
        start_clock = _parse_clock(reservation.start_time)
        end_clock = _parse_clock(reservation.end_time)
    except ValueError:
        return None
    start = datetime.combine(day, start_clock, tzinfo=tz)
    end = datetime.combine(day, end_clock, tzinfo=tz)
    if end < start:
        end = datetime.combine(day + timedelta(days=1), end_clock, tzinfo=tz)
    return TimeWindow(start=start - grace, end=end + grace)


def temporary_access_window(
    access: TemporaryAccess, tz: ZoneInfo
) -> TimeWindow | None:
    """Return the window for a temporary access grant, or None if malformed."""
    try:
        start = _parse_instant(access.valid_from, tz)
        end = _parse_instant(access.valid_until, tz)
    except ValueError:
        return None
    return TimeWindow(start=start, end=end)


def is_within_window(window: TimeWindow | None, now: datetime) -> bool:
    """Return True if `now` is inside `window`; a missing window never passes."""
    if window is None:
        return False
    return window.contains(now)


def _parse_day(value: str) -> date:
    if not isinstance(value, str):
        raise ValueError(f"Expected YYYY-MM-DD, got {value!r}")
    return date.fromisoformat(value)


def _parse_clock(value: str) -> time:
    if not isinstance(value, str) or not _CLOCK_PATTERN.fullmatch(value):
        raise ValueError(f"Expected HH:MM, got {value!r}")
    return time.fromisoformat(value)


def _parse_instant(value: str, tz: ZoneInfo) -> datetime:
    if not isinstance(value, str):
        raise ValueError(f"Expected ISO timestamp, got {value!r}")
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=tz)
    return parsed
