"""Clock-time parsing, overnight placement, calendar-day keys and display rounding shared by sleep and hydration."""

import enum
import math
from datetime import date, datetime, timedelta, tzinfo

MINUTES_PER_DAY = 24 * 60

# Sunday-first, matching the weekday index used by the dashboard (0 = Sunday)
DAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")


class ClockRole(str, enum.Enum):
    SLEEP = "sleep"
    WAKE = "wake"


# Hours before which a clock time belongs to the next calendar day, per role
_NEXT_DAY_BEFORE_HOUR = {
    ClockRole.SLEEP: 6,
    ClockRole.WAKE: 12,
}


def parse_clock_time(value: str) -> int:
    """'HH:MM' (or 'HH:MM:SS') -> minutes since midnight. Seconds are ignored."""
    parts = value.split(":")
    return int(parts[0]) * 60 + int(parts[1])


def to_absolute_minutes(value: str, role: ClockRole) -> int:
    """
    Place a clock time on a continuous overnight timeline starting the evening before.
    Sleep-type times before 06:00 and wake-type times before 12:00 get +24h,
    so 23:00 -> 1380 and a 07:00 wake -> 1860.
    """
    minutes = parse_clock_time(value)
    if minutes // 60 < _NEXT_DAY_BEFORE_HOUR[ClockRole(role)]:
        minutes += MINUTES_PER_DAY
    return minutes


def to_local(ts: datetime, tz: tzinfo | None = None) -> datetime:
    """Convert an aware timestamp to tz, or to the system local zone when tz is None.
    Naive timestamps are already wall-clock time and pass through."""
    if ts.tzinfo is None:
        return ts
    return ts.astimezone(tz)


def wall_clock(ts: datetime, tz: tzinfo | None = None) -> datetime:
    """Naive local wall-clock time of ts, so naive and aware timestamps sort together."""
    return to_local(ts, tz).replace(tzinfo=None)


def date_key(ts: datetime, tz: tzinfo | None = None) -> date:
    """Calendar day of ts in local time; two timestamps share a key iff they fall on the same day."""
    return to_local(ts, tz).date()


def today(tz: tzinfo | None = None) -> date:
    if tz is None:
        return date.today()
    return datetime.now(tz).date()


def day_of_week(day: date) -> int:
    """0 = Sunday ... 6 = Saturday."""
    return day.isoweekday() % 7


def is_weekend(day: date) -> bool:
    return day_of_week(day) in (0, 6)


def window_start(as_of: date, days: int) -> date:
    """First day of the trailing window of `days` calendar days ending at as_of (inclusive)."""
    return as_of - timedelta(days=days - 1)


def round_half_up(x: float) -> int:
    """Halves round up (2.5 -> 3, -2.5 -> -2), unlike round()'s banker's rounding."""
    return math.floor(x + 0.5)
