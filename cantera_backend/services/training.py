# training.py
# Expands a weekly training recurrence into concrete sessions.

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Iterable, List, Optional

import pytz

from cantera_backend.core.config import CLUB_TIMEZONE


@dataclass
class ExpandedSession:
    starts_at: datetime
    ends_at: Optional[datetime] = None


# === PARSING HELPERS ===

def parse_date_only(value: Optional[str]) -> Optional[date]:
    """Accepts "YYYY-MM-DD" or a full ISO timestamp (only the date part is used)."""
    if not value:
        return None
    try:
        return date.fromisoformat(str(value).strip().split("T")[0])
    except ValueError:
        return None


def parse_clock_time(value: Optional[str]) -> Optional[time]:
    """Parses "HH:MM" (seconds are tolerated and ignored)."""
    if not value:
        return None
    parts = str(value).strip().split(":")
    if len(parts) < 2:
        return None
    try:
        hours, minutes = int(parts[0]), int(parts[1])
        return time(hours, minutes)
    except ValueError:
        return None


def js_weekday(day: date) -> int:
    """Weekday with 0=Sunday .. 6=Saturday."""
    return (day.weekday() + 1) % 7


def normalize_weekdays(days_of_week: Iterable[int]) -> List[int]:
    normalized = []
    for day in days_of_week:
        if 0 <= day <= 6 and day not in normalized:
            normalized.append(day)
    return normalized


def combine_local(day: date, clock: time, timezone_offset: Optional[int] = None) -> datetime:
    """
    Build the club-local wall time for a day and a clock time.
    With a timezone offset (minutes, UTC = local + offset) the clock time is
    read in that offset and converted to the club timezone.
    """
    wall = datetime.combine(day, clock)
    if timezone_offset is None:
        return wall

    utc_moment = pytz.utc.localize(wall + timedelta(minutes=timezone_offset))
    club_tz = pytz.timezone(CLUB_TIMEZONE)
    return utc_moment.astimezone(club_tz).replace(tzinfo=None)


# === EXPANSION ===

def expand_sessions(
    start_date: str,
    end_date: Optional[str],
    days_of_week: Iterable[int],
    start_time: str,
    end_time: Optional[str] = None,
    timezone_offset: Optional[int] = None,
) -> List[ExpandedSession]:
    """
    Walk every day from start_date to end_date (inclusive) and emit a session
    on each requested weekday.

    The end timestamp is kept only when it falls strictly after the start.
    Returns an empty list when nothing can be generated (unparseable dates,
    no valid weekdays, start after end); callers treat that as bad input.
    """
    start = parse_date_only(start_date)
    end = parse_date_only(end_date or start_date)
    if start is None or end is None:
        return []

    weekdays = normalize_weekdays(days_of_week)
    if not weekdays:
        return []

    start_clock = parse_clock_time(start_time)
    if start_clock is None:
        return []
    end_clock = parse_clock_time(end_time)

    sessions: List[ExpandedSession] = []
    cursor = start
    while cursor <= end:
        if js_weekday(cursor) in weekdays:
            starts_at = combine_local(cursor, start_clock, timezone_offset)
            ends_at = None
            if end_clock is not None:
                candidate = combine_local(cursor, end_clock, timezone_offset)
                if candidate > starts_at:
                    ends_at = candidate
            sessions.append(ExpandedSession(starts_at=starts_at, ends_at=ends_at))
        cursor += timedelta(days=1)

    return sessions
