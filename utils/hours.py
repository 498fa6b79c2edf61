"""
Operating Hours Utilities
Open/closed status of venues from their weekly schedule
"""

import re
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from config import (
    CLOSING_SOON_MINUTES,
    SCAN_AHEAD_DAYS,
    get_logger,
    to_local_time,
)
from models import DAY_KEYS, DayHours, DayHoursDisplay, OpenStatus, WeeklyHours

logger = get_logger(__name__)

MINUTES_PER_DAY = 24 * 60
DAY_LABELS = ['Sun', 'Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat']

_CLOCK_RE = re.compile(r'^\s*(\d{1,2}):(\d{2})\s*$')

# day index (0 = Sunday) -> (open_minute, close_minute), or None when closed
Schedule = Dict[int, Optional[Tuple[int, int]]]


def parse_clock(value) -> Optional[int]:
    """
    Parse a 24-hour "HH:MM" string into minutes after midnight.

    "24:00" is accepted as end of day. Anything else malformed gives None.
    """
    if not isinstance(value, str):
        return None
    match = _CLOCK_RE.match(value)
    if not match:
        return None
    hour, minute = int(match.group(1)), int(match.group(2))
    if minute > 59 or hour > 24 or (hour == 24 and minute):
        return None
    return hour * 60 + minute


def format_minutes12(minutes: int) -> str:
    """
    Format minutes after midnight as a compact 12-hour clock.

    Examples: 1080 → "6pm", 570 → "9:30am", 0 → "12am"
    """
    minutes %= MINUTES_PER_DAY
    hour, minute = divmod(minutes, 60)
    ampm = 'pm' if hour >= 12 else 'am'
    hour12 = hour % 12 or 12
    if minute:
        return f"{hour12}:{minute:02d}{ampm}"
    return f"{hour12}{ampm}"


def format_time12(value: str) -> Optional[str]:
    """Format "HH:MM" as a 12-hour clock string; None if malformed"""
    minutes = parse_clock(value)
    if minutes is None:
        return None
    return format_minutes12(minutes)


def _parse_day_entry(entry) -> Optional[Tuple[int, int]]:
    """(open, close) minutes for one day entry, None for closed or malformed"""
    if entry is None or entry == 'closed':
        return None
    if isinstance(entry, DayHours):
        return parse_clock(entry.open), parse_clock(entry.close)
    if isinstance(entry, dict):
        open_min = parse_clock(entry.get('open'))
        close_min = parse_clock(entry.get('close'))
        if open_min is not None and close_min is not None:
            return open_min, close_min
    if isinstance(entry, str) and entry.strip().lower() == 'closed':
        return None
    logger.debug(f"Ignoring malformed day entry: {entry!r}")
    return None


def normalize_hours(hours) -> Optional[Schedule]:
    """
    Turn a WeeklyHours model or a raw hours dict into a schedule.

    Args:
        hours: WeeklyHours, dict like {'mon': {'open': '11:00', 'close': '22:00'},
            'sun': 'closed'}, or None

    Returns:
        Schedule keyed by day index (0 = Sunday), or None when the hours are
        unknown (missing, wrong type, or no recognisable day keys)
    """
    if hours is None:
        return None

    if isinstance(hours, WeeklyHours):
        return {i: _parse_day_entry(hours.entry(i)) for i in range(7)}

    if not isinstance(hours, dict):
        logger.debug(f"Unsupported hours type: {type(hours).__name__}")
        return None

    schedule: Schedule = {}
    for key, entry in hours.items():
        short = str(key).strip().lower()[:3]
        if short in DAY_KEYS:
            schedule[DAY_KEYS.index(short)] = _parse_day_entry(entry)

    if not schedule:
        return None
    return schedule


def _day_index(local: datetime) -> int:
    """0 = Sunday ... 6 = Saturday"""
    return (local.weekday() + 1) % 7


def _covering_close(schedule: Schedule, day: int, minute: int) -> Tuple[bool, Optional[int]]:
    """
    Check whether the venue is open at (day, minute).

    Returns:
        (is_open, close) where close is the closing boundary in minutes from
        today's midnight (may exceed a day for intervals wrapping past
        midnight), or None for round-the-clock days
    """
    # Yesterday's interval carried past midnight
    yesterday = schedule.get((day - 1) % 7)
    if yesterday and yesterday[1] < yesterday[0] and minute < yesterday[1]:
        return True, yesterday[1]

    today = schedule.get(day)
    if not today:
        return False, None

    open_min, close_min = today

    if open_min == close_min:
        return True, None

    if close_min > open_min:
        if open_min <= minute < close_min:
            return True, close_min
        return False, None

    # Wraps past midnight (e.g. 22:00 → 02:00)
    if minute >= open_min:
        return True, close_min + MINUTES_PER_DAY
    if minute < close_min:
        return True, close_min
    return False, None


def _find_next_opening(schedule: Schedule, day: int) -> Tuple[Optional[int], Optional[int]]:
    """
    Scan forward day by day for the next opening.

    Returns:
        (days_ahead, open_minute), or (None, None) if no open day within a week
    """
    for offset in range(1, SCAN_AHEAD_DAYS + 1):
        entry = schedule.get((day + offset) % 7)
        if entry:
            return offset, entry[0]
    return None, None


def _day_label(day: int, offset: int) -> str:
    if offset == 0:
        return 'today'
    if offset == 1:
        return 'tomorrow'
    return DAY_LABELS[(day + offset) % 7]


def get_open_status(hours, now: Optional[datetime] = None, tz=None) -> OpenStatus:
    """
    Determine whether a venue is open at an instant.

    Args:
        hours: WeeklyHours, raw hours dict, or None
        now: Instant to evaluate (defaults to the current time)
        tz: Optional timezone overriding the dataset's civil clock

    Returns:
        OpenStatus. Unknown hours give is_open=False with no label, never
        "Closed".
    """
    schedule = normalize_hours(hours)
    if schedule is None:
        return OpenStatus(is_open=False, label=None)

    local = to_local_time(now, tz)
    day = _day_index(local)
    minute = local.hour * 60 + local.minute

    is_open, close = _covering_close(schedule, day, minute)

    if is_open:
        if close is None:
            return OpenStatus(is_open=True, label='Open')

        minutes_left = close - minute
        closing_soon = minutes_left <= CLOSING_SOON_MINUTES
        return OpenStatus(
            is_open=True,
            label='Closing soon' if closing_soon else 'Open',
            closes_at=format_minutes12(close),
            minutes_until_close=minutes_left,
        )

    # Closed - opening later today?
    today = schedule.get(day)
    if today and minute < today[0]:
        return OpenStatus(
            is_open=False,
            label='Closed',
            opens_at=format_minutes12(today[0]),
            opens_on='today',
        )

    offset, open_min = _find_next_opening(schedule, day)
    if offset is None:
        return OpenStatus(is_open=False, label='Closed')

    return OpenStatus(
        is_open=False,
        label='Closed',
        opens_at=format_minutes12(open_min),
        opens_on=_day_label(day, offset),
    )


def is_open_now(hours, now: Optional[datetime] = None, tz=None) -> bool:
    """Simple boolean check if a venue is open at an instant"""
    return get_open_status(hours, now, tz).is_open


def format_status_line(status: Optional[OpenStatus]) -> str:
    """
    One-line summary for cards and info windows.

    Examples: "Open · closes 10pm", "Closing soon · closes 10pm",
    "Closed · opens tomorrow 11am", "" for unknown
    """
    if status is None or not status.label:
        return ""
    if status.is_open:
        if status.closes_at:
            return f"{status.label} · closes {status.closes_at}"
        return status.label
    if status.opens_at:
        return f"{status.label} · opens {status.opens_on} {status.opens_at}"
    return status.label


def format_full_week_hours(hours, now: Optional[datetime] = None, tz=None) -> List[DayHoursDisplay]:
    """
    Format a weekly schedule as seven display rows, Sunday first.

    Args:
        hours: WeeklyHours, raw hours dict, or None
        now: Instant used to flag today's row

    Returns:
        List of DayHoursDisplay; empty when hours are unknown
    """
    schedule = normalize_hours(hours)
    if schedule is None:
        return []

    today_idx = _day_index(to_local_time(now, tz))
    rows = []
    for idx, label in enumerate(DAY_LABELS):
        entry = schedule.get(idx)
        if not entry:
            text = 'Closed'
        elif entry[0] == entry[1]:
            text = 'Open 24 hours'
        else:
            text = f"{format_minutes12(entry[0])} – {format_minutes12(entry[1])}"
        rows.append(DayHoursDisplay(day=label, hours=text, is_today=idx == today_idx))
    return rows
