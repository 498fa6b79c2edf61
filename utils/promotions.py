"""
Promotion Window Utilities
Lexical parsing of promotion descriptors like "4pm-6pm • Monday-Friday"
and "is this promotion active right now" checks
"""

import re
from dataclasses import dataclass
from datetime import datetime
from typing import FrozenSet, Iterable, List, Optional, Tuple

from config import SCAN_AHEAD_DAYS, get_logger, to_local_time
from models import PromotionLine

from .text import shorten

logger = get_logger(__name__)

MINUTES_PER_DAY = 24 * 60
EVERY_DAY = frozenset(range(7))

# Segment separators between the time part and the day part
_SEGMENT_SPLIT_RE = re.compile(r'\s*[•·|;\n]\s*')

_TIME_RANGE_RE = re.compile(
    r'(?<![\d:])(\d{1,2}(?::\d{2})?)\s*(am|pm)?\s*(?:-|–|—|\bto\b)\s*(\d{1,2}(?::\d{2})?)\s*(am|pm)\b',
    re.IGNORECASE,
)
_ALL_DAY_RE = re.compile(r'\ball[\s-]*day\b', re.IGNORECASE)
_SINGLE_TIME_RE = re.compile(r'(\d{1,2}(?::\d{2})?)\s*(am|pm)\b', re.IGNORECASE)

# 0 = Sunday
_DAY_NAMES = {
    'sunday': 0, 'sun': 0,
    'monday': 1, 'mon': 1,
    'tuesday': 2, 'tues': 2, 'tue': 2,
    'wednesday': 3, 'weds': 3, 'wed': 3,
    'thursday': 4, 'thurs': 4, 'thur': 4, 'thu': 4,
    'friday': 5, 'fri': 5,
    'saturday': 6, 'sat': 6,
}
_DAY_GROUPS = {
    'daily': EVERY_DAY,
    'everyday': EVERY_DAY,
    'every day': EVERY_DAY,
    'weekday': frozenset({1, 2, 3, 4, 5}),
    'weekend': frozenset({0, 6}),
}

# Longest names first so "thursday" wins over "thu"
_DAY_NAME_PATTERN = '|'.join(sorted(_DAY_NAMES, key=len, reverse=True))
_DAY_RANGE_RE = re.compile(
    rf'\b({_DAY_NAME_PATTERN})s?\.?\s*(?:-|–|—|\bto\b|\bthrough\b|\bthru\b)\s*({_DAY_NAME_PATTERN})s?\b',
    re.IGNORECASE,
)
_DAY_TOKEN_RE = re.compile(
    rf'\b(every\s+day|everyday|daily|weekdays?|weekends?|{_DAY_NAME_PATTERN})s?\b',
    re.IGNORECASE,
)

_LINE_LABEL_RE = re.compile(r'^\s*\[([^\]]+)\]\s*(.*)$', re.DOTALL)


@dataclass(frozen=True)
class PromotionClause:
    """
    One recurring window: [start, end) minutes on the given weekdays.

    end < start means the window wraps past midnight into the next day.
    """
    start: int
    end: int
    days: FrozenSet[int]

    @property
    def wraps(self) -> bool:
        return self.end < self.start


def _to_minutes(time_str: str, ampm: str) -> Optional[int]:
    """'4' + 'pm' → 960, '9:30' + 'am' → 570; None if out of range"""
    if ':' in time_str:
        hour_str, min_str = time_str.split(':')
        hour, minute = int(hour_str), int(min_str)
    else:
        hour, minute = int(time_str), 0

    if not (1 <= hour <= 12) or minute > 59:
        return None

    ampm = ampm.lower()
    if ampm == 'pm' and hour != 12:
        hour += 12
    if ampm == 'am' and hour == 12:
        hour = 0
    return hour * 60 + minute


def _day_span(start: int, end: int) -> FrozenSet[int]:
    """Inclusive weekday range, wrapping through the weekend ("Fri-Sun")"""
    days = [start]
    current = start
    while current != end:
        current = (current + 1) % 7
        days.append(current)
    return frozenset(days)


def parse_days(text: str) -> Optional[FrozenSet[int]]:
    """
    Extract the weekdays mentioned in a text fragment.

    Handles names and abbreviations, ranges ("Monday-Friday", "Fri-Sun"),
    lists ("Fri & Sat") and Daily/Everyday/Weekday(s)/Weekend(s).

    Returns:
        Set of day indexes (0 = Sunday), or None when no weekday token is found
    """
    if not text:
        return None

    days = set()
    remainder = text

    for match in _DAY_RANGE_RE.finditer(text):
        start = _DAY_NAMES[match.group(1).lower()]
        end = _DAY_NAMES[match.group(2).lower()]
        days |= _day_span(start, end)
    remainder = _DAY_RANGE_RE.sub(' ', remainder)

    for match in _DAY_TOKEN_RE.finditer(remainder):
        token = re.sub(r'\s+', ' ', match.group(1).lower())
        if token in _DAY_NAMES:
            days.add(_DAY_NAMES[token])
        else:
            days |= _DAY_GROUPS[token.rstrip('s') if token.startswith('week') else token]

    return frozenset(days) if days else None


def _parse_time_ranges(segment: str) -> List[Tuple[int, int]]:
    """All time ranges in a segment as (start, end) minutes"""
    if _ALL_DAY_RE.search(segment):
        return [(0, MINUTES_PER_DAY)]

    ranges = []
    for match in _TIME_RANGE_RE.finditer(segment):
        end = _to_minutes(match.group(3), match.group(4))
        if match.group(2):
            start = _to_minutes(match.group(1), match.group(2))
        else:
            # Bare start ("4-6pm", "11-2pm", "10-2am"): shortest window wins
            candidates = [_to_minutes(match.group(1), ampm) for ampm in ('am', 'pm')]
            candidates = [c for c in candidates if c is not None and end is not None and c != end]
            start = min(candidates, key=lambda c: (end - c) % MINUTES_PER_DAY) if candidates else None
        if start is None or end is None:
            continue
        ranges.append((start, end))
    return ranges


def parse_promotion_window(descriptor: Optional[str]) -> List[PromotionClause]:
    """
    Parse a promotion descriptor into recurring clauses.

    This is the only place the descriptor grammar lives. The descriptor is
    split into segments on bullets; each time range becomes a clause, and
    weekday tokens attach to the clauses of their own segment or, for
    day-only segments, to the preceding clauses still lacking days (or the
    following clause when days come first). Clauses left without days use
    every weekday mentioned anywhere, or every day when none is.

    Args:
        descriptor: e.g. "4pm-6pm • Monday-Friday",
            "Mon-Thu 4-7pm • Fri 3pm-6pm", "All day • Sunday"

    Returns:
        List of PromotionClause; empty when no time range can be found
    """
    if not descriptor or not isinstance(descriptor, str):
        return []

    segments = [s for s in _SEGMENT_SPLIT_RE.split(descriptor) if s.strip()]

    pending: List[List] = []   # [start, end, days-or-None]
    unattached_days = None     # day-only segment waiting for a clause
    all_days = set()

    for segment in segments:
        ranges = _parse_time_ranges(segment)
        days = parse_days(_TIME_RANGE_RE.sub(' ', segment))
        if days:
            all_days |= days

        if ranges:
            seg_days = days or unattached_days
            unattached_days = None
            for start, end in ranges:
                pending.append([start, end, seg_days])
        elif days:
            waiting = [c for c in pending if c[2] is None]
            if waiting:
                for clause in waiting:
                    clause[2] = days
            else:
                unattached_days = days

    if not pending:
        logger.debug(f"No time range in promotion descriptor: {shorten(descriptor)!r}")
        return []

    fallback = frozenset(all_days) if all_days else EVERY_DAY
    return [
        PromotionClause(start=start, end=end, days=days or fallback)
        for start, end, days in pending
    ]


def _clause_covers(clause: PromotionClause, day: int, minute: int) -> bool:
    """Whether a clause is running at (day, minute)"""
    if clause.start == clause.end:
        return False

    if not clause.wraps:
        return day in clause.days and clause.start <= minute < clause.end

    # Evening part today, or yesterday's window carried past midnight
    if day in clause.days and (minute >= clause.start or minute < clause.end):
        return True
    return ((day - 1) % 7) in clause.days and minute < clause.end


def _local_day_minute(now: Optional[datetime], tz) -> Tuple[int, int]:
    local = to_local_time(now, tz)
    return (local.weekday() + 1) % 7, local.hour * 60 + local.minute


def is_active_now(descriptor: Optional[str], now: Optional[datetime] = None, tz=None) -> bool:
    """
    Check whether a promotion window is running at an instant.

    Args:
        descriptor: Promotion descriptor, e.g. "4pm-6pm • Monday-Friday"
        now: Instant to evaluate (defaults to the current time)
        tz: Optional timezone overriding the dataset's civil clock

    Returns:
        True if any clause covers the instant. Unparseable descriptors are
        never active.
    """
    clauses = parse_promotion_window(descriptor)
    if not clauses:
        return False

    day, minute = _local_day_minute(now, tz)
    return any(_clause_covers(clause, day, minute) for clause in clauses)


def minutes_until_next_start(descriptor: Optional[str], now: Optional[datetime] = None,
                             tz=None) -> Optional[int]:
    """
    Minutes until the promotion next starts.

    Scans today and the following week. A window that already started today
    counts from its next occurrence.

    Returns:
        Smallest non-negative delta in minutes, or None if no clause can match
    """
    clauses = parse_promotion_window(descriptor)
    if not clauses:
        return None

    day, minute = _local_day_minute(now, tz)
    best = None

    for offset in range(0, SCAN_AHEAD_DAYS + 1):
        candidate_day = (day + offset) % 7
        for clause in clauses:
            if candidate_day not in clause.days:
                continue
            delta = offset * MINUTES_PER_DAY + clause.start - minute
            if delta >= 0 and (best is None or delta < best):
                best = delta
        if best is not None and best < (offset + 1) * MINUTES_PER_DAY - minute:
            break

    return best


def _clean_number(number: str) -> str:
    """'4:00' → '4', '04:30' → '4:30'"""
    number = re.sub(r':00$', '', number)
    return re.sub(r'^0+(\d)', r'\1', number)


def extract_compact_time(descriptor: Optional[str]) -> Optional[str]:
    """
    Short time label for list cards.

    Examples: "4pm-6pm • Monday-Friday" → "4-6pm", "11am-2pm" → "11am-2pm",
    "All day • Sunday" → "All day", "Starts 9pm" → "9pm"
    """
    if not descriptor or not isinstance(descriptor, str):
        return None

    first = _SEGMENT_SPLIT_RE.split(descriptor.strip())[0].split(',')[0]
    if _ALL_DAY_RE.search(first):
        return 'All day'

    match = _TIME_RANGE_RE.search(first)
    if match:
        start_num = _clean_number(match.group(1))
        start_ampm = (match.group(2) or '').lower()
        end_num = _clean_number(match.group(3))
        end_ampm = match.group(4).lower()
        if start_ampm and start_ampm != end_ampm:
            return f"{start_num}{start_ampm}-{end_num}{end_ampm}"
        return f"{start_num}-{end_num}{end_ampm}"

    match = _SINGLE_TIME_RE.search(first)
    if match:
        return f"{_clean_number(match.group(1))}{match.group(2).lower()}"

    return None


def parse_promotion_lines(lines: Optional[Iterable[str]]) -> List[PromotionLine]:
    """
    Split promotion lines into category label and text.

    "[Drinks] $5 wells" → PromotionLine(label="Drinks", text="$5 wells");
    unlabelled lines keep label None. Blank lines are dropped.
    """
    parsed = []
    for line in lines or []:
        if not isinstance(line, str) or not line.strip():
            continue
        match = _LINE_LABEL_RE.match(line)
        if match:
            parsed.append(PromotionLine(label=match.group(1).strip(), text=match.group(2).strip()))
        else:
            parsed.append(PromotionLine(label=None, text=line.strip()))
    return parsed
