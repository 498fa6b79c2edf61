"""
Data Freshness Utilities
Buckets how recently a listing was verified or updated
"""

import math
from datetime import datetime, timezone
from typing import Optional

import pandas as pd

from config import FRESH_MAX_DAYS, STALE_AFTER_DAYS, get_logger, localize
from models import Freshness, FreshnessLevel

logger = get_logger(__name__)

SECONDS_PER_DAY = 86400

# Badge/sort order, freshest first
FRESHNESS_RANK = {
    FreshnessLevel.FRESH: 0,
    FreshnessLevel.AGING: 1,
    FreshnessLevel.STALE: 2,
    FreshnessLevel.UNKNOWN: 3,
}


def parse_timestamp(value) -> Optional[datetime]:
    """
    Parse a datetime, date or ISO string into an aware UTC datetime.

    Naive values are taken as UTC. Empty or unparsable values give None.
    """
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    try:
        ts = pd.to_datetime(value, errors='coerce', utc=True)
    except (TypeError, ValueError, OverflowError) as e:
        logger.debug(f"Unparsable timestamp {value!r}: {e}")
        return None
    if ts is None or pd.isna(ts):
        return None
    return ts.to_pydatetime()


def _age_label(verb: str, days: int) -> str:
    if days == 0:
        return f"{verb} today"
    if days == 1:
        return f"{verb} 1 day ago"
    return f"{verb} {days} days ago"


def classify_freshness(last_verified_date=None, last_update_date=None,
                       now: Optional[datetime] = None, tz=None) -> Freshness:
    """
    Classify the recency of a listing's data.

    The verified timestamp takes precedence; the update timestamp is the
    fallback. Age is counted in whole days.

    Args:
        last_verified_date: When the listing was last verified
        last_update_date: When the listing was last updated
        now: Reference instant (defaults to the current time); naive values
            are local wall-clock time, like everywhere else in the engine
        tz: Optional timezone overriding SPOT_TIMEZONE for a naive now

    Returns:
        Freshness with level fresh (< 14 days), aging (14-45 days),
        stale (> 45 days) or unknown (no usable timestamp)
    """
    verified = parse_timestamp(last_verified_date)
    updated = parse_timestamp(last_update_date)

    if verified is not None:
        stamp, verb = verified, "Verified"
    elif updated is not None:
        stamp, verb = updated, "Updated"
    else:
        return Freshness(level=FreshnessLevel.UNKNOWN, label="Unverified", days_ago=None)

    if isinstance(now, datetime):
        now = localize(now, tz)
    reference = parse_timestamp(now) if now is not None else datetime.now(timezone.utc)
    if reference is None:
        reference = datetime.now(timezone.utc)

    # Future timestamps count as today
    days = max(0, math.floor((reference - stamp).total_seconds() / SECONDS_PER_DAY))

    if days < FRESH_MAX_DAYS:
        level = FreshnessLevel.FRESH
    elif days <= STALE_AFTER_DAYS:
        level = FreshnessLevel.AGING
    else:
        level = FreshnessLevel.STALE

    return Freshness(level=level, label=_age_label(verb, days), days_ago=days)
