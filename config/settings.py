"""
Configuration Settings for the Spot Availability Engine
Clock, thresholds, sentinels and data paths
"""

import os
from dotenv import load_dotenv
from pathlib import Path
import pytz
from datetime import datetime, timezone
from typing import Optional, Union

# ============================================
# LOAD .ENV FROM PROJECT ROOT
# ============================================

config_dir = Path(__file__).parent
project_root = config_dir.parent

env_path = project_root / '.env'
load_dotenv(dotenv_path=env_path)


# ============================================
# TIMEZONE CONFIGURATION
# ============================================
# Every venue in the dataset shares one civil clock
LOCAL_TZ_NAME = os.getenv("SPOT_TIMEZONE", "America/New_York")
LOCAL_TZ = pytz.timezone(LOCAL_TZ_NAME)


def resolve_timezone(tz: Optional[Union[str, object]] = None):
    """pytz timezone for a name or tz object; None gives SPOT_TIMEZONE"""
    if tz is None:
        return LOCAL_TZ
    if isinstance(tz, str):
        return pytz.timezone(tz)
    return tz


def get_local_now(tz=None) -> datetime:
    """Get current time in the dataset's timezone - works in Docker too"""
    utc_now = datetime.now(timezone.utc)
    return utc_now.astimezone(resolve_timezone(tz))


def localize(dt: datetime, tz=None) -> datetime:
    """Attach the local timezone to a naive wall-clock datetime; aware values pass through"""
    if dt.tzinfo is not None:
        return dt
    zone = resolve_timezone(tz)
    if hasattr(zone, 'localize'):
        return zone.localize(dt)
    return dt.replace(tzinfo=zone)


def to_local_time(now: Optional[datetime] = None, tz=None) -> datetime:
    """
    Express an instant on the local wall clock.

    Args:
        now: Instant to convert. None reads the clock; naive values are
            taken as already being local wall-clock time.
        tz: Optional timezone (pytz object or name) overriding SPOT_TIMEZONE

    Returns:
        datetime on the local wall clock
    """
    if now is None:
        return get_local_now(tz)
    if now.tzinfo is None:
        return now
    return now.astimezone(resolve_timezone(tz))


# ============================================
# AVAILABILITY THRESHOLDS
# ============================================
CLOSING_SOON_MINUTES = int(os.getenv("CLOSING_SOON_MINUTES", 30))

# Freshness buckets (whole days since last verification/update)
FRESH_MAX_DAYS = int(os.getenv("FRESH_MAX_DAYS", 14))      # < 14 days → fresh
STALE_AFTER_DAYS = int(os.getenv("STALE_AFTER_DAYS", 45))  # > 45 days → stale

# How far ahead to look for the next opening / promotion start
SCAN_AHEAD_DAYS = 7


# ============================================
# PROXIMITY
# ============================================
EARTH_RADIUS_MILES = 3959.0
MILES_PER_DEGREE_LAT = 69.0


# ============================================
# FILTER SENTINELS & LIMITS
# ============================================
ALL_AREAS = "All Areas"
NEAR_ME = "Near Me"
ALL_ACTIVITIES = "All Activities"
ALL_VENUES = "All Venues"

NEAR_ME_LIMIT = int(os.getenv("NEAR_ME_LIMIT", 50))
MAX_VENUE_RESULTS = int(os.getenv("MAX_VENUE_RESULTS", 50))
MIN_VENUE_QUERY_LENGTH = 2

DEFAULT_AREA = "Downtown Charleston"


# ============================================
# PATHS
# ============================================
DATA_DIR = Path(os.getenv("DATA_DIR", project_root / "data"))
SPOTS_PATH = Path(os.getenv("SPOTS_PATH", DATA_DIR / "spots.json"))
VENUES_PATH = Path(os.getenv("VENUES_PATH", DATA_DIR / "venues.json"))
AREAS_PATH = Path(os.getenv("AREAS_PATH", DATA_DIR / "config" / "areas.json"))


# ============================================
# LOGGING
# ============================================
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_DIR = os.getenv("LOG_DIR", "logs")
