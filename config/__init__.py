"""
Configuration Module for the Spot Availability Engine
"""
from .settings import (
    # Timezone
    LOCAL_TZ_NAME,
    LOCAL_TZ,
    resolve_timezone,
    localize,
    get_local_now,
    to_local_time,

    # Thresholds
    CLOSING_SOON_MINUTES,
    FRESH_MAX_DAYS,
    STALE_AFTER_DAYS,
    SCAN_AHEAD_DAYS,

    # Proximity
    EARTH_RADIUS_MILES,
    MILES_PER_DEGREE_LAT,

    # Filter sentinels & limits
    ALL_AREAS,
    NEAR_ME,
    ALL_ACTIVITIES,
    ALL_VENUES,
    NEAR_ME_LIMIT,
    MAX_VENUE_RESULTS,
    MIN_VENUE_QUERY_LENGTH,
    DEFAULT_AREA,

    # Paths
    DATA_DIR,
    SPOTS_PATH,
    VENUES_PATH,
    AREAS_PATH,

    # Logging
    LOG_LEVEL,
    LOG_DIR,
)

from .logging_config import (
    setup_logging,
    get_logger,
)

from .areas import AreaConfig, DEFAULT_AREAS

__all__ = [
    # Timezone
    'LOCAL_TZ_NAME',
    'LOCAL_TZ',
    'resolve_timezone',
    'localize',
    'get_local_now',
    'to_local_time',

    # Thresholds
    'CLOSING_SOON_MINUTES',
    'FRESH_MAX_DAYS',
    'STALE_AFTER_DAYS',
    'SCAN_AHEAD_DAYS',

    # Proximity
    'EARTH_RADIUS_MILES',
    'MILES_PER_DEGREE_LAT',

    # Filter sentinels & limits
    'ALL_AREAS',
    'NEAR_ME',
    'ALL_ACTIVITIES',
    'ALL_VENUES',
    'NEAR_ME_LIMIT',
    'MAX_VENUE_RESULTS',
    'MIN_VENUE_QUERY_LENGTH',
    'DEFAULT_AREA',

    # Paths
    'DATA_DIR',
    'SPOTS_PATH',
    'VENUES_PATH',
    'AREAS_PATH',

    # Logging
    'LOG_LEVEL',
    'LOG_DIR',
    'setup_logging',
    'get_logger',

    # Areas
    'AreaConfig',
    'DEFAULT_AREAS',
]
