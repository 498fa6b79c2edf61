"""
Utilities Module - Helper Functions
"""
from .text import (
    shorten,
    clean_text,
    normalize_search_text,
    matches_query,
)

from .geo import (
    haversine_distance,
    distance_miles,
    format_distance,
    calculate_bounding_box,
    in_bounding_box,
)

from .hours import (
    parse_clock,
    format_time12,
    format_minutes12,
    normalize_hours,
    get_open_status,
    is_open_now,
    format_status_line,
    format_full_week_hours,
)

from .promotions import (
    PromotionClause,
    parse_days,
    parse_promotion_window,
    is_active_now,
    minutes_until_next_start,
    extract_compact_time,
    parse_promotion_lines,
)

from .freshness import (
    FRESHNESS_RANK,
    parse_timestamp,
    classify_freshness,
)

__all__ = [
    # Text utilities
    'shorten',
    'clean_text',
    'normalize_search_text',
    'matches_query',

    # Geo utilities
    'haversine_distance',
    'distance_miles',
    'format_distance',
    'calculate_bounding_box',
    'in_bounding_box',

    # Hours utilities
    'parse_clock',
    'format_time12',
    'format_minutes12',
    'normalize_hours',
    'get_open_status',
    'is_open_now',
    'format_status_line',
    'format_full_week_hours',

    # Promotion utilities
    'PromotionClause',
    'parse_days',
    'parse_promotion_window',
    'is_active_now',
    'minutes_until_next_start',
    'extract_compact_time',
    'parse_promotion_lines',

    # Freshness utilities
    'FRESHNESS_RANK',
    'parse_timestamp',
    'classify_freshness',
]
