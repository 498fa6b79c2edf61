"""
Models Module - Pydantic Schemas
Data validation and type safety
"""
from .schemas import (
    # Schedules
    DAY_KEYS,
    DayHours,
    WeeklyHours,

    # Source records
    Spot,
    Venue,
    Area,
    UserLocation,

    # Engine outputs
    OpenStatus,
    DayHoursDisplay,
    FreshnessLevel,
    Freshness,
    PromotionLine,
    ComputedAnnotation,
    AnnotatedSpot,
    VenueSearchResult,

    # Filtering
    SortMode,
    FilterCriteria,
)

__all__ = [
    # Schedules
    'DAY_KEYS',
    'DayHours',
    'WeeklyHours',

    # Source records
    'Spot',
    'Venue',
    'Area',
    'UserLocation',

    # Engine outputs
    'OpenStatus',
    'DayHoursDisplay',
    'FreshnessLevel',
    'Freshness',
    'PromotionLine',
    'ComputedAnnotation',
    'AnnotatedSpot',
    'VenueSearchResult',

    # Filtering
    'SortMode',
    'FilterCriteria',
]
