"""
Pydantic Models for Spots, Venues and Engine Annotations
Data validation and schema definitions
"""

import json
import logging
import re
from datetime import date, datetime
from enum import Enum
from typing import List, Literal, Optional, Set, Union

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

logger = logging.getLogger(__name__)

DAY_KEYS = ['sun', 'mon', 'tue', 'wed', 'thu', 'fri', 'sat']

_CLOCK_RE = re.compile(r'^([01]\d|2[0-3]):[0-5]\d$')


# ============================================
# OPERATING HOURS
# ============================================

class DayHours(BaseModel):
    """
    Opening interval for one weekday, local 24-hour wall clock
    """
    open: str = Field(..., description="Opening time, HH:MM")
    close: str = Field(..., description="Closing time, HH:MM (may be before open)")

    @field_validator('open', 'close')
    @classmethod
    def validate_clock(cls, v):
        """Validate zero-padded HH:MM"""
        if not isinstance(v, str) or not _CLOCK_RE.match(v.strip()):
            raise ValueError(f'Expected zero-padded HH:MM time, got {v!r}')
        return v.strip()

    model_config = {"frozen": True}


DayEntry = Optional[Union[Literal['closed'], DayHours]]


class WeeklyHours(BaseModel):
    """
    Weekly operating schedule, one entry per weekday
    """
    sun: DayEntry = None
    mon: DayEntry = None
    tue: DayEntry = None
    wed: DayEntry = None
    thu: DayEntry = None
    fri: DayEntry = None
    sat: DayEntry = None

    @model_validator(mode='before')
    @classmethod
    def normalize_day_keys(cls, data):
        """Accept 'monday', 'Mon' and 'mon' alike; 'Closed' in any case"""
        if not isinstance(data, dict):
            return data
        normalized = {}
        for key, value in data.items():
            short = str(key).strip().lower()[:3]
            if short not in DAY_KEYS:
                continue
            if isinstance(value, str) and value.strip().lower() == 'closed':
                value = 'closed'
            normalized[short] = value
        return normalized

    def entry(self, day_index: int) -> DayEntry:
        """Entry for a day index (0 = Sunday)"""
        return getattr(self, DAY_KEYS[day_index % 7])

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "examples": [{
                "sun": "closed",
                "mon": {"open": "11:00", "close": "22:00"},
                "fri": {"open": "17:00", "close": "02:00"},
            }]
        }
    }


# ============================================
# SOURCE RECORDS
# ============================================

class Spot(BaseModel):
    """
    Single activity listing shown on the map/list
    """
    id: int = Field(..., description="Spot ID")
    title: str = Field(..., description="Display title")
    type: str = Field("Happy Hour", description="Activity type tag")
    description: Optional[str] = Field(None, description="Free-text description")
    lat: Optional[float] = None
    lng: Optional[float] = None
    area: Optional[str] = Field(None, description="Area name, if assigned")
    venue_id: Optional[str] = Field(None, alias="venueId", description="Linked venue ID")
    promotion_time: Optional[str] = Field(
        None, alias="promotionTime", description="Promotion window, e.g. '4pm-6pm • Monday-Friday'"
    )
    promotion_list: List[str] = Field(
        default_factory=list, alias="promotionList", description="Promotion lines, e.g. '[Drinks] $5 wells'"
    )
    last_update_date: Optional[str] = Field(None, alias="lastUpdateDate")
    last_verified_date: Optional[str] = Field(None, alias="lastVerifiedDate")
    source: str = Field("manual", description="automated or manual")
    submitter_name: Optional[str] = Field(None, alias="submitterName")
    status: Optional[str] = Field(None, description="pending, approved or expired")
    photo_url: Optional[str] = Field(None, alias="photoUrl")

    @model_validator(mode='before')
    @classmethod
    def accept_legacy_fields(cls, data):
        """Older records carry happyHourTime/happyHourList"""
        if isinstance(data, dict):
            data = dict(data)
            if not data.get('promotionTime') and not data.get('promotion_time'):
                if data.get('happyHourTime'):
                    data['promotionTime'] = data['happyHourTime']
            if not data.get('promotionList') and not data.get('promotion_list'):
                if data.get('happyHourList'):
                    data['promotionList'] = data['happyHourList']
        return data

    @field_validator('venue_id', mode='before')
    @classmethod
    def coerce_venue_id(cls, v):
        """Venue IDs are opaque strings"""
        if v is None or v == '':
            return None
        return str(v)

    @field_validator('promotion_list', mode='before')
    @classmethod
    def coerce_promotion_list(cls, v):
        """Missing list becomes empty; stored exports keep it as JSON text"""
        if isinstance(v, str):
            try:
                v = json.loads(v)
            except ValueError:
                return [v] if v.strip() else []
            if isinstance(v, str):
                return [v]
        return v or []

    @field_validator('last_update_date', 'last_verified_date', mode='before')
    @classmethod
    def coerce_timestamp(cls, v):
        """Keep timestamps as ISO strings; parsing happens at classification"""
        if isinstance(v, (datetime, date)):
            return v.isoformat()
        return v

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [{
                "id": 12,
                "title": "Southern Roots Smokehouse",
                "type": "Happy Hour",
                "lat": 32.7765,
                "lng": -79.9311,
                "venueId": "ven_abc123",
                "promotionTime": "4pm-6pm • Monday-Friday",
                "promotionList": ["[Drinks] $5 wells", "[Food] Half-price wings"],
                "lastVerifiedDate": "2026-02-20",
                "source": "automated",
            }]
        }
    }


class Venue(BaseModel):
    """
    Physical place a spot may be linked to
    """
    id: str = Field(..., description="Venue ID")
    name: str = Field(..., description="Venue name")
    lat: Optional[float] = None
    lng: Optional[float] = None
    area: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    operating_hours: Optional[WeeklyHours] = Field(None, alias="operatingHours")

    @field_validator('id', mode='before')
    @classmethod
    def coerce_id(cls, v):
        """Venue IDs are opaque strings"""
        return str(v) if v is not None else v

    @field_validator('operating_hours', mode='before')
    @classmethod
    def lenient_hours(cls, v):
        """Malformed schedules become unknown instead of failing the record"""
        if v is None or isinstance(v, WeeklyHours):
            return v
        if isinstance(v, str):
            try:
                v = json.loads(v)
            except ValueError:
                logger.warning(f"Dropping unparsable operating hours text: {v[:40]!r}")
                return None
        try:
            return WeeklyHours.model_validate(v)
        except ValidationError as e:
            logger.warning(f"Dropping malformed operating hours: {e.error_count()} error(s)")
            return None

    model_config = {"populate_by_name": True}


class Area(BaseModel):
    """
    Named area with map center and optional bounding box
    """
    name: str
    lat: float
    lng: float
    zoom: int = 14
    south: Optional[float] = None
    north: Optional[float] = None
    west: Optional[float] = None
    east: Optional[float] = None

    @model_validator(mode='before')
    @classmethod
    def flatten_nested(cls, data):
        """Accept {'center': {...}, 'bounds': {...}} as stored in areas.json"""
        if isinstance(data, dict):
            data = dict(data)
            center = data.pop('center', None)
            if isinstance(center, dict):
                data.setdefault('lat', center.get('lat'))
                data.setdefault('lng', center.get('lng'))
            bounds = data.pop('bounds', None)
            if isinstance(bounds, dict):
                for key in ('south', 'north', 'west', 'east'):
                    data.setdefault(key, bounds.get(key))
        return data

    def contains(self, lat: float, lng: float) -> bool:
        """Whether a point lies inside the bounding box"""
        if None in (self.south, self.north, self.west, self.east):
            return False
        return self.south <= lat <= self.north and self.west <= lng <= self.east


class UserLocation(BaseModel):
    """
    Caller's position for distance annotation
    """
    lat: float
    lng: float

    @field_validator('lat')
    @classmethod
    def validate_latitude(cls, v):
        """Validate latitude is in valid range"""
        if not (-90 <= v <= 90):
            raise ValueError('Latitude must be between -90 and 90')
        return v

    @field_validator('lng')
    @classmethod
    def validate_longitude(cls, v):
        """Validate longitude is in valid range"""
        if not (-180 <= v <= 180):
            raise ValueError('Longitude must be between -180 and 180')
        return v


# ============================================
# ENGINE OUTPUTS
# ============================================

class OpenStatus(BaseModel):
    """
    Venue open/closed state at one instant
    """
    is_open: bool = Field(False, alias="isOpen")
    label: Optional[str] = Field(None, description="Open, Closing soon, Closed; None when unknown")
    closes_at: Optional[str] = Field(None, alias="closesAt", description="12-hour clock, e.g. '6pm'")
    opens_at: Optional[str] = Field(None, alias="opensAt", description="12-hour clock, e.g. '9:30am'")
    opens_on: Optional[str] = Field(None, alias="opensOn", description="today, tomorrow or weekday")
    minutes_until_close: Optional[int] = Field(None, alias="minutesUntilClose")

    @property
    def closing_soon(self) -> bool:
        return self.is_open and self.label == 'Closing soon'

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [{
                "isOpen": True,
                "label": "Closing soon",
                "closesAt": "10pm",
                "minutesUntilClose": 20
            }]
        }
    }


class DayHoursDisplay(BaseModel):
    """One row of a formatted weekly schedule"""
    day: str
    hours: str
    is_today: bool = Field(False, alias="isToday")

    model_config = {"populate_by_name": True}


class FreshnessLevel(str, Enum):
    FRESH = 'fresh'
    AGING = 'aging'
    STALE = 'stale'
    UNKNOWN = 'unknown'


class Freshness(BaseModel):
    """Recency bucket for a listing's data"""
    level: FreshnessLevel = FreshnessLevel.UNKNOWN
    label: str = "Unverified"
    days_ago: Optional[int] = Field(None, alias="daysAgo")

    model_config = {"populate_by_name": True}


class PromotionLine(BaseModel):
    """Promotion line split into optional category label and text"""
    label: Optional[str] = None
    text: str


class SortMode(str, Enum):
    ALPHA = 'alpha'
    NEAREST = 'nearest'
    ACTIVITY_ACTIVE = 'activityActive'
    VENUE_OPEN = 'venueOpen'


class FilterCriteria(BaseModel):
    """
    Filter and sort options for the spot list
    """
    area: Optional[str] = Field(None, description="Area name or 'All Areas'/'Near Me'")
    activity_type: Optional[str] = Field(None, alias="activityType")
    text_query: Optional[str] = Field(None, alias="textQuery")
    favorites_only: bool = Field(False, alias="favoritesOnly")
    favorite_ids: Set[int] = Field(default_factory=set, alias="favoriteIdSet")
    sort_mode: SortMode = Field(SortMode.ALPHA, alias="sortMode")
    user_location: Optional[UserLocation] = Field(None, alias="userLocation")
    limit: Optional[int] = Field(None, ge=1, description="Maximum number of results")

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [{
                "area": "Downtown Charleston",
                "activityType": "Happy Hour",
                "sortMode": "activityActive",
                "userLocation": {"lat": 32.7765, "lng": -79.9311}
            }]
        }
    }


class ComputedAnnotation(BaseModel):
    """
    Per-spot values computed at one instant; never persisted or cached
    """
    distance_miles: Optional[float] = Field(None, alias="distanceMiles")
    distance_label: Optional[str] = Field(None, alias="distanceLabel")
    active_now: bool = Field(False, alias="activeNow")
    minutes_until_start: Optional[int] = Field(None, alias="minutesUntilStart")
    open_status: Optional[OpenStatus] = Field(None, alias="openStatus")
    freshness: Freshness = Field(default_factory=Freshness)

    model_config = {"populate_by_name": True}


class AnnotatedSpot(BaseModel):
    """Spot paired with its computed annotation"""
    spot: Spot
    annotation: ComputedAnnotation


class VenueSearchResult(BaseModel):
    """
    Venue ranked for the search view
    """
    venue: Venue
    distance_miles: Optional[float] = Field(None, alias="distanceMiles")
    distance_label: Optional[str] = Field(None, alias="distanceLabel")
    activity_types: List[str] = Field(default_factory=list, alias="activityTypes")
    open_status: Optional[OpenStatus] = Field(None, alias="openStatus")

    model_config = {"populate_by_name": True}
