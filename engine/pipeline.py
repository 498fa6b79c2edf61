"""
SpotFilterPipeline Class
Filters, annotates and orders spots for the list, map and search views
"""

from collections import Counter
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Union

from pydantic import ValidationError

from config import (
    ALL_ACTIVITIES,
    ALL_AREAS,
    ALL_VENUES,
    MAX_VENUE_RESULTS,
    MIN_VENUE_QUERY_LENGTH,
    NEAR_ME,
    NEAR_ME_LIMIT,
    AreaConfig,
    get_logger,
    localize,
    to_local_time,
)
from models import (
    AnnotatedSpot,
    ComputedAnnotation,
    FilterCriteria,
    SortMode,
    Spot,
    UserLocation,
    Venue,
    VenueSearchResult,
)
from utils import (
    calculate_bounding_box,
    classify_freshness,
    distance_miles,
    format_distance,
    get_open_status,
    in_bounding_box,
    is_active_now,
    matches_query,
    minutes_until_next_start,
    normalize_search_text,
)

logger = get_logger(__name__)

ACTIVITY_SENTINELS = (ALL_ACTIVITIES, ALL_VENUES)
AREA_SENTINELS = (ALL_AREAS, NEAR_ME)


def title_key(title: str):
    """Locale-style ordering: case-insensitive first, lowercase before uppercase on ties"""
    return (title.casefold(), title.swapcase())


def _open_rank(annotation: ComputedAnnotation) -> int:
    status = annotation.open_status
    if status is None or not status.is_open:
        return 2
    return 0 if status.closing_soon else 1


def _sort_key(item: AnnotatedSpot, sort_mode: SortMode):
    ann = item.annotation
    title = title_key(item.spot.title)

    if sort_mode == SortMode.NEAREST:
        return (ann.distance_miles is None, ann.distance_miles or 0.0, title)
    if sort_mode == SortMode.ACTIVITY_ACTIVE:
        return (not ann.active_now, title)
    if sort_mode == SortMode.VENUE_OPEN:
        return (_open_rank(ann), title)
    return (title,)


def sort_results(items: Iterable[AnnotatedSpot], sort_mode: Union[SortMode, str] = SortMode.ALPHA) -> List[AnnotatedSpot]:
    """
    Order annotated spots for a sort mode

    Args:
        items: Annotated spots
        sort_mode: alpha, nearest, activityActive or venueOpen

    Returns:
        New list; stable, every tie broken on title
    """
    sort_mode = SortMode(sort_mode)
    return sorted(items, key=lambda item: _sort_key(item, sort_mode))


class SpotFilterPipeline:
    """
    Spot list engine over one venue set and area configuration.
    Features:
    - Visibility, area, activity, text and favorites filtering
    - Per-spot annotations: distance, active now, open status, freshness
    - Sorting by title, distance, active promotions or open venues
    - Venue search ranked by distance

    Every call reads the clock once; all items in a result set are
    evaluated against that same instant.
    """

    def __init__(self, venues: Optional[Iterable[Union[Venue, dict]]] = None,
                 areas: Optional[AreaConfig] = None, tz=None):
        self.venues: List[Venue] = self._coerce_records(venues or [], Venue)
        self.venue_lookup: Dict[str, Venue] = {v.id: v for v in self.venues}
        self.areas = areas if areas is not None else AreaConfig.default()
        self.tz = tz
        logger.info(f"Spot pipeline ready: {len(self.venue_lookup)} venues, {len(self.areas)} areas")

    # ========================================
    # INPUT HANDLING
    # ========================================

    @staticmethod
    def _coerce_records(records: Iterable, model) -> list:
        """Validate raw dicts into models, skipping records that fail"""
        coerced = []
        for record in records:
            if isinstance(record, model):
                coerced.append(record)
                continue
            try:
                coerced.append(model.model_validate(record))
            except ValidationError as e:
                logger.warning(f"Skipping invalid {model.__name__} record: {e.error_count()} error(s)")
        return coerced

    def _read_clock(self, now: Optional[datetime]) -> datetime:
        """Single clock reading per call, as an aware local datetime"""
        return localize(to_local_time(now, self.tz), self.tz)

    # ========================================
    # FILTERING
    # ========================================

    @staticmethod
    def is_visible(spot: Spot) -> bool:
        """
        Whether a spot may be listed at all.

        Expired spots are hidden; manual submissions show only once approved;
        spots pinned at (0, 0) were never geocoded.
        """
        if spot.status == 'expired':
            return False
        if spot.source != 'automated' and spot.status not in (None, 'approved'):
            return False
        if spot.lat == 0 and spot.lng == 0:
            return False
        return True

    def resolve_area(self, spot: Spot) -> Optional[str]:
        """Spot's own area, else its venue's, else the area its coordinates fall in"""
        if spot.area:
            return spot.area
        venue = self.venue_lookup.get(spot.venue_id) if spot.venue_id else None
        if venue is not None and venue.area:
            return venue.area
        return self.areas.area_for(spot.lat, spot.lng)

    def _matches_area(self, spot: Spot, area: Optional[str]) -> bool:
        if not area or area in AREA_SENTINELS:
            return True
        return self.resolve_area(spot) == area

    @staticmethod
    def _matches_activity(spot: Spot, activity_type: Optional[str]) -> bool:
        if not activity_type or activity_type in ACTIVITY_SENTINELS:
            return True
        return spot.type == activity_type

    @staticmethod
    def _matches_text(spot: Spot, text_query: Optional[str]) -> bool:
        return matches_query(text_query, spot.title, spot.description)

    @staticmethod
    def _matches_favorites(spot: Spot, criteria: FilterCriteria) -> bool:
        if not criteria.favorites_only:
            return True
        return spot.id in criteria.favorite_ids

    # ========================================
    # ANNOTATION
    # ========================================

    def annotate(self, spot: Spot, now: Optional[datetime] = None,
                 user_location: Optional[UserLocation] = None) -> ComputedAnnotation:
        """
        Compute distance, promotion, venue and freshness state for one spot

        Args:
            spot: Spot to annotate
            now: Instant to evaluate against (defaults to the current time)
            user_location: Caller position; distance stays None without it

        Returns:
            ComputedAnnotation
        """
        now = self._read_clock(now)

        distance = None
        if user_location is not None:
            distance = distance_miles(user_location.lat, user_location.lng, spot.lat, spot.lng)

        open_status = None
        if spot.venue_id:
            venue = self.venue_lookup.get(spot.venue_id)
            if venue is not None:
                open_status = get_open_status(venue.operating_hours, now, self.tz)

        return ComputedAnnotation(
            distance_miles=distance,
            distance_label=format_distance(distance),
            active_now=is_active_now(spot.promotion_time, now, self.tz),
            minutes_until_start=minutes_until_next_start(spot.promotion_time, now, self.tz),
            open_status=open_status,
            freshness=classify_freshness(spot.last_verified_date, spot.last_update_date, now, self.tz),
        )

    # ========================================
    # MAIN ENTRY POINT
    # ========================================

    def filter(self, spots: Iterable[Union[Spot, dict]],
               criteria: Optional[Union[FilterCriteria, dict]] = None,
               now: Optional[datetime] = None) -> List[AnnotatedSpot]:
        """
        Filter, annotate and order spots

        Filtering order: visibility → area → activity type → text query →
        favorites.

        Args:
            spots: Spot models or raw spot dicts
            criteria: FilterCriteria or an equivalent dict
            now: Instant to evaluate against (defaults to the current time)

        Returns:
            Ordered list of AnnotatedSpot
        """
        if criteria is None:
            criteria = FilterCriteria()
        elif not isinstance(criteria, FilterCriteria):
            criteria = FilterCriteria.model_validate(criteria)

        now = self._read_clock(now)
        candidates = self._coerce_records(spots, Spot)

        matched = [
            spot for spot in candidates
            if self.is_visible(spot)
            and self._matches_area(spot, criteria.area)
            and self._matches_activity(spot, criteria.activity_type)
            and self._matches_text(spot, criteria.text_query)
            and self._matches_favorites(spot, criteria)
        ]

        annotated = [
            AnnotatedSpot(spot=spot, annotation=self.annotate(spot, now, criteria.user_location))
            for spot in matched
        ]

        if criteria.limit is None and criteria.area == NEAR_ME and criteria.user_location is not None:
            # Keep the closest spots, then order them as requested
            annotated = sort_results(annotated, SortMode.NEAREST)[:NEAR_ME_LIMIT]

        results = sort_results(annotated, criteria.sort_mode)
        if criteria.limit is not None:
            results = results[:criteria.limit]

        logger.debug(
            f"Filtered {len(candidates)} spots → {len(matched)} matched, "
            f"{len(results)} returned (sort={criteria.sort_mode.value})"
        )
        return results

    # ========================================
    # VENUE SEARCH
    # ========================================

    def search_venues(self, query: str = "", spots: Iterable[Union[Spot, dict]] = (),
                      user_location: Optional[UserLocation] = None, browse_all: bool = False,
                      radius_miles: Optional[float] = None, now: Optional[datetime] = None,
                      limit: int = MAX_VENUE_RESULTS) -> List[VenueSearchResult]:
        """
        Rank venues for the search view

        Args:
            query: Venue name query; needs at least two characters unless browsing
            spots: Current spots; venues they link to are left out of the results
            user_location: Caller position for distance ranking
            browse_all: List venues even without a query
            radius_miles: Only keep venues within this distance (needs user_location)
            now: Instant for open status (defaults to the current time)
            limit: Maximum number of results

        Returns:
            Venues ordered by distance (unknown distances last), then name
        """
        needle = normalize_search_text(query or "")
        if len(needle) < MIN_VENUE_QUERY_LENGTH and not browse_all:
            return []

        now = self._read_clock(now)
        if isinstance(user_location, dict):
            user_location = UserLocation.model_validate(user_location)

        # Venues with a listing already show up as spots
        activity_types: Dict[str, List[str]] = {}
        listed_venue_ids = set()
        for spot in self._coerce_records(spots, Spot):
            if spot.venue_id:
                listed_venue_ids.add(spot.venue_id)
                types = activity_types.setdefault(spot.venue_id, [])
                if spot.type not in types:
                    types.append(spot.type)

        box = None
        if radius_miles is not None and user_location is not None:
            box = calculate_bounding_box(user_location.lat, user_location.lng, radius_miles)

        results = []
        for venue in self.venues:
            if venue.id in listed_venue_ids:
                continue
            if venue.lat is None or venue.lng is None:
                continue
            if venue.lat == 0 and venue.lng == 0:
                continue
            if needle and needle not in normalize_search_text(venue.name):
                continue

            distance = None
            if user_location is not None:
                distance = distance_miles(user_location.lat, user_location.lng, venue.lat, venue.lng)

            if box is not None:
                # Bounding box first, exact radius second
                if not in_bounding_box(venue.lat, venue.lng, box):
                    continue
                if distance is None or distance > radius_miles:
                    continue

            results.append(VenueSearchResult(
                venue=venue,
                distance_miles=distance,
                distance_label=format_distance(distance),
                activity_types=activity_types.get(venue.id, []),
                open_status=get_open_status(venue.operating_hours, now, self.tz),
            ))

        results.sort(key=lambda r: (r.distance_miles is None, r.distance_miles or 0.0, title_key(r.venue.name)))
        return results[:limit]

    # ========================================
    # COUNTS & LOOKUPS
    # ========================================

    def spot_counts(self, spots: Iterable[Union[Spot, dict]]) -> Dict[str, int]:
        """Number of listable spots per activity type, for filter badges"""
        counts = Counter(
            spot.type for spot in self._coerce_records(spots, Spot)
            if self.is_visible(spot)
        )
        return dict(counts)

    def venue_area_map(self) -> Dict[str, str]:
        """Venue ID → area, for venues with an assigned area"""
        return {v.id: v.area for v in self.venues if v.area}
