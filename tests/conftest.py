import sys
from datetime import datetime
from pathlib import Path

import pytest

# Ensure the top-level packages are importable when running pytest from the repo root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from models import DAY_KEYS  # noqa: E402

# Local wall-clock instants (naive = already in the dataset's timezone)
WEDNESDAY_5PM = datetime(2026, 2, 25, 17, 0)
SATURDAY_5PM = datetime(2026, 2, 28, 17, 0)
SUNDAY_NOON = datetime(2026, 3, 1, 12, 0)


def every_day(open_time, close_time):
    return {day: {'open': open_time, 'close': close_time} for day in DAY_KEYS}


@pytest.fixture
def lunch_to_late_hours():
    hours = every_day('11:00', '22:00')
    hours['sun'] = 'closed'
    return hours


@pytest.fixture
def venues():
    # Same longitude; 0.004342° and 0.06078° of latitude ≈ 0.3 mi and 4.2 mi
    return [
        {
            'id': 'ven-near',
            'name': 'Harbor Tap Room',
            'lat': 32.780342,
            'lng': -79.93,
            'area': 'Downtown Charleston',
            'operatingHours': every_day('11:00', '17:20'),
        },
        {
            'id': 'ven-far',
            'name': 'Island Oyster Bar',
            'lat': 32.83678,
            'lng': -79.93,
            'area': 'Daniel Island',
            'operatingHours': every_day('11:00', '23:00'),
        },
        {
            'id': 'ven-nohours',
            'name': 'Mystery Lounge',
            'lat': 32.79,
            'lng': -79.94,
        },
    ]


@pytest.fixture
def user_location():
    return {'lat': 32.776, 'lng': -79.93}


@pytest.fixture
def spots():
    return [
        {
            'id': 1,
            'title': 'Island Oyster Happy Hour',
            'type': 'Happy Hour',
            'lat': 32.83678,
            'lng': -79.93,
            'venueId': 'ven-far',
            'promotionTime': '3pm-6pm • Monday-Friday',
            'lastVerifiedDate': '2026-02-20',
            'source': 'automated',
        },
        {
            'id': 2,
            'title': 'Harbor Tap Trivia',
            'type': 'Trivia',
            'description': 'Weekly pub quiz with prizes',
            'lat': 32.780342,
            'lng': -79.93,
            'venueId': 'ven-near',
            'promotionTime': '7pm-9pm • Wednesday',
            'lastUpdateDate': '2025-12-01',
            'source': 'automated',
        },
        {
            'id': 3,
            'title': 'Bluegrass Brunch',
            'type': 'Brunch',
            'lat': 32.72,
            'lng': -79.95,
            'promotionTime': '10am-2pm • Weekends',
            'source': 'manual',
            'status': 'approved',
        },
        {
            'id': 4,
            'title': 'Pending Taco Night',
            'type': 'Happy Hour',
            'lat': 32.777,
            'lng': -79.931,
            'source': 'manual',
            'status': 'pending',
        },
    ]
