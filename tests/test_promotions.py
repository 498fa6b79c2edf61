from datetime import datetime

import pytest

from utils import promotions
from utils.promotions import PromotionClause
from tests.conftest import SATURDAY_5PM, SUNDAY_NOON, WEDNESDAY_5PM

WEEKDAYS = frozenset({1, 2, 3, 4, 5})


def test_weekday_window_active_midweek():
    assert promotions.is_active_now('3pm-6pm • Monday-Friday', WEDNESDAY_5PM) is True
    assert promotions.is_active_now('3pm-6pm • Monday-Friday', SATURDAY_5PM) is False


def test_window_end_is_exclusive():
    assert promotions.is_active_now('3pm-5pm • Daily', WEDNESDAY_5PM) is False
    assert promotions.is_active_now('5pm-7pm • Daily', WEDNESDAY_5PM) is True


@pytest.mark.parametrize("descriptor", [
    None,
    '',
    'specials all night',
    'Happy Hour • Wednesday',
])
def test_descriptor_without_time_range_is_never_active(descriptor):
    assert promotions.parse_promotion_window(descriptor) == []
    assert promotions.is_active_now(descriptor, WEDNESDAY_5PM) is False
    assert promotions.minutes_until_next_start(descriptor, WEDNESDAY_5PM) is None


def test_parse_single_clause():
    clauses = promotions.parse_promotion_window('4pm-6pm • Monday-Friday')

    assert clauses == [PromotionClause(start=960, end=1080, days=WEEKDAYS)]


def test_parse_multiple_clauses_with_own_days():
    clauses = promotions.parse_promotion_window('Mon-Thu 4-7pm • Fri 3pm-6pm')

    assert clauses == [
        PromotionClause(start=960, end=1140, days=frozenset({1, 2, 3, 4})),
        PromotionClause(start=900, end=1080, days=frozenset({5})),
    ]
    assert promotions.is_active_now('Mon-Thu 4-7pm • Fri 3pm-6pm', datetime(2026, 2, 27, 18, 30)) is False
    assert promotions.is_active_now('Mon-Thu 4-7pm • Fri 3pm-6pm', datetime(2026, 2, 25, 18, 30)) is True


def test_days_before_time_attach_to_following_clause():
    clauses = promotions.parse_promotion_window('Fri & Sat • 10pm-2am')

    assert clauses == [PromotionClause(start=1320, end=120, days=frozenset({5, 6}))]


@pytest.mark.parametrize("descriptor,window", [
    ('4-6pm', (960, 1080)),
    ('11-2pm', (660, 840)),
    ('10-2am', (1320, 120)),
    ('9:30am-11:00am', (570, 660)),
    ('5 to 7pm', (1020, 1140)),
])
def test_bare_start_meridiem(descriptor, window):
    clause = promotions.parse_promotion_window(descriptor)[0]
    assert (clause.start, clause.end) == window


def test_window_past_midnight():
    descriptor = '10pm-2am • Friday'

    assert promotions.is_active_now(descriptor, datetime(2026, 2, 27, 23, 0)) is True
    assert promotions.is_active_now(descriptor, datetime(2026, 2, 28, 1, 0)) is True
    assert promotions.is_active_now(descriptor, datetime(2026, 2, 28, 23, 0)) is False
    assert promotions.is_active_now(descriptor, datetime(2026, 2, 27, 1, 0)) is False


def test_all_day():
    assert promotions.is_active_now('All day • Sunday', SUNDAY_NOON) is True
    assert promotions.is_active_now('All day • Sunday', WEDNESDAY_5PM) is False


def test_no_days_means_every_day():
    clause = promotions.parse_promotion_window('4pm-6pm')[0]

    assert clause.days == frozenset(range(7))
    assert promotions.is_active_now('4pm-6pm', SATURDAY_5PM) is True


@pytest.mark.parametrize("text,days", [
    ('Fri-Sun', {5, 6, 0}),
    ('Weekends', {0, 6}),
    ('Weekdays', {1, 2, 3, 4, 5}),
    ('Tues & Thurs', {2, 4}),
    ('Wednesdays', {3}),
    ('Every day', set(range(7))),
    ('Monday through Wednesday', {1, 2, 3}),
])
def test_parse_days(text, days):
    assert promotions.parse_days(text) == frozenset(days)


def test_parse_days_without_tokens():
    assert promotions.parse_days('Happy hour') is None
    assert promotions.parse_days('') is None


@pytest.mark.parametrize("now,expected", [
    (datetime(2026, 2, 25, 14, 0), 60),      # Wednesday, later today
    (datetime(2026, 2, 25, 15, 0), 0),       # starting right now
    (WEDNESDAY_5PM, 1320),                   # already started, next is Thursday
    (datetime(2026, 2, 27, 17, 0), 4200),    # Friday evening, next is Monday
    (datetime(2026, 2, 28, 10, 0), 3180),    # Saturday morning
])
def test_minutes_until_next_start(now, expected):
    assert promotions.minutes_until_next_start('3pm-6pm • Monday-Friday', now) == expected


def test_minutes_until_next_start_picks_earliest_clause():
    descriptor = '7pm-9pm • Wednesday'

    assert promotions.minutes_until_next_start(descriptor, WEDNESDAY_5PM) == 120
    assert promotions.minutes_until_next_start(descriptor, datetime(2026, 2, 25, 20, 0)) == 7 * 1440 - 60


@pytest.mark.parametrize("descriptor,compact", [
    ('4pm-6pm • Monday-Friday', '4-6pm'),
    ('11am-2pm', '11am-2pm'),
    ('4:00pm - 6:30pm • Daily', '4-6:30pm'),
    ('All day • Sunday', 'All day'),
    ('Starts 9pm', '9pm'),
    ('Call for details', None),
    (123, None),
    (None, None),
])
def test_extract_compact_time(descriptor, compact):
    assert promotions.extract_compact_time(descriptor) == compact


def test_parse_promotion_lines():
    lines = promotions.parse_promotion_lines([
        '[Drinks] $5 wells',
        'Half-price wings',
        '   ',
        '[ Food ]  $1 oysters',
    ])

    assert [(line.label, line.text) for line in lines] == [
        ('Drinks', '$5 wells'),
        (None, 'Half-price wings'),
        ('Food', '$1 oysters'),
    ]
    assert promotions.parse_promotion_lines(None) == []
