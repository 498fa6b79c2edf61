from datetime import datetime, timezone

import pytest

from models import WeeklyHours
from utils import hours
from tests.conftest import SUNDAY_NOON, WEDNESDAY_5PM, every_day


def test_unknown_hours_have_no_label():
    status = hours.get_open_status(None, WEDNESDAY_5PM)

    assert status.is_open is False
    assert status.label is None
    assert status.opens_at is None


def test_hours_without_day_keys_are_unknown():
    assert hours.get_open_status({}, WEDNESDAY_5PM).label is None
    assert hours.get_open_status({'notes': 'call ahead'}, WEDNESDAY_5PM).label is None
    assert hours.get_open_status("11am-10pm", WEDNESDAY_5PM).label is None


def test_open_during_regular_hours(lunch_to_late_hours):
    status = hours.get_open_status(lunch_to_late_hours, WEDNESDAY_5PM)

    assert status.is_open is True
    assert status.label == 'Open'
    assert status.closes_at == '10pm'
    assert status.minutes_until_close == 300


@pytest.mark.parametrize("hour,minute,label", [
    (21, 29, 'Open'),
    (21, 30, 'Closing soon'),
    (21, 59, 'Closing soon'),
    (22, 0, 'Closed'),
])
def test_closing_soon_threshold(lunch_to_late_hours, hour, minute, label):
    status = hours.get_open_status(lunch_to_late_hours, datetime(2026, 2, 25, hour, minute))
    assert status.label == label


def test_interval_wrapping_midnight():
    late_night = every_day('22:00', '02:00')

    at_2330 = hours.get_open_status(late_night, datetime(2026, 2, 25, 23, 30))
    at_0100 = hours.get_open_status(late_night, datetime(2026, 2, 26, 1, 0))
    at_1000 = hours.get_open_status(late_night, datetime(2026, 2, 25, 10, 0))

    assert at_2330.is_open and at_2330.closes_at == '2am'
    assert at_2330.minutes_until_close == 150
    assert at_0100.is_open and at_0100.closes_at == '2am'
    assert at_1000.is_open is False
    assert at_1000.label == 'Closed'
    assert at_1000.opens_at == '10pm'
    assert at_1000.opens_on == 'today'


def test_wrapped_interval_carries_over_from_yesterday():
    tuesday_only = {'tue': {'open': '22:00', 'close': '02:00'}}

    wednesday_1am = hours.get_open_status(tuesday_only, datetime(2026, 2, 25, 1, 0))
    wednesday_late = hours.get_open_status(tuesday_only, datetime(2026, 2, 25, 23, 30))

    assert wednesday_1am.is_open is True
    assert wednesday_1am.closes_at == '2am'
    assert wednesday_late.is_open is False
    assert wednesday_late.opens_on == 'Tue'
    assert wednesday_late.opens_at == '10pm'


def test_closed_day_points_to_next_opening(lunch_to_late_hours):
    status = hours.get_open_status(lunch_to_late_hours, SUNDAY_NOON)

    assert status.is_open is False
    assert status.label == 'Closed'
    assert status.opens_on == 'tomorrow'
    assert status.opens_at == '11am'


def test_after_closing_points_to_tomorrow(lunch_to_late_hours):
    status = hours.get_open_status(lunch_to_late_hours, datetime(2026, 2, 25, 23, 0))

    assert status.opens_on == 'tomorrow'
    assert status.opens_at == '11am'


def test_never_open_has_no_next_opening():
    status = hours.get_open_status({day: 'closed' for day in ('sun', 'mon')}, WEDNESDAY_5PM)

    assert status.label == 'Closed'
    assert status.opens_at is None
    assert status.opens_on is None


def test_weekly_hours_model_and_long_day_names():
    weekly = WeeklyHours.model_validate({
        'Monday': {'open': '09:30', 'close': '17:00'},
        'Wednesday': {'open': '09:30', 'close': '17:30'},
        'sunday': 'Closed',
    })

    status = hours.get_open_status(weekly, datetime(2026, 2, 25, 9, 0))

    assert status.is_open is False
    assert status.opens_at == '9:30am'
    assert hours.is_open_now(weekly, datetime(2026, 2, 25, 17, 10)) is True


def test_malformed_day_entry_degrades_to_closed():
    status = hours.get_open_status({'wed': {'open': 'noon', 'close': '22:00'}}, WEDNESDAY_5PM)

    assert status.is_open is False
    assert status.label == 'Closed'


def test_round_the_clock_day():
    status = hours.get_open_status({'wed': {'open': '00:00', 'close': '00:00'}}, WEDNESDAY_5PM)

    assert status.is_open is True
    assert status.label == 'Open'
    assert status.closes_at is None


def test_aware_instant_is_converted_to_local_clock(lunch_to_late_hours):
    # 22:00 UTC is 17:00 in Charleston in February
    now = datetime(2026, 2, 25, 22, 0, tzinfo=timezone.utc)

    status = hours.get_open_status(lunch_to_late_hours, now)

    assert status.is_open is True
    assert status.minutes_until_close == 300


def test_explicit_timezone_overrides_default():
    afternoon = {'wed': {'open': '15:00', 'close': '22:00'}}
    now = datetime(2026, 2, 25, 22, 0, tzinfo=timezone.utc)

    status = hours.get_open_status(afternoon, now, tz='America/Los_Angeles')

    assert status.is_open is False
    assert status.opens_at == '3pm'


@pytest.mark.parametrize("value,expected", [
    ('18:00', '6pm'),
    ('09:30', '9:30am'),
    ('00:00', '12am'),
    ('12:15', '12:15pm'),
    ('24:00', '12am'),
    ('9pm', None),
    (None, None),
])
def test_format_time12(value, expected):
    assert hours.format_time12(value) == expected


def test_format_full_week_hours(lunch_to_late_hours):
    rows = hours.format_full_week_hours(lunch_to_late_hours, WEDNESDAY_5PM)

    assert [r.day for r in rows] == ['Sun', 'Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat']
    assert rows[0].hours == 'Closed'
    assert rows[1].hours == '11am – 10pm'
    assert [r.day for r in rows if r.is_today] == ['Wed']
    assert hours.format_full_week_hours(None) == []


def test_format_status_line(lunch_to_late_hours):
    open_line = hours.format_status_line(hours.get_open_status(lunch_to_late_hours, WEDNESDAY_5PM))
    closed_line = hours.format_status_line(hours.get_open_status(lunch_to_late_hours, SUNDAY_NOON))

    assert open_line == 'Open · closes 10pm'
    assert closed_line == 'Closed · opens tomorrow 11am'
    assert hours.format_status_line(hours.get_open_status(None, WEDNESDAY_5PM)) == ''
