from __future__ import annotations

import datetime
import time

import pytest

from tabula_specifications import period_range
from tabula_specifications.operators import FilterOperator as Op

TZ = datetime.timezone(datetime.timedelta(hours=2))
# Wednesday
NOW = datetime.datetime(2024, 2, 14, 15, 30, tzinfo=TZ)


def at(y, m, d, end=False):
    if end:
        return datetime.datetime(y, m, d, 23, 59, 59, 999000, tzinfo=TZ)
    return datetime.datetime(y, m, d, tzinfo=TZ)


@pytest.mark.parametrize(
    ("operator", "start", "end"),
    [
        (Op.TODAY, at(2024, 2, 14), at(2024, 2, 14, end=True)),
        (Op.YESTERDAY, at(2024, 2, 13), at(2024, 2, 13, end=True)),
        (Op.THIS_WEEK, at(2024, 2, 11), at(2024, 2, 17, end=True)),
        (Op.THIS_MONTH, at(2024, 2, 1), at(2024, 2, 29, end=True)),
        (Op.THIS_YEAR, at(2024, 1, 1), at(2024, 12, 31, end=True)),
    ],
)
def test_period_bounds(operator, start, end):
    assert period_range(operator, NOW) == (start, end)


def test_week_starts_on_sunday():
    sunday = datetime.datetime(2024, 2, 11, 0, 1, tzinfo=TZ)
    start, end = period_range(Op.THIS_WEEK, sunday)
    assert start == at(2024, 2, 11)
    assert end == at(2024, 2, 17, end=True)


def test_yesterday_crosses_year_boundary():
    new_year = datetime.datetime(2024, 1, 1, 9, tzinfo=TZ)
    assert period_range(Op.YESTERDAY, new_year)[0] == at(2023, 12, 31)


def test_naive_now_uses_local_zone():
    start, end = period_range(Op.TODAY, datetime.datetime(2024, 2, 14, 12))
    assert start.tzinfo is not None
    assert end - start == datetime.timedelta(hours=23, minutes=59, seconds=59, microseconds=999000)


def test_non_period_operator_rejected():
    with pytest.raises(ValueError):
        period_range(Op.EQUALS, NOW)


# Daylight-saving transitions: each boundary carries the offset of its own date.

HOUR = datetime.timedelta(hours=1)


@pytest.fixture
def new_york_zone():
    zoneinfo = pytest.importorskip("zoneinfo")
    try:
        return zoneinfo.ZoneInfo("America/New_York")
    except zoneinfo.ZoneInfoNotFoundError:
        pytest.skip("America/New_York is not in the time zone database")


@pytest.fixture
def local_new_york(monkeypatch, new_york_zone):
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is unavailable on this platform")
    monkeypatch.setenv("TZ", "America/New_York")
    time.tzset()
    if "EST" not in time.tzname:
        monkeypatch.undo()
        time.tzset()
        pytest.skip("the C library has no America/New_York rules")
    yield new_york_zone
    monkeypatch.undo()
    time.tzset()


def test_this_year_bounds_use_winter_offset_in_summer(local_new_york):
    now = datetime.datetime(2026, 7, 1, 12).astimezone()
    assert now.utcoffset() == -4 * HOUR

    start, end = period_range(Op.THIS_YEAR, now)

    assert start.utcoffset() == -5 * HOUR
    assert end.utcoffset() == -5 * HOUR
    assert start == datetime.datetime(2026, 1, 1, tzinfo=local_new_york)
    assert end == datetime.datetime(2026, 12, 31, 23, 59, 59, 999000, tzinfo=local_new_york)


def test_this_month_spanning_dst_end(local_new_york):
    now = datetime.datetime(2026, 11, 1, 0, 30).astimezone()

    start, end = period_range(Op.THIS_MONTH, now)

    assert start.utcoffset() == -4 * HOUR
    assert end.utcoffset() == -5 * HOUR
    assert end == datetime.datetime(2026, 11, 30, 23, 59, 59, 999000, tzinfo=local_new_york)


def test_late_december_row_is_outside_this_year(local_new_york):
    start, _ = period_range(Op.THIS_YEAR, datetime.datetime(2026, 7, 1, 12).astimezone())
    new_years_eve = datetime.datetime(2025, 12, 31, 23, 30, tzinfo=local_new_york)
    assert new_years_eve < start


def test_naive_clock_resolves_each_bound_locally(local_new_york):
    start, end = period_range(Op.THIS_YEAR, datetime.datetime(2026, 7, 1, 12))
    assert start.utcoffset() == -5 * HOUR
    assert end.utcoffset() == -5 * HOUR


def test_zoneinfo_clock_resolves_each_bound_in_its_zone(new_york_zone):
    now = datetime.datetime(2026, 3, 20, 9, tzinfo=new_york_zone)

    start, end = period_range(Op.THIS_MONTH, now)

    assert start == datetime.datetime(2026, 3, 1, tzinfo=new_york_zone)
    assert start.utcoffset() == -5 * HOUR
    assert end.utcoffset() == -4 * HOUR
