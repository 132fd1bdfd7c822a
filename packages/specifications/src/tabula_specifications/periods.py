"""Calendar periods for the clock-relative date operators."""

from __future__ import annotations

import calendar
import datetime

from .operators import FilterOperator as Op

_DAY_END = datetime.time(23, 59, 59, 999000)


def _in_local_zone(now: datetime.datetime) -> bool:
    """
    True for naive clocks and for the fixed offset ``astimezone()`` gives.

    Such an offset is only valid at *now*; boundaries on other dates must
    take the local offset in force on their own day.
    """
    if now.tzinfo is None:
        return True
    return (
        isinstance(now.tzinfo, datetime.timezone)
        and now.utcoffset() == now.astimezone().utcoffset()
    )


def _attach(naive: datetime.datetime, now: datetime.datetime) -> datetime.datetime:
    """Pin a wall-clock value to *now*'s zone, resolving DST per date."""
    if _in_local_zone(now):
        return naive.astimezone()
    # zoneinfo zones resolve the offset of each wall-clock value themselves
    return naive.replace(tzinfo=now.tzinfo)


def period_range(
    operator: Op, now: datetime.datetime
) -> tuple[datetime.datetime, datetime.datetime]:
    """
    Return the inclusive ``[start, end]`` instants of the period *operator*
    names, as seen from the wall clock at *now*.

    ``start`` is 00:00:00.000 of the period's first day and ``end`` is
    23:59:59.999 of its last day.  Weeks start on Sunday.
    """
    today = now.date()
    if operator is Op.TODAY:
        first = last = today
    elif operator is Op.YESTERDAY:
        first = last = today - datetime.timedelta(days=1)
    elif operator is Op.THIS_WEEK:
        first = today - datetime.timedelta(days=(today.weekday() + 1) % 7)
        last = first + datetime.timedelta(days=6)
    elif operator is Op.THIS_MONTH:
        first = today.replace(day=1)
        last = today.replace(day=calendar.monthrange(today.year, today.month)[1])
    elif operator is Op.THIS_YEAR:
        first = datetime.date(today.year, 1, 1)
        last = datetime.date(today.year, 12, 31)
    else:
        raise ValueError(f"{operator} is not a period operator")

    start = datetime.datetime.combine(first, datetime.time.min)
    end = datetime.datetime.combine(last, _DAY_END)
    return _attach(start, now), _attach(end, now)
