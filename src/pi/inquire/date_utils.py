"""Calendar helpers for the date prompt.

Weekdays follow :meth:`datetime.date.weekday` numbering (Monday is 0).
Month and weekday names are fixed English names and do not depend on the
process locale.
"""

from __future__ import annotations

import calendar
import datetime

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

WEEKDAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)


def get_current_date() -> datetime.date:
    return datetime.date.today()


def month_name(month: int) -> str:
    return MONTH_NAMES[month - 1]


def shift_months(date: datetime.date, delta: int) -> datetime.date | None:
    """Move *date* by *delta* months, clamping the day to the target month.

    Returns ``None`` when the result falls outside the supported year range.
    """
    total = date.year * 12 + (date.month - 1) + delta
    year, month0 = divmod(total, 12)
    if not datetime.MINYEAR <= year <= datetime.MAXYEAR:
        return None
    month = month0 + 1
    day = min(date.day, calendar.monthrange(year, month)[1])
    return datetime.date(year, month, day)


def calendar_start(year: int, month: int, week_start: int) -> datetime.date:
    """First date shown in a six-week calendar grid for *year*/*month*.

    The grid starts on the *week_start* weekday on or before the first of the
    month, one whole week earlier when the first already is *week_start*.
    """
    first = datetime.date(year, month, 1)
    back = (first.weekday() - week_start) % 7
    if back == 0:
        back = 7
    try:
        return first - datetime.timedelta(days=back)
    except OverflowError:
        return first
