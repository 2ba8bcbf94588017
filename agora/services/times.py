"""Time helpers for epoch-millis timestamps."""

import datetime as dt

from agora.services.lang import LangService

MINUTE_UNIT = 60 * 1000
HOUR_UNIT = 60 * MINUTE_UNIT
DAY_UNIT = 24 * HOUR_UNIT
WEEK_UNIT = 7 * DAY_UNIT
MONTH_UNIT = 31 * DAY_UNIT
YEAR_UNIT = 12 * MONTH_UNIT

EPOCH = dt.datetime(1970, 1, 1, tzinfo=dt.timezone.utc)

_AGO_UNITS = [
    (YEAR_UNIT, "years_ago"),
    (MONTH_UNIT, "months_ago"),
    (WEEK_UNIT, "weeks_ago"),
    (DAY_UNIT, "days_ago"),
    (HOUR_UNIT, "hours_ago"),
    (MINUTE_UNIT, "minutes_ago"),
]

_WEEK_DAY_KEYS = ["mon", "tue", "wed", "thu", "fri", "sat", "sun"]


def now_millis() -> int:
    return datetime_to_millis(dt.datetime.now(dt.timezone.utc))


def millis_to_datetime(millis: int) -> dt.datetime:
    return EPOCH + dt.timedelta(milliseconds=millis)


def datetime_to_millis(value: dt.datetime) -> int:
    if value.tzinfo is None:
        value = value.replace(tzinfo=dt.timezone.utc)
    return (value - EPOCH) // dt.timedelta(milliseconds=1)


def time_ago(millis: int, lang: LangService, now: int | None = None) -> str:
    """Relative text such as "3 days ago"; anything under a minute is "just now"."""
    now = now_millis() if now is None else now
    diff = now - millis
    for unit, key in _AGO_UNITS:
        if diff > unit:
            return f"{diff // unit} {lang.get(key)}"
    return lang.get("just_now")


def week_day(millis: int) -> int:
    """ISO week day of the given instant, Monday=1 .. Sunday=7."""
    return millis_to_datetime(millis).isoweekday()


def week_day_name(day: int, lang: LangService) -> str:
    if not 1 <= day <= 7:
        day = 1
    return lang.get(_WEEK_DAY_KEYS[day - 1])


def day_start(millis: int) -> int:
    start = millis_to_datetime(millis).replace(hour=0, minute=0, second=0, microsecond=0)
    return datetime_to_millis(start)


def day_end(millis: int) -> int:
    end = millis_to_datetime(millis).replace(hour=23, minute=59, second=59, microsecond=999000)
    return datetime_to_millis(end)


def week_start(millis: int) -> int:
    """Monday 00:00:00.000 of the week holding the given instant."""
    value = millis_to_datetime(millis)
    monday = value - dt.timedelta(days=value.weekday())
    return day_start(datetime_to_millis(monday))


def week_end(millis: int) -> int:
    """Sunday 23:59:59.999 of the week holding the given instant."""
    value = millis_to_datetime(millis)
    sunday = value + dt.timedelta(days=6 - value.weekday())
    return day_end(datetime_to_millis(sunday))


def is_same_day(a: dt.datetime, b: dt.datetime) -> bool:
    return a.date() == b.date()


def is_same_week(a: dt.datetime, b: dt.datetime) -> bool:
    return a.isocalendar()[:2] == b.isocalendar()[:2]
