"""
Calendar helpers for plan materialization.

All iteration is done on ``date`` values, never on datetimes, so DST
transitions in either the client's or the server's zone cannot skip or
repeat a day. Time zones only matter when deciding which calendar day the
client considers "today".
"""
import logging
from datetime import date, datetime, timedelta, timezone
from typing import Iterator, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)


def weekday_index(day: date) -> int:
    """Weekday as 0=Sunday .. 6=Saturday."""
    return day.isoweekday() % 7


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every calendar day from start to end, inclusive."""
    day = start
    while day <= end:
        yield day
        day += timedelta(days=1)


def add_one_year(day: date) -> date:
    """
    Same month and day one year later.

    Feb 29 maps to Feb 28 of the following year.
    """
    try:
        return day.replace(year=day.year + 1)
    except ValueError:
        return day.replace(year=day.year + 1, day=28)


def client_calendar_day(
    now_utc: Optional[datetime] = None,
    tz_name: Optional[str] = None,
    utc_offset_minutes: Optional[int] = None,
) -> date:
    """
    The calendar day at the client's location.

    Args:
        now_utc: Current instant (defaults to now)
        tz_name: IANA zone name, e.g. "America/New_York"; takes precedence
        utc_offset_minutes: Client offset east of UTC, e.g. -300 for EST

    Returns:
        The client's local date, or the UTC date when neither zone hint is usable
    """
    if now_utc is None:
        now_utc = datetime.now(timezone.utc)
    elif now_utc.tzinfo is None:
        now_utc = now_utc.replace(tzinfo=timezone.utc)

    if tz_name:
        try:
            return now_utc.astimezone(ZoneInfo(tz_name)).date()
        except (ZoneInfoNotFoundError, ValueError) as e:
            logger.warning(f"Unknown client time zone {tz_name!r}: {e}")

    if utc_offset_minutes is not None:
        # Real-world offsets are within UTC-12:00 .. UTC+14:00
        if -14 * 60 <= utc_offset_minutes <= 14 * 60:
            return (now_utc + timedelta(minutes=utc_offset_minutes)).date()
        logger.warning(f"Ignoring out-of-range client UTC offset {utc_offset_minutes}")

    return now_utc.date()
