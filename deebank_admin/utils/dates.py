# deebank_admin/utils/dates.py
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Tuple

from deebank_admin.core.config import settings


def utcnow() -> datetime:
    """Naive UTC timestamp, the format the backend tables store."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def local_timezone(offset_hours: Optional[int] = None) -> timezone:
    if offset_hours is None:
        offset_hours = settings.LOCAL_UTC_OFFSET_HOURS
    return timezone(timedelta(hours=offset_hours))


def local_day_bounds(day: date, offset_hours: Optional[int] = None) -> Tuple[datetime, datetime]:
    """
    Closed interval [00:00:00, 23:59:59.999999] of `day` in platform local
    time, expressed as naive UTC so it compares against stored timestamps.
    """
    tz = local_timezone(offset_hours)
    start = datetime.combine(day, time.min, tzinfo=tz)
    end = datetime.combine(day, time.max, tzinfo=tz)
    return (
        start.astimezone(timezone.utc).replace(tzinfo=None),
        end.astimezone(timezone.utc).replace(tzinfo=None),
    )


def to_local(value: Optional[datetime], offset_hours: Optional[int] = None) -> Optional[datetime]:
    """Attach UTC to a stored naive timestamp and shift it to local time."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(local_timezone(offset_hours))
