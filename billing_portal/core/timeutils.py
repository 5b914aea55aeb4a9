"""
Local wall-clock timestamps and display dates.

The portal API stores naive ``YYYY-MM-DD HH:MM:SS`` strings in the business's
local time, so every timestamp the portal sends goes through ``local_timestamp``.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Union
from zoneinfo import ZoneInfo

from ..config import get_settings

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
MONTH_YEAR_FORMAT = "%b %Y"
DAY_MONTH_YEAR_FORMAT = "%d-%b-%Y"

DateInput = Union[str, date, datetime]


def local_zone(tz: Optional[str] = None) -> ZoneInfo:
    return ZoneInfo(tz or get_settings().TIMEZONE)


def to_local(moment: datetime, tz: Optional[str] = None) -> datetime:
    """Aware datetimes are converted to the local zone; naive ones are taken as local already."""
    zone = local_zone(tz)
    if moment.tzinfo is None:
        return moment.replace(tzinfo=zone)
    return moment.astimezone(zone)


def local_timestamp(moment: Optional[datetime] = None, tz: Optional[str] = None) -> str:
    """Render ``moment`` (default: now) as local wall-clock ``YYYY-MM-DD HH:MM:SS``."""
    if moment is None:
        moment = datetime.now(local_zone(tz))
    return to_local(moment, tz).strftime(TIMESTAMP_FORMAT)


def parse_date_input(value: DateInput) -> datetime:
    """Accept ``YYYY-MM-DD``, ``YYYY-MM-DDTHH:MM[:SS]`` strings, dates and datetimes."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    return datetime.fromisoformat(value.strip())


def format_month_year(value: DateInput) -> str:
    """e.g. ``Jan 2024``"""
    return parse_date_input(value).strftime(MONTH_YEAR_FORMAT)


def format_day_month_year(value: DateInput) -> str:
    """e.g. ``15-Jun-2024``"""
    return parse_date_input(value).strftime(DAY_MONTH_YEAR_FORMAT)
