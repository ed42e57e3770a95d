"""Timezone utilities. All stored and displayed times are UTC."""

from datetime import datetime
from typing import Union

import pytz
from dateutil import parser as date_parser

UTC_TZ = pytz.UTC


def now_utc() -> datetime:
    """Return current time in UTC."""
    return datetime.now(UTC_TZ)


def to_utc(dt: datetime) -> datetime:
    """Convert a datetime to UTC."""
    if dt.tzinfo is None:
        # Assume naive datetime is already UTC (SQLite drops tzinfo)
        return UTC_TZ.localize(dt)
    return dt.astimezone(UTC_TZ)


def parse_datetime_utc(value: str) -> datetime:
    """
    Parse a datetime string and return it in UTC.

    If no timezone is provided in the string, assumes UTC.
    """
    return to_utc(date_parser.parse(value))


def from_timestamp(seconds: Union[int, float]) -> datetime:
    """Convert a unix timestamp in seconds to an aware UTC datetime."""
    return datetime.fromtimestamp(float(seconds), UTC_TZ)


def to_naive_utc(dt: datetime) -> datetime:
    """Convert to UTC and drop tzinfo, the form stored in DateTime columns."""
    return to_utc(dt).replace(tzinfo=None)
