from datetime import datetime
from typing import Optional

import pytz
from dateutil import parser

# Todas las fechas se guardan como UTC "naive" para comparar igual en SQLite y PostgreSQL


def utcnow() -> datetime:
    """Returns current UTC time without tzinfo"""
    return datetime.now(pytz.utc).replace(tzinfo=None)


def to_utc_naive(dt: Optional[datetime]) -> Optional[datetime]:
    """Converts a datetime to naive UTC; naive values are assumed to be UTC already"""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(pytz.utc).replace(tzinfo=None)


def parse_datetime(value: str) -> datetime:
    """Parses an ISO 8601 string (date or datetime) into naive UTC"""
    return to_utc_naive(parser.isoparse(value))
