"""
Date utility functions
"""
from datetime import datetime, date
import pytz


# Calendar date format accepted in request bodies
REQUEST_DATE_FORMAT = '%Y-%m-%d'

# Format the assignment dates are persisted with
STORAGE_DATETIME_FORMAT = '%Y-%m-%d %H:%M:%S'


def parse_request_date(value):
    """
    Parse a YYYY-MM-DD string into a UTC datetime at midnight

    Returns:
        Timezone-aware datetime, or None when the value is not a valid date
    """
    if not isinstance(value, str):
        return None

    try:
        parsed = datetime.strptime(value, REQUEST_DATE_FORMAT)
    except ValueError:
        return None

    # strptime tolerates single-digit fields, the request format does not
    if parsed.strftime(REQUEST_DATE_FORMAT) != value:
        return None

    return pytz.UTC.localize(parsed)


def ensure_utc(value):
    """Attach UTC to naive datetimes and convert aware ones to UTC"""
    if value.tzinfo is None:
        return pytz.UTC.localize(value)
    return value.astimezone(pytz.UTC)


def to_rfc3339(value):
    """Format a date or datetime as an RFC 3339 UTC timestamp (e.g. 1994-11-08T00:00:00Z)"""
    if value is None:
        return None

    if not isinstance(value, datetime):
        value = datetime.combine(value, datetime.min.time())

    return ensure_utc(value).strftime('%Y-%m-%dT%H:%M:%SZ')


def to_storage_format(value):
    """Format a date or datetime the way assignment rows store it"""
    if not isinstance(value, datetime):
        value = datetime.combine(value, datetime.min.time())
    return value.strftime(STORAGE_DATETIME_FORMAT)


def to_calendar_date(value):
    """Reduce a datetime to its UTC calendar date"""
    if isinstance(value, datetime):
        return ensure_utc(value).date()
    if isinstance(value, date):
        return value
    raise TypeError(f'expected a date or datetime, got {type(value).__name__}')
