"""
Timezone helpers.

Validity is decided by actually converting "now" into the zone rather than by
checking a fixed list.
"""
from datetime import datetime
from typing import Optional

import pytz

from core.exceptions import InvalidTimezoneError

TIME_FORMAT = "%H:%M"


def resolve_timezone(name: str) -> str:
    """
    Validate a timezone name by converting the current time into it.

    Args:
        name: IANA timezone identifier, matched case-insensitively

    Returns:
        The canonical spelling of the zone (e.g. 'Europe/London')

    Raises:
        InvalidTimezoneError: if the zone is unknown or the conversion fails
    """
    try:
        tz = pytz.timezone(name)
        datetime.now(pytz.utc).astimezone(tz)
    except (pytz.UnknownTimeZoneError, ValueError, OverflowError) as e:
        raise InvalidTimezoneError(name) from e
    return tz.zone


def local_now(timezone: str, now: Optional[datetime] = None) -> datetime:
    """Return ``now`` (default: current UTC time) converted into ``timezone``."""
    if now is None:
        now = datetime.now(pytz.utc)
    elif now.tzinfo is None:
        now = pytz.utc.localize(now)
    return now.astimezone(pytz.timezone(timezone))


def format_local_time(timezone: str, now: Optional[datetime] = None) -> str:
    """Current time in ``timezone`` as a zero-padded 24-hour ``HH:mm`` string."""
    return local_now(timezone, now).strftime(TIME_FORMAT)
