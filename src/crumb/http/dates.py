"""Cookie date rendering.

``Expires`` is written in the fixed-width RFC 1123 form
``Www, dd Mon yyyy hh:mm:ss GMT``. Day and month names come from fixed
tables rather than ``strftime`` so the output never depends on the locale.
"""

import logging
from datetime import UTC, datetime

logger = logging.getLogger("crumb.dates")

DAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
MONTH_NAMES = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

COOKIE_DATE_LENGTH = 29

# Absolute time 0 marks a session cookie, not 1 January 1970.
SESSION_TIMESTAMP = 0


def format_expires(timestamp: float) -> str | None:
    """Render *timestamp* (seconds since the epoch) as a cookie date.

    Returns ``None`` for the session sentinel and when the timestamp cannot
    be converted to a UTC calendar date; callers then keep whatever expiry
    they already had.
    """
    if timestamp == SESSION_TIMESTAMP:
        return None
    try:
        moment = datetime.fromtimestamp(int(timestamp), tz=UTC)
    except (OverflowError, OSError, ValueError) as exc:
        logger.debug("Cannot convert %r to a cookie date: %s", timestamp, exc)
        return None
    return (
        f"{DAY_NAMES[moment.isoweekday() % 7]}, {moment.day:02d} {MONTH_NAMES[moment.month - 1]} "
        f"{moment.year:04d} {moment.hour:02d}:{moment.minute:02d}:{moment.second:02d} GMT"
    )
