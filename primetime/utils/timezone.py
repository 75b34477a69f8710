"""
Date and Time utilities

This module handles XMLTV timestamp parsing and the local calendar date used
by the evening-window filter.
Centralizes all date parsing logic to maintain consistency across the application.
"""
from datetime import date, datetime, timedelta, timezone
import logging
import re

logger = logging.getLogger(__name__)

# 'YYYYMMDDHHMMSS ±HHMM', e.g. '20251009205000 +0200'
_XMLTV_TIMESTAMP_RE = re.compile(r"(\d{14}) ([+-])(\d{2})(\d{2})", re.ASCII)


class DateFormatError(ValueError):
    """Raised when date format is invalid"""
    pass


def parse_xmltv_timestamp(time_str: str) -> datetime:
    """
    Parse an XMLTV timestamp keeping its own UTC offset

    This is the single source of truth for timestamp parsing across the application.
    The wall-clock fields are kept as written in the feed; nothing is converted to UTC.

    Args:
        time_str: XMLTV time like '20251009205000 +0200'

    Returns:
        Timezone-aware datetime with a fixed offset

    Raises:
        DateFormatError: If the timestamp does not match 'YYYYMMDDHHMMSS ±HHMM'
    """
    match = _XMLTV_TIMESTAMP_RE.fullmatch(time_str) if isinstance(time_str, str) else None
    if match is None:
        raise DateFormatError(f"Invalid XMLTV timestamp format: '{time_str}'")

    time_part, tz_sign, tz_hours, tz_mins = match.groups()

    try:
        dt = datetime.strptime(time_part, "%Y%m%d%H%M%S")
        sign = 1 if tz_sign == "+" else -1
        offset = timedelta(hours=int(tz_hours), minutes=int(tz_mins))
        return dt.replace(tzinfo=timezone(sign * offset))
    except ValueError as e:
        # Out-of-range fields such as month 13 or an offset of 24h or more
        raise DateFormatError(f"Invalid XMLTV timestamp format: '{time_str}'") from e


def local_today(now: datetime | None = None) -> date:
    """
    Return the caller's local calendar date

    Args:
        now: Optional reference time; naive values are taken as local time,
            aware values are converted to the local timezone first

    Returns:
        Local date
    """
    if now is None:
        return datetime.now().date()
    if now.tzinfo is not None:
        return now.astimezone().date()
    return now.date()
