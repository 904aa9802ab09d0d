"""
Timestamp helpers

All instants are timezone-aware UTC datetimes. The canonical text form is
millisecond ISO-8601 with a trailing Z (2024-01-01T00:00:00.000Z); it is
both the storage format and the seed key for articles.
"""
from datetime import MAXYEAR, MINYEAR, datetime, timedelta, timezone
from typing import Optional

from .errors import InputValidationError

UNITS = {
    "minute": timedelta(minutes=1),
    "second": timedelta(seconds=1),
}

# Query bounds stay one year inside the datetime range
MIN_YEAR = MINYEAR + 1
MAX_YEAR = MAXYEAR - 1


def to_iso(instant: datetime) -> str:
    """Format an instant as YYYY-MM-DDTHH:MM:SS.mmmZ"""
    instant = instant.astimezone(timezone.utc)
    return instant.strftime("%Y-%m-%dT%H:%M:%S.") + f"{instant.microsecond // 1000:03d}Z"


def parse_iso(value: str) -> datetime:
    """Parse an ISO-8601 string; naive values are taken as UTC"""
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def floor_to(instant: datetime, unit: str) -> datetime:
    """Truncate an instant to the start of its minute or second"""
    if unit == "minute":
        return instant.replace(second=0, microsecond=0)
    if unit == "second":
        return instant.replace(microsecond=0)
    raise ValueError(f"Unknown time unit: {unit}")


def parse_range(
    start: Optional[str],
    end: Optional[str],
    unit: Optional[str] = None
) -> tuple[datetime, datetime]:
    """
    Validate and parse a [start, end] query window.

    When unit is given both bounds are floored to it before comparing.

    Raises:
        InputValidationError: bound missing, unparsable, outside
            MIN_YEAR..MAX_YEAR, or end <= start
    """
    if not start or not end:
        raise InputValidationError("start and end query params required")

    try:
        start_time = parse_iso(start)
        end_time = parse_iso(end)
    except (ValueError, OverflowError):
        raise InputValidationError("Invalid start/end timestamp") from None

    for bound in (start_time, end_time):
        if not MIN_YEAR <= bound.year <= MAX_YEAR:
            raise InputValidationError(f"start/end must fall in years {MIN_YEAR}-{MAX_YEAR}")

    if unit:
        start_time = floor_to(start_time, unit)
        end_time = floor_to(end_time, unit)

    if end_time <= start_time:
        raise InputValidationError("end must be > start")

    return start_time, end_time
