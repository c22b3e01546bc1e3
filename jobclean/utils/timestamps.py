"""UTC timestamp helpers for posting dates.

Job boards send posting dates in several ISO 8601 shapes (with ``Z``, with
an offset, naive, or date-only). Everything is normalized to an aware UTC
datetime and rendered as ``YYYY-MM-DDTHH:MM:SSZ``.
"""

from datetime import datetime, timezone
from typing import Optional

ISO_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
ISO_FORMAT_MICROSECONDS = "%Y-%m-%dT%H:%M:%S.%fZ"

# Tried in order once datetime.fromisoformat() gives up
FALLBACK_FORMATS = ("%Y-%m-%dT%H:%M:%S", "%Y-%m-%d")


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive datetimes and convert aware ones to UTC.

    Args:
        dt: Datetime to convert (can be None)

    Returns:
        Aware UTC datetime, or None if input is None
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_iso_datetime(iso_string: str) -> Optional[datetime]:
    """Parse an ISO 8601 string into an aware UTC datetime.

    Returns None for blank or unparseable input instead of raising, since
    posting dates are optional metadata.

    Example:
        >>> parse_iso_datetime("2025-11-04T12:00:00Z").hour
        12
    """
    candidate = (iso_string or "").strip()
    if not candidate:
        return None

    # fromisoformat() only accepts the Z suffix on Python 3.11+
    if candidate.endswith("Z"):
        candidate = candidate[:-1] + "+00:00"

    try:
        return ensure_utc(datetime.fromisoformat(candidate))
    except ValueError:
        pass

    for fmt in FALLBACK_FORMATS:
        try:
            return ensure_utc(datetime.strptime(candidate, fmt))
        except ValueError:
            continue
    return None


def format_timestamp(dt: datetime, include_microseconds: bool = False) -> str:
    """Render a datetime as a Z-suffixed UTC ISO 8601 string."""
    dt_utc = ensure_utc(dt)
    if dt_utc is None:
        return ""
    return dt_utc.strftime(ISO_FORMAT_MICROSECONDS if include_microseconds else ISO_FORMAT)


def normalize_posted_date(value: Optional[str]) -> str:
    """Normalize an upstream posting date to an ISO 8601 UTC string.

    Missing dates default to the current time. Dates that cannot be parsed
    are passed through trimmed so nothing the board sent is lost.

    Args:
        value: Date string from the job board (can be None)

    Returns:
        ISO 8601 formatted string

    Example:
        >>> normalize_posted_date("2025-11-04")
        '2025-11-04T00:00:00Z'
    """
    if value is None or not value.strip():
        return format_timestamp(utc_now())

    parsed = parse_iso_datetime(value)
    return format_timestamp(parsed) if parsed is not None else value.strip()
