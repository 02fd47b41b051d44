from datetime import date, datetime, time, timezone as dt_timezone
from typing import Optional


def utcnow() -> datetime:
    """Current wall-clock time as UTC-naive, the form stored in every table."""
    return datetime.now(dt_timezone.utc).replace(tzinfo=None)


def utcnow_aware() -> datetime:
    return datetime.now(dt_timezone.utc)


def to_utc_naive(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Normalize any datetime to UTC-naive (tzinfo=None) for consistent storage/comparison.
    - Aware datetimes are converted to UTC and tzinfo is stripped
    - Naive datetimes are returned as-is (assumed UTC)
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(dt_timezone.utc).replace(tzinfo=None)


def to_utc_aware(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Normalize any datetime to UTC-aware (tzinfo=UTC) for API responses.
    - Aware datetimes are converted to UTC
    - Naive datetimes are assumed UTC and tz attached
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=dt_timezone.utc)
    return dt.astimezone(dt_timezone.utc)


def isoformat_utc(dt: Optional[datetime]) -> Optional[str]:
    aware = to_utc_aware(dt)
    return aware.isoformat().replace("+00:00", "Z") if aware else None


def parse_day(value: str) -> date:
    """Parse a ``YYYY-MM-DD`` query value; raises ValueError otherwise."""
    return datetime.strptime(value.strip(), "%Y-%m-%d").date()


def start_of_day(d: date) -> datetime:
    return datetime.combine(d, time.min)


def end_of_day(d: date) -> datetime:
    # 23:59:59.999, the same inclusive bound the dashboard sends
    return datetime.combine(d, time(23, 59, 59, 999000))


def parse_datetime(value) -> Optional[datetime]:
    """Accept a datetime, a ``YYYY-MM-DD`` day or an ISO-8601 string (``Z`` allowed).

    Returns UTC-naive. Empty strings become None; anything else raises ValueError.
    """
    if value is None or isinstance(value, datetime):
        return to_utc_naive(value)
    if isinstance(value, date):
        return start_of_day(value)
    if not isinstance(value, str):
        raise ValueError("Invalid date")
    text = value.strip()
    if not text:
        return None
    if len(text) == 10:
        return start_of_day(parse_day(text))
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    return to_utc_naive(datetime.fromisoformat(text))
