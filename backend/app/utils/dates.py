import re
from datetime import date, datetime, timedelta

BOOKING_DATE_FORMAT = "%Y%m%d"

_BOOKING_DATE_RE = re.compile(r"[0-9]{8}")


def is_booking_date(value: str) -> bool:
    """True if value is exactly eight ASCII digits."""
    return _BOOKING_DATE_RE.fullmatch(value) is not None


def parse_booking_date(value: str) -> date:
    if not is_booking_date(value):
        raise ValueError(f"date must be yyyyMMdd: {value!r}")
    return datetime.strptime(value, BOOKING_DATE_FORMAT).date()


def format_booking_date(value: date) -> str:
    # strftime("%Y") does not zero-pad years below 1000 on every platform
    return f"{value.year:04d}{value.month:02d}{value.day:02d}"


def shift_days(value: date, days: int) -> date:
    """Add days, clamping to the representable date range."""
    try:
        return value + timedelta(days=days)
    except OverflowError:
        return date.max if days > 0 else date.min
