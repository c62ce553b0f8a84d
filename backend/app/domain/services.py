import logging
import re
from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, Optional

from ..models import Reservation
from ..utils.dates import format_booking_date, is_booking_date, shift_days
from .errors import InvalidFormatError, MissingFieldsError

logger = logging.getLogger(__name__)

LIST_WINDOW_DAYS = 7

_START_TIME_RE = re.compile(r"[0-9]{1,2}")

SlotEntry = Dict[str, str]
ReservationMap = Dict[str, Dict[str, SlotEntry]]


@dataclass(frozen=True)
class BookingDraft:
    date: Optional[str]
    start_time: Optional[str]
    title: Optional[str]
    content: Optional[str]


@dataclass(frozen=True)
class ValidBooking:
    date: str
    start_time: str
    title: str
    content: str


def validate_booking(draft: BookingDraft) -> ValidBooking:
    """
    Pure validation of a create request, short-circuiting on the first failing rule:
    presence of all fields, then the date format, then the start_time format.
    Slot availability is checked against the store by the use case.
    """
    missing = [name for name in ("date", "start_time", "title", "content") if not getattr(draft, name)]
    if missing:
        raise MissingFieldsError(missing)

    # presence check above guarantees these are non-empty strings
    booking = ValidBooking(
        date=draft.date or "",
        start_time=draft.start_time or "",
        title=draft.title or "",
        content=draft.content or "",
    )
    if not is_booking_date(booking.date):
        raise InvalidFormatError("date", "date must be 8 digits (yyyyMMdd)")
    if _START_TIME_RE.fullmatch(booking.start_time) is None:
        raise InvalidFormatError("start_time", "start_time must be 1 or 2 digits")
    return booking


def list_window(target: date, *, days: int = LIST_WINDOW_DAYS) -> tuple[str, str]:
    """Inclusive (low, high) yyyyMMdd bounds around target."""
    return format_booking_date(shift_days(target, -days)), format_booking_date(shift_days(target, days))


def fold_reservations(reservations: Iterable[Reservation]) -> ReservationMap:
    """Group reservations as date -> start_time -> {title, content}.

    A repeated slot keeps the last record seen.
    """
    result: ReservationMap = {}
    for reservation in reservations:
        slots = result.setdefault(reservation.date, {})
        if reservation.start_time in slots:
            logger.warning(
                "duplicate reservation for slot %s/%s, keeping the later record",
                reservation.date,
                reservation.start_time,
            )
        slots[reservation.start_time] = {"title": reservation.title, "content": reservation.content}
    return result
