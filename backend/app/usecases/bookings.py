import random
from datetime import date
from typing import Iterable, Optional

from ..domain.errors import InvalidFormatError, SlotTakenError
from ..domain.repositories import ReservationRepository
from ..domain.services import (
    LIST_WINDOW_DAYS,
    BookingDraft,
    ReservationMap,
    fold_reservations,
    list_window,
    validate_booking,
)
from ..models import Reservation
from ..utils.dates import format_booking_date, parse_booking_date, shift_days

DEMO_HOURS = range(9, 18)


async def list_bookings(
    res_repo: ReservationRepository,
    *,
    target_date: str,
) -> ReservationMap:
    try:
        target = parse_booking_date(target_date)
    except ValueError as exc:
        raise InvalidFormatError("date", "date must be a valid yyyyMMdd calendar date") from exc

    date_low, date_high = list_window(target)
    reservations = await res_repo.find_in_range(date_low, date_high)
    return fold_reservations(reservations)


async def create_booking(
    res_repo: ReservationRepository,
    *,
    date: Optional[str],
    start_time: Optional[str],
    title: Optional[str],
    content: Optional[str],
) -> Reservation:
    booking = validate_booking(BookingDraft(date=date, start_time=start_time, title=title, content=content))

    existing = await res_repo.find_exact(booking.date, booking.start_time)
    if existing is not None:
        raise SlotTakenError(booking.date, booking.start_time)

    return await res_repo.insert(
        date=booking.date,
        start_time=booking.start_time,
        title=booking.title,
        content=booking.content,
    )


async def seed_demo_reservations(
    res_repo: ReservationRepository,
    *,
    today: date,
    rng: random.Random,
    probability: float = 0.3,
    hours: Iterable[int] = DEMO_HOURS,
) -> list[Reservation]:
    """Fill the list window around `today` with random demo reservations.

    Slots that are already taken are left alone.
    """
    if not 0.0 <= probability <= 1.0:
        raise ValueError("probability must be between 0 and 1")

    hour_list = list(hours)
    created: list[Reservation] = []
    for offset in range(-LIST_WINDOW_DAYS, LIST_WINDOW_DAYS + 1):
        day = format_booking_date(shift_days(today, offset))
        for hour in hour_list:
            if rng.random() >= probability:
                continue
            start_time = str(hour)
            if await res_repo.find_exact(day, start_time) is not None:
                continue
            created.append(
                await res_repo.insert(
                    date=day,
                    start_time=start_time,
                    title=f"Test reservation {offset}-{hour}",
                    content=f"Test content {offset}-{hour}",
                )
            )
    return created
