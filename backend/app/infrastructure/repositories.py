from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..domain.repositories import ReservationRepository
from ..models import Reservation


def range_query(date_low: str, date_high: str) -> Select[tuple[Reservation]]:
    return (
        select(Reservation)
        .where(Reservation.date >= date_low, Reservation.date <= date_high)
        .order_by(Reservation.date, Reservation.start_time, Reservation.id)
    )


def exact_query(date: str, start_time: str) -> Select[tuple[Reservation]]:
    return select(Reservation).where(Reservation.date == date, Reservation.start_time == start_time).limit(1)


class SqlAlchemyReservationRepository(ReservationRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_in_range(self, date_low: str, date_high: str) -> List[Reservation]:
        rows = await self.session.scalars(range_query(date_low, date_high))
        return list(rows.all())

    async def find_exact(self, date: str, start_time: str) -> Optional[Reservation]:
        result = await self.session.scalar(exact_query(date, start_time))
        return result if isinstance(result, Reservation) else None

    async def insert(
        self,
        *,
        date: str,
        start_time: str,
        title: str,
        content: str,
    ) -> Reservation:
        reservation = Reservation(
            date=date,
            start_time=start_time,
            title=title,
            content=content,
            created_at=datetime.now(timezone.utc).replace(tzinfo=None),
        )
        self.session.add(reservation)
        # surfaces uq_reservations_slot violations as IntegrityError here
        await self.session.flush()
        return reservation
