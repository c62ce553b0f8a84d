from __future__ import annotations

from typing import Protocol, Sequence

from ..models import Reservation


class ReservationRepository(Protocol):
    async def find_in_range(self, date_low: str, date_high: str) -> Sequence[Reservation]: ...

    async def find_exact(self, date: str, start_time: str) -> Reservation | None: ...

    async def insert(
        self,
        *,
        date: str,
        start_time: str,
        title: str,
        content: str,
    ) -> Reservation: ...
