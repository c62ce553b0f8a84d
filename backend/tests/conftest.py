from datetime import datetime, timezone
from typing import List, Optional

import pytest
from app.models import Reservation
from sqlalchemy.exc import IntegrityError


class InMemoryReservationRepo:
    """Reservation store double that enforces (date, start_time) uniqueness like the real table."""

    def __init__(self) -> None:
        self.rows: List[Reservation] = []
        # simulate a concurrent writer that passed the pre-check first
        self.hide_existing = False

    def add(self, date: str, start_time: str, title: str = "title", content: str = "content") -> Reservation:
        reservation = Reservation(
            id=len(self.rows) + 1,
            date=date,
            start_time=start_time,
            title=title,
            content=content,
            created_at=datetime.now(timezone.utc).replace(tzinfo=None),
        )
        self.rows.append(reservation)
        return reservation

    async def find_in_range(self, date_low: str, date_high: str) -> List[Reservation]:
        matches = [r for r in self.rows if date_low <= r.date <= date_high]
        return sorted(matches, key=lambda r: (r.date, r.start_time, r.id))

    async def find_exact(self, date: str, start_time: str) -> Optional[Reservation]:
        if self.hide_existing:
            return None
        for r in self.rows:
            if r.date == date and r.start_time == start_time:
                return r
        return None

    async def insert(self, *, date: str, start_time: str, title: str, content: str) -> Reservation:
        if any(r.date == date and r.start_time == start_time for r in self.rows):
            raise IntegrityError("INSERT INTO reservations", {}, Exception("Duplicate entry for uq_reservations_slot"))
        return self.add(date, start_time, title, content)


class DummySession:
    """Minimal async session stub that supports `async with session.begin()`."""

    async def __aenter__(self) -> "DummySession":
        return self

    async def __aexit__(self, exc_type: object, exc: object, tb: object) -> bool:
        return False

    def begin(self) -> "DummySession":
        return self


@pytest.fixture
def memory_repo() -> InMemoryReservationRepo:
    return InMemoryReservationRepo()


@pytest.fixture
def dummy_session() -> DummySession:
    return DummySession()
