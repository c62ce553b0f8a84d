from typing import Any, Dict, Optional

from pydantic import BaseModel, field_validator

from .models import Reservation


class BookingCreate(BaseModel):
    # Presence and format are checked by the booking rules, not here,
    # so that missing fields are reported together with a 400.
    date: Optional[str] = None
    start_time: Optional[str] = None
    title: Optional[str] = None
    content: Optional[str] = None

    @field_validator("date", "start_time", mode="before")
    @classmethod
    def _numbers_as_text(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class BookingRead(BaseModel):
    date: str
    start_time: str
    title: str
    content: str

    @classmethod
    def from_db(cls, *, reservation: Reservation) -> "BookingRead":
        return cls(
            date=reservation.date,
            start_time=reservation.start_time,
            title=reservation.title,
            content=reservation.content,
        )


class SlotEntry(BaseModel):
    title: str
    content: str


# date -> start_time -> entry
BookingList = Dict[str, Dict[str, SlotEntry]]


class HealthRead(BaseModel):
    status: str
    message: str
