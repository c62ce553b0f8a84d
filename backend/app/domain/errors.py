from typing import Sequence


class BookingError(Exception):
    """Base class for booking rule violations."""


class MissingFieldsError(BookingError):
    def __init__(self, fields: Sequence[str]) -> None:
        self.fields = list(fields)
        super().__init__(f"missing required fields: {', '.join(self.fields)}")


class InvalidFormatError(BookingError):
    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(message)


class SlotTakenError(BookingError):
    def __init__(self, date: str, start_time: str) -> None:
        self.date = date
        self.start_time = start_time
        super().__init__("this time slot is already reserved")
