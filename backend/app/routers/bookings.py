import logging
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..deps import get_session
from ..domain.errors import InvalidFormatError, MissingFieldsError, SlotTakenError
from ..domain.services import ReservationMap
from ..infrastructure.repositories import SqlAlchemyReservationRepository
from ..schemas import BookingCreate, BookingList, BookingRead
from ..usecases import bookings as booking_usecase
from ..utils.audit_log import emit_audit_log

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/booking", tags=["booking"])

SLOT_TAKEN_MESSAGE = "This time slot is already reserved"


def _error(status_code: int, code: str, message: str, **extra: Any) -> HTTPException:
    return HTTPException(status_code=status_code, detail={"code": code, "message": message, **extra})


def _internal_error() -> HTTPException:
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "internal_error", "Internal server error")


@router.get("/list/{date}", response_model=BookingList)
async def list_bookings(
    date: str,
    session: AsyncSession = Depends(get_session),
) -> ReservationMap:
    res_repo = SqlAlchemyReservationRepository(session)
    try:
        return await booking_usecase.list_bookings(res_repo, target_date=date)
    except InvalidFormatError as exc:
        raise _error(status.HTTP_400_BAD_REQUEST, "invalid_date", str(exc), field=exc.field)
    except (SQLAlchemyError, OSError):
        logger.exception("failed to fetch reservations around %s", date)
        raise _internal_error()


@router.post("", response_model=BookingRead, status_code=status.HTTP_201_CREATED)
async def create_booking(
    payload: Optional[BookingCreate] = Body(default=None),
    session: AsyncSession = Depends(get_session),
) -> BookingRead:
    # an empty body is treated as every field missing
    payload = payload or BookingCreate()
    res_repo = SqlAlchemyReservationRepository(session)
    try:
        async with session.begin():
            reservation = await booking_usecase.create_booking(
                res_repo,
                date=payload.date,
                start_time=payload.start_time,
                title=payload.title,
                content=payload.content,
            )
            emit_audit_log(
                action="reservation.created",
                reservation_id=reservation.id,
                date=reservation.date,
                start_time=reservation.start_time,
            )
    except MissingFieldsError as exc:
        raise _error(
            status.HTTP_400_BAD_REQUEST,
            "missing_fields",
            "All fields are required",
            fields=exc.fields,
        )
    except InvalidFormatError as exc:
        raise _error(status.HTTP_400_BAD_REQUEST, "invalid_format", str(exc), field=exc.field)
    except SlotTakenError:
        raise _error(status.HTTP_409_CONFLICT, "slot_taken", SLOT_TAKEN_MESSAGE)
    except IntegrityError:
        # lost the race against a concurrent insert for the same slot
        logger.info("unique constraint rejected slot %s/%s", payload.date, payload.start_time)
        raise _error(status.HTTP_409_CONFLICT, "slot_taken", SLOT_TAKEN_MESSAGE)
    except (SQLAlchemyError, OSError):
        logger.exception("failed to create reservation")
        raise _internal_error()
    except RuntimeError:
        logger.exception("reservation rolled back, audit log unavailable")
        raise _internal_error()

    return BookingRead.from_db(reservation=reservation)
