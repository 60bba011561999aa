import datetime as dt
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..deps import get_grid, get_ledger, get_off_day_registry
from ..domain.errors import (
    BookingNotFoundError,
    BookingRejectedError,
    DateClosedError,
    InvalidContactError,
    InvalidPartySizeError,
    InvalidSlotError,
    SlotTakenError,
    StorageUnavailableError,
)
from ..domain.repositories import BookingLedger, OffDayRegistry
from ..schemas import BookingCreate, BookingCreated, BookingRead, Message
from ..usecases import bookings as booking_usecase
from ..utils.audit_log import emit_audit_log

router = APIRouter(prefix="", tags=["bookings"])

REJECTION_STATUS: dict[type[BookingRejectedError], int] = {
    InvalidSlotError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    InvalidPartySizeError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    InvalidContactError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    DateClosedError: status.HTTP_403_FORBIDDEN,
    SlotTakenError: status.HTTP_409_CONFLICT,
}


def _rejection_status(exc: BookingRejectedError) -> int:
    return REJECTION_STATUS[type(exc)]


@router.post("/bookings", response_model=BookingCreated, status_code=status.HTTP_201_CREATED)
async def create_booking(
    payload: BookingCreate,
    ledger: BookingLedger = Depends(get_ledger),
    off_days: OffDayRegistry = Depends(get_off_day_registry),
    grid: tuple[str, ...] = Depends(get_grid),
) -> BookingCreated:
    try:
        booking = await booking_usecase.admit_booking(
            ledger,
            off_days,
            grid,
            date=payload.date,
            time=payload.time,
            guests=payload.guests,
            name=payload.name,
            email=payload.email,
            phone=payload.phone,
        )
    except BookingRejectedError as exc:
        try:
            emit_audit_log(
                action="booking.rejected",
                booking_id=None,
                date=payload.date,
                time=payload.time,
                guests=payload.guests,
                reason=type(exc).__name__,
            )
        except RuntimeError as log_exc:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="audit log failed"
            ) from log_exc
        raise HTTPException(status_code=_rejection_status(exc), detail=str(exc))
    except StorageUnavailableError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error creating booking")

    try:
        emit_audit_log(
            action="booking.admitted",
            booking_id=booking.id,
            date=booking.date,
            time=booking.time,
            guests=booking.guests,
        )
    except RuntimeError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="audit log failed") from exc

    return BookingCreated(message="Booking created successfully", booking=BookingRead.from_db(booking=booking))


@router.get("/bookings", response_model=List[BookingRead])
async def list_bookings(
    date: Optional[dt.date] = Query(default=None, description="Only bookings on this date (YYYY-MM-DD)"),
    ledger: BookingLedger = Depends(get_ledger),
) -> list[BookingRead]:
    try:
        rows = await booking_usecase.list_bookings(ledger, date=date)
    except StorageUnavailableError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error fetching bookings")
    return [BookingRead.from_db(booking=booking) for booking in rows]


@router.delete("/bookings", response_model=Message)
async def cancel_booking(
    raw_id: Optional[str] = Query(default=None, alias="id"),
    ledger: BookingLedger = Depends(get_ledger),
) -> Message:
    if not raw_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Booking ID is required")
    try:
        booking_id = int(raw_id)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="Booking ID must be an integer")
    try:
        await booking_usecase.cancel_booking(ledger, booking_id=booking_id)
    except BookingNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found")
    except StorageUnavailableError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error deleting booking")

    try:
        emit_audit_log(action="booking.cancelled", booking_id=booking_id, date=None, time=None)
    except RuntimeError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="audit log failed") from exc

    return Message(message="Booking deleted successfully")
