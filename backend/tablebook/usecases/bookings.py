import datetime as dt
from typing import Sequence

from ..domain.errors import BookingNotFoundError, DateClosedError
from ..domain.repositories import BookingLedger, OffDayRegistry
from ..domain.services import validate_booking_request
from ..models import Booking


async def admit_booking(
    ledger: BookingLedger,
    off_days: OffDayRegistry,
    grid: Sequence[str],
    *,
    date: dt.date,
    time: str,
    guests: int,
    name: str,
    email: str,
    phone: str,
) -> Booking:
    validate_booking_request(grid, time=time, guests=guests, name=name, email=email, phone=phone)
    if off_days.is_closed(date):
        raise DateClosedError(f"{date.isoformat()} is closed")
    # The ledger re-checks the slot and writes in one step; any earlier availability read is stale.
    return await ledger.add(
        date=date,
        time=time,
        guests=guests,
        name=name.strip(),
        email=email.strip(),
        phone=phone.strip(),
    )


async def list_bookings(
    ledger: BookingLedger,
    *,
    date: dt.date | None = None,
) -> list[Booking]:
    return await ledger.list_by_date(date)


async def cancel_booking(
    ledger: BookingLedger,
    *,
    booking_id: int,
) -> None:
    if not await ledger.delete(booking_id):
        raise BookingNotFoundError(f"booking {booking_id} not found")
