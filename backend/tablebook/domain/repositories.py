from __future__ import annotations

import datetime as dt
from typing import Protocol

from ..models import Booking


class BookingLedger(Protocol):
    async def booked_times(self, date: dt.date) -> set[str]: ...

    async def add(
        self,
        *,
        date: dt.date,
        time: str,
        guests: int,
        name: str,
        email: str,
        phone: str,
    ) -> Booking:
        """Check-and-write in one atomic step; raises SlotTakenError when (date, time) is held."""
        ...

    async def list_by_date(self, date: dt.date | None = None) -> list[Booking]: ...

    async def delete(self, booking_id: int) -> bool: ...


class OffDayRegistry(Protocol):
    def is_closed(self, date: dt.date) -> bool: ...

    def dates(self) -> list[dt.date]: ...
