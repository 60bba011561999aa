from __future__ import annotations

import asyncio
import datetime as dt
import itertools
from datetime import datetime, timezone

from ..domain.errors import SlotTakenError
from ..domain.repositories import BookingLedger
from ..models import Booking

SlotKey = tuple[dt.date, str]


class InMemoryBookingLedger(BookingLedger):
    """
    Process-local ledger for development and tests.

    Admissions are serialised with one asyncio.Lock per (date, time), held across
    the existence check and the write; unrelated slots never wait on each other.
    `latency` is awaited between check and write to stand in for store round trips.
    """

    def __init__(self, *, latency: float = 0.0) -> None:
        self.latency = latency
        self._bookings: dict[int, Booking] = {}
        self._by_slot: dict[SlotKey, int] = {}
        self._locks: dict[SlotKey, asyncio.Lock] = {}
        self._lock_users: dict[SlotKey, int] = {}
        self._ids = itertools.count(1)

    async def booked_times(self, date: dt.date) -> set[str]:
        return {time for slot_date, time in self._by_slot if slot_date == date}

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
        key = (date, time)
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._lock_users[key] = self._lock_users.get(key, 0) + 1
        try:
            async with lock:
                if key in self._by_slot:
                    raise SlotTakenError(f"{date.isoformat()} {time} is already booked")
                await asyncio.sleep(self.latency)
                booking = Booking(
                    id=next(self._ids),
                    date=date,
                    time=time,
                    guests=guests,
                    name=name,
                    email=email,
                    phone=phone,
                    created_at=datetime.now(timezone.utc).replace(tzinfo=None),
                )
                self._bookings[booking.id] = booking
                self._by_slot[key] = booking.id
        finally:
            self._release_lock(key)
        return booking

    def _release_lock(self, key: SlotKey) -> None:
        # Locks only live while an admission for the key is in flight.
        remaining = self._lock_users[key] - 1
        if remaining:
            self._lock_users[key] = remaining
        else:
            del self._lock_users[key]
            self._locks.pop(key, None)

    async def list_by_date(self, date: dt.date | None = None) -> list[Booking]:
        rows = [b for b in self._bookings.values() if date is None or b.date == date]
        return sorted(rows, key=lambda b: (b.date, b.time, b.id))

    async def delete(self, booking_id: int) -> bool:
        booking = self._bookings.pop(booking_id, None)
        if booking is None:
            return False
        del self._by_slot[(booking.date, booking.time)]
        return True
