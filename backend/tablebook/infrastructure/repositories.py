from __future__ import annotations

import asyncio
import datetime as dt
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator, List, Set

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..domain.errors import SlotTakenError, StorageUnavailableError
from ..domain.repositories import BookingLedger
from ..models import Booking

logger = logging.getLogger(__name__)


class SqlAlchemyBookingLedger(BookingLedger):
    """Ledger backed by the `bookings` table. Each call runs in its own short transaction."""

    def __init__(self, sessionmaker: async_sessionmaker[AsyncSession], *, timeout: float = 5.0) -> None:
        self.sessionmaker = sessionmaker
        self.timeout = timeout

    @asynccontextmanager
    async def _transaction(self) -> AsyncIterator[AsyncSession]:
        try:
            async with asyncio.timeout(self.timeout):
                async with self.sessionmaker.begin() as session:
                    yield session
        except IntegrityError:
            raise
        except (SQLAlchemyError, OSError, TimeoutError) as exc:
            logger.warning("booking ledger unavailable: %s", exc, exc_info=True)
            raise StorageUnavailableError("booking ledger unavailable") from exc

    async def booked_times(self, date: dt.date) -> Set[str]:
        async with self._transaction() as session:
            rows = await session.scalars(select(Booking.time).where(Booking.date == date))
            return set(rows.all())

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
        booking = Booking(
            date=date,
            time=time,
            guests=guests,
            name=name,
            email=email,
            phone=phone,
            created_at=datetime.now(timezone.utc).replace(tzinfo=None),
        )
        try:
            async with self._transaction() as session:
                session.add(booking)
                await session.flush()
        except IntegrityError as exc:
            # uq_bookings_date_time: a concurrent admission won this slot
            raise SlotTakenError(f"{date.isoformat()} {time} is already booked") from exc
        return booking

    async def list_by_date(self, date: dt.date | None = None) -> List[Booking]:
        stmt = select(Booking).order_by(Booking.date, Booking.time, Booking.id)
        if date is not None:
            stmt = stmt.where(Booking.date == date)
        async with self._transaction() as session:
            rows = await session.scalars(stmt)
            return list(rows.all())

    async def delete(self, booking_id: int) -> bool:
        async with self._transaction() as session:
            result = await session.execute(delete(Booking).where(Booking.id == booking_id))
            return bool(result.rowcount)
