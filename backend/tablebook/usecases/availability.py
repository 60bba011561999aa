import datetime as dt
from dataclasses import dataclass
from typing import Sequence

from ..domain.repositories import BookingLedger, OffDayRegistry
from ..domain.services import free_slots


@dataclass(frozen=True)
class DayAvailability:
    date: dt.date
    closed: bool
    slots: tuple[str, ...]


async def resolve_availability(
    ledger: BookingLedger,
    off_days: OffDayRegistry,
    grid: Sequence[str],
    *,
    date: dt.date,
) -> DayAvailability:
    """
    Free slots for `date` in grid order. Off-days come back closed with no slots.
    Elapsed times of the current day are not removed here.
    """
    if off_days.is_closed(date):
        return DayAvailability(date=date, closed=True, slots=())
    booked = await ledger.booked_times(date)
    return DayAvailability(date=date, closed=False, slots=free_slots(grid, booked))
