import datetime as dt
from typing import Iterable

from ..domain.repositories import OffDayRegistry


class StaticOffDayRegistry(OffDayRegistry):
    """Closed dates fixed at startup (OFF_DAYS)."""

    def __init__(self, dates: Iterable[dt.date] = ()) -> None:
        self._dates = frozenset(dates)

    def is_closed(self, date: dt.date) -> bool:
        return date in self._dates

    def dates(self) -> list[dt.date]:
        return sorted(self._dates)
