import datetime as dt

import pytest
from tablebook.domain.errors import StorageUnavailableError
from tablebook.domain.grid import GridConfig, generate_grid
from tablebook.infrastructure.off_days import StaticOffDayRegistry
from tablebook.usecases import availability as uc

GRID = generate_grid(GridConfig.from_clock(opening="12:00", closing="24:00", slot_minutes=30))
OPEN_DAY = dt.date(2024, 6, 10)
CLOSED_DAY = dt.date(2024, 6, 15)


class FakeLedger:
    def __init__(self, booked: dict[dt.date, set[str]] | None = None, *, fail: bool = False) -> None:
        self.booked = booked or {}
        self.fail = fail
        self.queried: list[dt.date] = []

    async def booked_times(self, date: dt.date) -> set[str]:
        self.queried.append(date)
        if self.fail:
            raise StorageUnavailableError("down")
        return set(self.booked.get(date, set()))

    # unused in these tests
    async def add(self, **kwargs: object) -> object:  # pragma: no cover
        raise AssertionError("availability must not write")

    async def list_by_date(self, date: dt.date | None = None) -> list[object]:  # pragma: no cover
        return []

    async def delete(self, booking_id: int) -> bool:  # pragma: no cover
        raise AssertionError("availability must not write")


@pytest.mark.asyncio
async def test_empty_day_returns_full_grid() -> None:
    result = await uc.resolve_availability(FakeLedger(), StaticOffDayRegistry(), GRID, date=OPEN_DAY)
    assert result.closed is False
    assert result.slots == GRID


@pytest.mark.asyncio
async def test_booked_times_are_removed_in_grid_order() -> None:
    ledger = FakeLedger({OPEN_DAY: {"13:00", "20:30"}, dt.date(2024, 6, 11): {"12:00"}})
    result = await uc.resolve_availability(ledger, StaticOffDayRegistry(), GRID, date=OPEN_DAY)
    assert "13:00" not in result.slots
    assert "20:30" not in result.slots
    assert "12:00" in result.slots
    assert len(result.slots) == 22
    assert list(result.slots) == [label for label in GRID if label not in {"13:00", "20:30"}]


@pytest.mark.asyncio
async def test_off_day_is_closed_without_querying_ledger() -> None:
    ledger = FakeLedger({CLOSED_DAY: {"13:00"}})
    result = await uc.resolve_availability(ledger, StaticOffDayRegistry([CLOSED_DAY]), GRID, date=CLOSED_DAY)
    assert result.closed is True
    assert result.slots == ()
    assert ledger.queried == []


@pytest.mark.asyncio
async def test_fully_booked_day_is_empty_but_not_closed() -> None:
    ledger = FakeLedger({OPEN_DAY: set(GRID)})
    result = await uc.resolve_availability(ledger, StaticOffDayRegistry(), GRID, date=OPEN_DAY)
    assert result.slots == ()
    assert result.closed is False


@pytest.mark.asyncio
async def test_repeated_reads_are_identical() -> None:
    ledger = FakeLedger({OPEN_DAY: {"13:00"}})
    registry = StaticOffDayRegistry()
    first = await uc.resolve_availability(ledger, registry, GRID, date=OPEN_DAY)
    second = await uc.resolve_availability(ledger, registry, GRID, date=OPEN_DAY)
    assert first == second


@pytest.mark.asyncio
async def test_storage_failure_propagates() -> None:
    with pytest.raises(StorageUnavailableError):
        await uc.resolve_availability(FakeLedger(fail=True), StaticOffDayRegistry(), GRID, date=OPEN_DAY)
