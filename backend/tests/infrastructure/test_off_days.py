import datetime as dt

from tablebook.infrastructure.off_days import StaticOffDayRegistry


def test_registry_reports_closed_dates() -> None:
    registry = StaticOffDayRegistry([dt.date(2024, 6, 15)])
    assert registry.is_closed(dt.date(2024, 6, 15)) is True
    assert registry.is_closed(dt.date(2024, 6, 16)) is False


def test_registry_lists_dates_sorted_and_deduplicated() -> None:
    registry = StaticOffDayRegistry([dt.date(2024, 6, 22), dt.date(2024, 6, 15), dt.date(2024, 6, 22)])
    assert registry.dates() == [dt.date(2024, 6, 15), dt.date(2024, 6, 22)]


def test_empty_registry_closes_nothing() -> None:
    assert StaticOffDayRegistry().is_closed(dt.date(2024, 1, 1)) is False
    assert StaticOffDayRegistry().dates() == []
