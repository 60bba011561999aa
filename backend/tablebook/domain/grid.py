from __future__ import annotations

from dataclasses import dataclass

from ..utils.time import MINUTES_PER_DAY, format_clock, parse_clock


@dataclass(frozen=True)
class GridConfig:
    opening_minute: int
    closing_minute: int
    slot_minutes: int

    def __post_init__(self) -> None:
        if not 0 <= self.opening_minute < MINUTES_PER_DAY:
            raise ValueError("opening time must fall within the day")
        if self.closing_minute > MINUTES_PER_DAY:
            raise ValueError("closing time must not be later than 24:00")
        if self.opening_minute >= self.closing_minute:
            raise ValueError("opening time must be earlier than closing time")
        if self.slot_minutes <= 0:
            raise ValueError("slot duration must be positive")

    @classmethod
    def from_clock(cls, *, opening: str, closing: str, slot_minutes: int) -> "GridConfig":
        return cls(
            opening_minute=parse_clock(opening),
            closing_minute=parse_clock(closing),
            slot_minutes=slot_minutes,
        )


def generate_grid(config: GridConfig) -> tuple[str, ...]:
    """
    Ordered slot labels for an open day.
    Starts at opening and steps by the slot duration; a trailing partial slot is dropped.
    """
    return tuple(
        format_clock(minute)
        for minute in range(config.opening_minute, config.closing_minute, config.slot_minutes)
    )
