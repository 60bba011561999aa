from fastapi import Request

from .domain.repositories import BookingLedger, OffDayRegistry


async def get_ledger(request: Request) -> BookingLedger:
    return request.app.state.ledger


async def get_off_day_registry(request: Request) -> OffDayRegistry:
    return request.app.state.off_days


async def get_grid(request: Request) -> tuple[str, ...]:
    return request.app.state.grid
