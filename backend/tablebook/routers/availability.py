import datetime as dt
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..deps import get_grid, get_ledger, get_off_day_registry
from ..domain.errors import StorageUnavailableError
from ..domain.repositories import BookingLedger, OffDayRegistry
from ..usecases import availability as availability_usecase

router = APIRouter(prefix="", tags=["availability"])


@router.get("/availability", response_model=List[str])
async def get_availability(
    raw_date: Optional[str] = Query(default=None, alias="date", description="Venue-local date (YYYY-MM-DD)"),
    ledger: BookingLedger = Depends(get_ledger),
    off_days: OffDayRegistry = Depends(get_off_day_registry),
    grid: tuple[str, ...] = Depends(get_grid),
) -> list[str]:
    if not raw_date:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Date is required")
    try:
        date = dt.date.fromisoformat(raw_date)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="Date must be YYYY-MM-DD")
    try:
        result = await availability_usecase.resolve_availability(ledger, off_days, grid, date=date)
    except StorageUnavailableError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error fetching availability"
        )
    # Closed days and fully booked days both render as an empty list.
    return list(result.slots)
