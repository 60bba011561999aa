from typing import List

from fastapi import APIRouter, Depends

from ..deps import get_off_day_registry
from ..domain.repositories import OffDayRegistry

router = APIRouter(prefix="", tags=["off-days"])


@router.get("/off-days", response_model=List[str])
async def list_off_days(off_days: OffDayRegistry = Depends(get_off_day_registry)) -> list[str]:
    return [day.isoformat() for day in off_days.dates()]
