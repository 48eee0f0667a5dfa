from datetime import date

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from database import get_db
from models import DailyMarketUpdate
from schemas.market_update import DailyMarketUpdateResponse
from services.daily_aggregator import market_update_to_response
from utils.timestamps import utc_today

router = APIRouter(prefix="/api/market-updates", tags=["market-updates"])


def _parse_day(value: str) -> date:
    if value == "today":
        return utc_today()
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise HTTPException(status_code=400, detail="date must be YYYY-MM-DD or 'today'")


@router.get("/{day}", response_model=DailyMarketUpdateResponse)
async def get_market_update(day: str, db: AsyncSession = Depends(get_db)):
    row = await db.get(DailyMarketUpdate, _parse_day(day))
    if not row:
        raise HTTPException(status_code=404, detail="No market update for that date")
    return market_update_to_response(row)
