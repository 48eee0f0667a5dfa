from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel


class ScenarioRate(BaseModel):
    rate: Optional[str] = None
    points: Optional[str] = None


class DailyMarketUpdateResponse(BaseModel):
    date: date
    rates: dict[str, ScenarioRate]
    updated_at: Optional[datetime] = None
