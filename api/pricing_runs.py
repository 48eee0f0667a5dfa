from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from database import get_db
from schemas.pricing_run import PricingRunCreate, PricingRunResponse
from services.errors import RunNotFoundError
from services.pricing_runs import (
    enqueue_daily_rates,
    enqueue_pricing_run,
    get_pricing_run,
    list_pricing_runs,
    run_to_response,
)

router = APIRouter(prefix="/api/pricing-runs", tags=["pricing-runs"])

MSG_RUN_NOT_FOUND = "Pricing run not found"


@router.post("", status_code=201, response_model=PricingRunResponse)
async def create_pricing_run(body: PricingRunCreate, db: AsyncSession = Depends(get_db)):
    run = await enqueue_pricing_run(db, scenario_type=body.scenario_type, scenario_json=body.scenario_json)
    return run_to_response(run)


@router.post("/daily", status_code=201, response_model=list[PricingRunResponse])
async def create_daily_rate_runs(db: AsyncSession = Depends(get_db)):
    """Queue the full market scenario sweep for today."""
    runs = await enqueue_daily_rates(db)
    return [run_to_response(r) for r in runs]


@router.get("", response_model=list[PricingRunResponse])
async def list_runs(
    status: Optional[Literal["queued", "running", "completed", "failed"]] = None,
    limit: int = Query(100, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
):
    runs = await list_pricing_runs(db, status=status, limit=limit)
    return [run_to_response(r) for r in runs]


@router.get("/{run_id}", response_model=PricingRunResponse)
async def get_run(run_id: str, db: AsyncSession = Depends(get_db)):
    try:
        run = await get_pricing_run(db, run_id)
    except RunNotFoundError:
        raise HTTPException(status_code=404, detail=MSG_RUN_NOT_FOUND)
    return run_to_response(run)
