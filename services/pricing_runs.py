from __future__ import annotations

import uuid
from datetime import datetime, timedelta
from typing import Any

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models import PricingRun
from services.errors import RunNotFoundError
from services.scenarios import SCENARIO_TYPES, scenario_request
from utils.timestamps import isoformat, utc_now

log = structlog.get_logger(__name__)


def new_run_id() -> str:
    return f"run-{uuid.uuid4().hex[:12]}"


async def enqueue_pricing_run(
    session: AsyncSession,
    scenario_type: str | None = None,
    scenario_json: dict[str, Any] | None = None,
    now: datetime | None = None,
) -> PricingRun:
    """Create a queued run; the dispatcher picks it up on its next pass."""
    now = now or utc_now()
    if scenario_json is None and scenario_type:
        scenario_json = scenario_request(scenario_type)
    run = PricingRun(
        id=new_run_id(),
        status="queued",
        scenario_type=scenario_type,
        scenario_json=scenario_json or {},
        retry_count=0,
        queued_at=now,
        created_at=now,
        updated_at=now,
    )
    session.add(run)
    await session.flush()
    log.info("pricing_run.enqueued", run_id=run.id, scenario_type=scenario_type)
    return run


async def enqueue_daily_rates(session: AsyncSession, now: datetime | None = None) -> list[PricingRun]:
    """Queue one run per known market scenario, in catalog order."""
    now = now or utc_now()
    runs = []
    # queued_at strictly increases in catalog order
    for i, scenario_type in enumerate(SCENARIO_TYPES):
        queued_at = now + timedelta(microseconds=i)
        runs.append(await enqueue_pricing_run(session, scenario_type=scenario_type, now=queued_at))
    log.info("pricing_run.daily_batch_enqueued", count=len(runs))
    return runs


async def get_pricing_run(session: AsyncSession, run_id: str) -> PricingRun:
    result = await session.execute(select(PricingRun).where(PricingRun.id == run_id))
    run = result.scalar_one_or_none()
    if not run:
        raise RunNotFoundError(run_id)
    return run


async def list_pricing_runs(session: AsyncSession, status: str | None = None, limit: int = 100) -> list[PricingRun]:
    stmt = select(PricingRun).order_by(PricingRun.created_at.desc(), PricingRun.id.desc()).limit(limit)
    if status:
        stmt = stmt.where(PricingRun.status == status)
    result = await session.execute(stmt)
    return list(result.scalars().all())


def run_to_response(run: PricingRun) -> dict[str, Any]:
    return {
        "id": run.id,
        "status": run.status,
        "scenario_type": run.scenario_type,
        "scenario_json": run.scenario_json,
        "retry_count": run.retry_count,
        "results_json": run.results_json,
        "error_message": run.error_message,
        "queued_at": isoformat(run.queued_at),
        "started_at": isoformat(run.started_at),
        "completed_at": isoformat(run.completed_at),
        "created_at": isoformat(run.created_at),
        "updated_at": isoformat(run.updated_at),
    }
