"""
Pricing queue dispatcher.

Invoked periodically (cron hitting POST /api/pricing-queue/process, or
``python -m scripts.process_queue``). Each pass:

1. Looks for a run already in ``running``. If it is older than the stuck
   timeout it is failed so it becomes retryable; otherwise the pass stops.
2. Picks the oldest queued/failed run still under the retry bound.
3. Claims it with a single compare-and-swap UPDATE (retry_count + 1,
   status running, error cleared) and commits.
4. Triggers the external executor without waiting for the pricing work.

``running`` therefore means "the executor was told to start", not "the
executor confirmed it is working". If the trigger call fails the run stays
``running`` until the callback arrives or a later pass times it out.

The single-running partial unique index on pricing_runs backs up step 1:
if two passes overlap, the second claim is rejected and reported as
"another run still active".
"""
from __future__ import annotations

from datetime import datetime
from typing import Any

import structlog
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from models import PricingRun
from models.pricing_run import DISPATCHABLE_STATUSES
from services.executor import PricingExecutor
from utils.timestamps import ensure_utc, utc_now

log = structlog.get_logger(__name__)

MSG_ANOTHER_RUN_ACTIVE = "another run still active"
MSG_QUEUE_EMPTY = "no runs in queue"
MSG_TRIGGERED = "triggered queued run"


async def _find_active_run(session: AsyncSession) -> PricingRun | None:
    result = await session.execute(
        select(PricingRun)
        .where(PricingRun.status == "running")
        .order_by(PricingRun.created_at.desc())
        .limit(1)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def _find_next_run(session: AsyncSession, max_retries: int) -> PricingRun | None:
    result = await session.execute(
        select(PricingRun)
        .where(
            PricingRun.status.in_(DISPATCHABLE_STATUSES),
            PricingRun.retry_count < max_retries,
        )
        .order_by(PricingRun.queued_at.asc().nulls_last(), PricingRun.created_at.asc())
        .limit(1)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def _fail_stuck_run(session: AsyncSession, run: PricingRun, running_for_seconds: int, now: datetime) -> None:
    message = f"Timed out after {running_for_seconds}s - marked by queue processor"
    await session.execute(
        update(PricingRun)
        .where(PricingRun.id == run.id, PricingRun.status == "running")
        .values(status="failed", error_message=message, completed_at=now, updated_at=now)
        .execution_options(synchronize_session=False)
    )
    await session.commit()
    await session.refresh(run)
    log.warning(
        "pricing_queue.stuck_run_failed",
        run_id=run.id,
        scenario_type=run.scenario_type,
        running_for_seconds=running_for_seconds,
    )


async def _claim_run(session: AsyncSession, run: PricingRun, now: datetime) -> bool:
    """Move ``run`` to running iff nobody else changed it since it was read."""
    attempt = (run.retry_count or 0) + 1
    run_id = run.id
    try:
        result = await session.execute(
            update(PricingRun)
            .where(
                PricingRun.id == run_id,
                PricingRun.status == run.status,
                PricingRun.retry_count == run.retry_count,
            )
            .values(
                status="running",
                retry_count=attempt,
                error_message=None,
                completed_at=None,
                started_at=now,
                updated_at=now,
            )
            .execution_options(synchronize_session=False)
        )
        claimed = result.rowcount == 1
        await session.commit()
    except IntegrityError:
        # uq_pricing_runs_single_running: another pass claimed a run first
        await session.rollback()
        return False
    if claimed:
        await session.refresh(run)
    return claimed


async def process_pricing_queue(
    session: AsyncSession,
    executor: PricingExecutor,
    now: datetime | None = None,
    stuck_timeout_ms: int | None = None,
    max_retries: int | None = None,
) -> dict[str, Any]:
    """Run one dispatcher pass and return a report of what happened."""
    now = now or utc_now()
    stuck_timeout_ms = settings.stuck_run_timeout_ms if stuck_timeout_ms is None else stuck_timeout_ms
    max_retries = settings.max_retries if max_retries is None else max_retries

    active = await _find_active_run(session)
    if active:
        age_ms = (now - ensure_utc(active.created_at)).total_seconds() * 1000
        running_for_seconds = round(age_ms / 1000)
        if age_ms > stuck_timeout_ms:
            await _fail_stuck_run(session, active, running_for_seconds, now)
        else:
            log.info(
                "pricing_queue.active_run",
                run_id=active.id,
                scenario_type=active.scenario_type,
                running_for_seconds=running_for_seconds,
            )
            return {
                "success": True,
                "message": MSG_ANOTHER_RUN_ACTIVE,
                "active_run_id": active.id,
                "running_for_seconds": running_for_seconds,
            }

    next_run = await _find_next_run(session, max_retries)
    if not next_run:
        log.info("pricing_queue.empty")
        return {"success": True, "message": MSG_QUEUE_EMPTY}

    run_id = next_run.id
    if not await _claim_run(session, next_run, now):
        log.info("pricing_queue.claim_lost", run_id=run_id)
        return {"success": True, "message": MSG_ANOTHER_RUN_ACTIVE}

    log.info(
        "pricing_queue.run_started",
        run_id=next_run.id,
        scenario_type=next_run.scenario_type,
        retry_attempt=next_run.retry_count,
    )

    report: dict[str, Any] = {
        "success": True,
        "message": MSG_TRIGGERED,
        "run_id": next_run.id,
        "scenario_type": next_run.scenario_type,
        "retry_attempt": next_run.retry_count,
    }
    try:
        report["executor_result"] = await executor.trigger(next_run.id)
    except Exception as e:
        # The run stays running; the stuck-run timeout recovers it.
        log.error("pricing_queue.executor_trigger_failed", run_id=next_run.id, error=str(e))
        report["executor_error"] = str(e)
    return report
