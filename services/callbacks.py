"""
Apply completion callbacks sent by the pricing executor.

A callback for a run that is already completed or failed is acknowledged and
ignored: no field changes and no market update. Late callbacks for a run the
dispatcher already timed out are dropped the same way; the run is retried
instead.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from models import PricingRun
from models.pricing_run import TERMINAL_STATUSES
from services.daily_aggregator import record_market_rate
from services.errors import InvalidCallbackError, RunNotFoundError
from utils.timestamps import ensure_utc, utc_now

log = structlog.get_logger(__name__)

RESULT_FIELDS = ("rate", "discount_points", "screenshot_1", "screenshot_2")


def _present(value: Any) -> bool:
    return value is not None and value != ""


def build_results(payload: dict[str, Any]) -> dict[str, Any]:
    """Keep only the result fields the executor actually sent."""
    return {field: payload[field] for field in RESULT_FIELDS if _present(payload.get(field))}


async def apply_pricing_callback(
    session: AsyncSession,
    payload: dict[str, Any],
    now: datetime | None = None,
) -> dict[str, Any]:
    run_id = payload.get("run_id")
    if not _present(run_id):
        raise InvalidCallbackError("run_id is required")
    run_id = str(run_id)

    run = await session.get(PricingRun, run_id, populate_existing=True)
    if not run:
        raise RunNotFoundError(run_id)

    if run.status in TERMINAL_STATUSES:
        log.warning(
            "pricing_callback.ignored_terminal_run",
            run_id=run_id,
            current_status=run.status,
            reported_status=payload.get("status"),
        )
        return {"success": True, "run_id": run_id, "status": run.status, "ignored": True}

    now = now or utc_now()
    final_status = "failed" if payload.get("status") == "failed" else "completed"
    results = build_results(payload)

    run.status = final_status
    run.completed_at = now
    run.updated_at = now
    if results:
        run.results_json = results
    if final_status == "failed" and _present(payload.get("error_message")):
        run.error_message = str(payload["error_message"])
    await session.flush()

    log.info(
        "pricing_callback.applied",
        run_id=run_id,
        status=final_status,
        scenario_type=run.scenario_type,
        result_fields=sorted(results),
    )

    aggregated = False
    if run.scenario_type and final_status == "completed" and "rate" in results:
        row = await record_market_rate(
            session,
            run.scenario_type,
            results["rate"],
            results.get("discount_points"),
            today=ensure_utc(now).date(),
        )
        aggregated = row is not None

    return {
        "success": True,
        "message": f"Pricing run {run_id} updated to {final_status}",
        "run_id": run_id,
        "status": final_status,
        "market_update_recorded": aggregated,
    }
