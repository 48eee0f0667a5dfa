"""
Route a completed scenario run's rate/points into today's daily_market_updates row.
"""
from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

import structlog
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from models import DailyMarketUpdate
from services.scenarios import SCENARIO_FIELDS, resolve_fields
from utils.timestamps import utc_now, utc_today

log = structlog.get_logger(__name__)

# Matches the Numeric(10, 4) rate/points columns
RATE_PLACES = Decimal("0.0001")

_UPSERT_INSERTS = {
    "sqlite": sqlite_insert,
    "postgresql": pg_insert,
}


def parse_decimal(value: Any) -> Decimal | None:
    """Parse a rate-like value ("6.125", 6.125, "0.5%") to Decimal; None if absent or invalid."""
    if value is None or isinstance(value, bool):
        return None
    text = str(value).strip().rstrip("%").strip()
    if not text:
        return None
    try:
        parsed = Decimal(text)
    except InvalidOperation:
        return None
    return parsed if parsed.is_finite() else None


def _quantize(value: Decimal) -> Decimal:
    return value.quantize(RATE_PLACES, rounding=ROUND_HALF_UP)


def _format(value: Decimal | None) -> str | None:
    return format(value.normalize(), "f") if value is not None else None


async def record_market_rate(
    session: AsyncSession,
    scenario_type: str,
    rate: Any,
    points: Any = None,
    today: date | None = None,
) -> DailyMarketUpdate | None:
    """
    Upsert today's row with the scenario's rate/points pair.
    Unknown scenarios and unparseable rates are a no-op and return None.
    """
    fields = resolve_fields(scenario_type)
    if fields is None:
        log.info("market_update.skip_unknown_scenario", scenario_type=scenario_type)
        return None
    rate_value = parse_decimal(rate)
    if rate_value is None:
        log.warning("market_update.skip_invalid_rate", scenario_type=scenario_type, rate=rate)
        return None

    rate_field, points_field = fields
    points_value = parse_decimal(points)
    values = {
        rate_field: _quantize(rate_value),
        points_field: _quantize(points_value) if points_value is not None else None,
    }
    day = today or utc_today()
    now = utc_now()

    insert_fn = _UPSERT_INSERTS.get(session.get_bind().dialect.name)
    if insert_fn is not None:
        stmt = insert_fn(DailyMarketUpdate).values(date=day, created_at=now, updated_at=now, **values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[DailyMarketUpdate.date],
            set_={**values, "updated_at": now},
        )
        await session.execute(stmt)
        row = await session.get(DailyMarketUpdate, day, populate_existing=True)
    else:
        row = await session.get(DailyMarketUpdate, day)
        if row is None:
            row = DailyMarketUpdate(date=day, created_at=now, updated_at=now, **values)
            session.add(row)
        else:
            for field, value in values.items():
                setattr(row, field, value)
            row.updated_at = now
        await session.flush()

    log.info(
        "market_update.recorded",
        date=day.isoformat(),
        scenario_type=scenario_type,
        rate=str(values[rate_field]),
        points=str(values[points_field]) if values[points_field] is not None else None,
    )
    return row


def market_update_to_response(row: DailyMarketUpdate) -> dict[str, Any]:
    """Read path: group the row's columns back by scenario type."""
    rates: dict[str, dict[str, str | None]] = {}
    for scenario_type, (rate_field, points_field) in SCENARIO_FIELDS.items():
        rate = getattr(row, rate_field)
        points = getattr(row, points_field)
        rates[scenario_type] = {
            "rate": _format(rate),
            "points": _format(points),
        }
    return {
        "date": row.date.isoformat(),
        "rates": rates,
        "updated_at": row.updated_at.isoformat() if row.updated_at else None,
    }
