"""
Shared fixtures for the pricing queue tests: a throwaway in-memory database
per test case and a fake executor that records triggers.
"""
import unittest
from datetime import datetime, timedelta, timezone

from database import init_db, make_engine, make_sessionmaker
from models import PricingRun

T0 = datetime(2026, 3, 2, 14, 0, tzinfo=timezone.utc)


def at(seconds: float) -> datetime:
    return T0 + timedelta(seconds=seconds)


class RecordingExecutor:
    def __init__(self, error: Exception | None = None):
        self.calls: list[str] = []
        self.error = error

    async def trigger(self, run_id: str):
        self.calls.append(run_id)
        if self.error:
            raise self.error
        return {"accepted": True, "run_id": run_id}


class DatabaseTestCase(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.engine = make_engine("sqlite+aiosqlite:///:memory:")
        await init_db(self.engine)
        self.sessionmaker = make_sessionmaker(self.engine)
        self.session = self.sessionmaker()

    async def asyncTearDown(self):
        await self.session.close()
        await self.engine.dispose()

    async def add_run(self, run_id: str, **fields) -> PricingRun:
        """Insert a run row directly, bypassing the enqueue service."""
        created_at = fields.pop("created_at", T0)
        run = PricingRun(
            id=run_id,
            status=fields.pop("status", "queued"),
            scenario_json=fields.pop("scenario_json", {}),
            retry_count=fields.pop("retry_count", 0),
            queued_at=fields.pop("queued_at", created_at),
            created_at=created_at,
            updated_at=created_at,
            **fields,
        )
        self.session.add(run)
        await self.session.commit()
        return run

    async def reload(self, run_id: str) -> PricingRun:
        return await self.session.get(PricingRun, run_id, populate_existing=True)
