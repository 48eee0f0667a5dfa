"""
Queue the daily market scenario sweep (one pricing run per known scenario).
Run: python -m scripts.enqueue_daily_rates (from backend dir, with DB running).
"""
import asyncio
import os
import sys

# Add parent so we can import from backend
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import settings
from database import AsyncSessionLocal, init_db
from services.pricing_runs import enqueue_daily_rates
from utils.logging import setup_logging


async def enqueue():
    await init_db()
    async with AsyncSessionLocal() as session:
        runs = await enqueue_daily_rates(session)
        await session.commit()
    for run in runs:
        print(f"Queued {run.scenario_type}: {run.id}")
    print(f"Queued {len(runs)} pricing runs.")


if __name__ == "__main__":
    setup_logging(settings.log_level, json_logs=settings.log_json)
    asyncio.run(enqueue())
