"""
Run one dispatcher pass against the configured database.
Run: python -m scripts.process_queue (from backend dir); schedule it with cron
as an alternative to POST /api/pricing-queue/process.
"""
import asyncio
import json
import os
import sys

# Add parent so we can import from backend
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import settings
from database import AsyncSessionLocal, init_db
from services.dispatcher import process_pricing_queue
from services.executor import get_executor
from utils.logging import setup_logging


async def process_once() -> dict:
    await init_db()
    async with AsyncSessionLocal() as session:
        report = await process_pricing_queue(session, get_executor())
        await session.commit()
    return report


if __name__ == "__main__":
    setup_logging(settings.log_level, json_logs=settings.log_json)
    print(json.dumps(asyncio.run(process_once()), default=str))
