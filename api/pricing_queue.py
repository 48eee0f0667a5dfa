import structlog
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from database import get_db
from schemas.pricing_run import DispatchReport
from services.dispatcher import process_pricing_queue
from services.executor import PricingExecutor, get_executor

router = APIRouter(prefix="/api/pricing-queue", tags=["pricing-queue"])
log = structlog.get_logger(__name__)


@router.post("/process", response_model=DispatchReport, response_model_exclude_none=True)
async def process_queue(
    db: AsyncSession = Depends(get_db),
    executor: PricingExecutor = Depends(get_executor),
):
    """One dispatcher pass. Meant to be hit by a scheduler every minute or so."""
    try:
        return await process_pricing_queue(db, executor)
    except SQLAlchemyError as e:
        log.exception("pricing_queue.storage_error")
        await db.rollback()
        return JSONResponse(status_code=500, content={"error": str(e)})
