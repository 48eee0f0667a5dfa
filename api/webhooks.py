import structlog
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from database import get_db
from schemas.pricing_run import PricingCallback
from services.callbacks import apply_pricing_callback
from services.errors import InvalidCallbackError, RunNotFoundError

router = APIRouter(prefix="/api/webhooks", tags=["webhooks"])
log = structlog.get_logger(__name__)

MSG_RUN_NOT_FOUND = "Invalid run_id - pricing run not found"


@router.post("/loan-pricer")
async def loan_pricer_webhook(body: PricingCallback, db: AsyncSession = Depends(get_db)):
    payload = body.model_dump(exclude_none=True)
    log.info("pricing_callback.received", run_id=payload.get("run_id"), status=payload.get("status"))
    try:
        result = await apply_pricing_callback(db, payload)
        await db.commit()
    except InvalidCallbackError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except RunNotFoundError:
        raise HTTPException(status_code=404, detail=MSG_RUN_NOT_FOUND)
    except SQLAlchemyError as e:
        log.exception("pricing_callback.storage_error", run_id=payload.get("run_id"))
        await db.rollback()
        return JSONResponse(status_code=500, content={"error": str(e)})
    return result
