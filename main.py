from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import settings
from database import init_db
from api.market_updates import router as market_updates_router
from api.pricing_queue import router as pricing_queue_router
from api.pricing_runs import router as pricing_runs_router
from api.webhooks import router as webhooks_router
from utils.logging import setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.log_level, json_logs=settings.log_json)
    await init_db()
    yield


app = FastAPI(
    title=settings.app_name,
    description="Pricing run queue: dispatcher, executor callbacks and daily market rates",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(pricing_runs_router)
app.include_router(pricing_queue_router)
app.include_router(webhooks_router)
app.include_router(market_updates_router)


@app.get("/health")
async def health():
    return {"status": "ok"}
