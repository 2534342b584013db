from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

import uvicorn
from dotenv import load_dotenv
from fastapi import Depends, FastAPI
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError
from starlette.middleware.cors import CORSMiddleware

from parking import config
from parking.db import close_mongo, connect_mongo, get_db
from parking.deps import build_notification_dispatcher
from parking.exception_handlers import register_exception_handlers
from parking.middleware.correlation_id import CorrelationIdMiddleware
from parking.routers.payments import router as payments_router
from parking.routers.reservations import router as reservations_router

ROOT_DIR = Path(__file__).parent

# Load .env only if exists (development fallback)
env_path = ROOT_DIR / ".env"
if env_path.exists():
    load_dotenv(env_path)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("smart-parking")

NOTIFICATION_DRAIN_SECONDS = 10.0


@asynccontextmanager
async def lifespan(app: FastAPI):
    await connect_mongo(app.state)
    app.state.notifications = build_notification_dispatcher()
    logger.info("Connected to MongoDB (%s)", config.db_name())
    logger.info("Startup complete")
    try:
        yield
    finally:
        await app.state.notifications.drain(timeout=NOTIFICATION_DRAIN_SECONDS)
        await close_mongo(app.state)
        logger.info("Shutdown complete")


app = FastAPI(title=config.APP_NAME, version=config.APP_VERSION, lifespan=lifespan)

app.add_middleware(CorrelationIdMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_credentials=True,
    allow_origins=config.cors_origins(),
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(reservations_router)
app.include_router(payments_router)


@app.get("/health")
async def health(db: AsyncIOMotorDatabase = Depends(get_db)) -> dict[str, Any]:
    """Health check with database ping"""
    try:
        await db.command("ping")
        ok = True
    except PyMongoError:
        ok = False
    return {"ok": ok, "service": config.SERVICE_NAME}


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=config.listen_port())
