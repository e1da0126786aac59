# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindTrack - Check-in & CBT Companion project.
# Licensed under the MIT License - see the LICENSE file for details.


from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from apscheduler.schedulers.background import BackgroundScheduler
from pytz import timezone  # ✅ use this for cron jobs
from sqlalchemy.exc import SQLAlchemyError
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

import logging
import os

from app.models import database
from app.models import *  # registers all models

from app.routers import auth_router, checkin_router, todo_router, journal_router, cbt_router
from app.routers import healthz_router

from app.utils.date_utils import APP_TIMEZONE
from app.utils.rate_limit_utils import limiter
from app.utils.schedulers.run_all_cleanups import run_all_cleanups

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

SCHEDULER_ENABLED = os.getenv("SCHEDULER_ENABLED", "true").lower() != "false"

# Create DB tables in one go
database.Base.metadata.create_all(bind=database.engine)

# Scheduler setup
scheduler = BackgroundScheduler(job_defaults={"misfire_grace_time": 60})

@asynccontextmanager
async def lifespan(app: FastAPI):
    if SCHEDULER_ENABLED:
        # 🕛 Clean every day at 2 AM
        scheduler.add_job(run_all_cleanups, "cron", hour=2, minute=0, timezone=timezone(APP_TIMEZONE))
        scheduler.start()
        logger.info("⏰ Cleanup scheduler started")
    yield
    if SCHEDULER_ENABLED:
        scheduler.shutdown()

# Create FastAPI app with lifespan
app = FastAPI(
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    title="MindTrack API",
    description="Daily check-ins, to-dos, journaling and CBT exercises",
    version="1.0"
)

app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)

# Include routers
app.include_router(auth_router.router)
app.include_router(checkin_router.router)
app.include_router(todo_router.router)
app.include_router(journal_router.router)
app.include_router(cbt_router.router)
app.include_router(healthz_router.router)


# ---------------------- ADDING EXCEPTION HANDLERS ----------------------
@app.exception_handler(RateLimitExceeded)
async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=429,
        content={"detail": "Too many requests. Please slow down."}
    )

@app.exception_handler(SQLAlchemyError)
async def store_failure_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"🛑 Database error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"detail": "Database error, please try again."}
    )

@app.get("/")
def read_root():
    return {"message": "Welcome to MindTrack backend Live"}

@app.get("/health", tags=["Infra"])
def health_check():
    return {"status": "ok"}
