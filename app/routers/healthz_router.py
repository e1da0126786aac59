# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindTrack - Check-in & CBT Companion project.
# Licensed under the MIT License - see the LICENSE file for details.



from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.auth import get_db
import logging

router = APIRouter(tags=["Infra"])
logger = logging.getLogger(__name__)


@router.get("/healthz")
def health_check(db: Session = Depends(get_db)):
    result = {"db_connection": False}

    try:
        # ✅ Check DB round trip
        db.execute(text("SELECT 1"))
        result["db_connection"] = True
    except SQLAlchemyError as e:
        logger.error(f"🛑 Health check DB probe failed: {e}")
        return {"status": "error", "error": str(e), "details": result}

    return {"status": "ok", "details": result}
