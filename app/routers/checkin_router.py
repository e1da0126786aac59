# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindTrack - Check-in & CBT Companion project.
# Licensed under the MIT License - see the LICENSE file for details.

import math
from fastapi import APIRouter, Depends, Query, Request, Response
from sqlalchemy.orm import Session

from app.auth import get_db, get_current_user_id
from app.schemas.checkin_schemas import (
    CheckinRequest,
    CheckinOut,
    CheckinListResponse,
    CheckinStatsResponse,
    Pagination,
)
from app.services import checkin_service
from app.utils.rate_limit_utils import limiter, WRITE_RATE_LIMIT

router = APIRouter(prefix="/checkins", tags=["Check-ins"])


@router.post("")
@limiter.limit(WRITE_RATE_LIMIT)
def create_checkin(
    request: Request,
    response: Response,
    payload: CheckinRequest,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    checkin, created = checkin_service.save_checkin(
        db, user_id, payload.goals, payload.intentions, payload.date
    )
    response.status_code = 201 if created else 200
    return {
        "message": "Check-in saved successfully" if created else "Check-in updated successfully",
        "checkInId": checkin.id,
        "checkin": CheckinOut.model_validate(checkin),
    }


@router.put("/{checkin_id}")
@limiter.limit(WRITE_RATE_LIMIT)
def update_checkin(
    request: Request,
    checkin_id: int,
    payload: CheckinRequest,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    checkin = checkin_service.update_checkin(
        db, user_id, checkin_id, payload.goals, payload.intentions, payload.date
    )
    return {
        "message": "Check-in updated successfully",
        "checkin": CheckinOut.model_validate(checkin),
    }


@router.get("", response_model=CheckinListResponse)
def get_user_checkins(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    records, total = checkin_service.list_checkins(db, user_id, page, limit)
    return CheckinListResponse(
        checkins=[CheckinOut.model_validate(r) for r in records],
        pagination=Pagination(total=total, page=page, limit=limit, totalPages=math.ceil(total / limit)),
    )


@router.get("/today", response_model=CheckinOut)
def get_todays_checkin(db: Session = Depends(get_db), user_id: int = Depends(get_current_user_id)):
    return CheckinOut.model_validate(checkin_service.get_todays_checkin(db, user_id))


@router.get("/stats", response_model=CheckinStatsResponse)
def get_stats(db: Session = Depends(get_db), user_id: int = Depends(get_current_user_id)):
    stats = checkin_service.get_checkin_stats(db, user_id)
    return CheckinStatsResponse(totalCheckins=stats.total_checkins, currentStreak=stats.current_streak)
