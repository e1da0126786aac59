# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindTrack - Check-in & CBT Companion project.
# Licensed under the MIT License - see the LICENSE file for details.

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.auth import get_db, get_current_user_id
from app.schemas.journal_schemas import JournalRequest, JournalOut
from app.services import journal_service
from app.utils.rate_limit_utils import limiter, WRITE_RATE_LIMIT

router = APIRouter(prefix="/journal", tags=["Journal"])


@router.post("", status_code=201)
@limiter.limit(WRITE_RATE_LIMIT)
def save_journal_entry(
    request: Request,
    payload: JournalRequest,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    entry = journal_service.save_todays_entry(db, user_id, payload.entry)
    return {"message": "Journal entry saved", "entry": JournalOut.model_validate(entry)}


@router.get("/today")
def get_todays_entry(db: Session = Depends(get_db), user_id: int = Depends(get_current_user_id)):
    return {"entry": JournalOut.model_validate(journal_service.get_todays_entry(db, user_id))}


@router.get("")
def get_all_entries(db: Session = Depends(get_db), user_id: int = Depends(get_current_user_id)):
    entries = journal_service.list_entries(db, user_id)
    return {"entries": [JournalOut.model_validate(e) for e in entries]}
