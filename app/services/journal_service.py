# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindTrack - Check-in & CBT Companion project.
# Licensed under the MIT License - see the LICENSE file for details.

import logging
from typing import List
from fastapi import HTTPException
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from app.models.journal import JournalEntry
from app.utils.date_utils import today_local

logger = logging.getLogger(__name__)


def save_todays_entry(db: Session, user_id: int, text: str) -> JournalEntry:
    """
    One journal entry per user per day: today's row is created on first save
    and overwritten afterwards.
    """
    if not text or not text.strip():
        raise HTTPException(status_code=400, detail="Entry required")

    today = today_local()
    entry = (
        db.query(JournalEntry)
        .filter(JournalEntry.user_id == user_id, JournalEntry.date == today)
        .first()
    )
    if entry is None:
        entry = JournalEntry(user_id=user_id, date=today)
        db.add(entry)
    entry.entry = text

    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    db.refresh(entry)

    logger.info(f"📓 User {user_id} saved journal entry for {today}")
    return entry


def get_todays_entry(db: Session, user_id: int) -> JournalEntry:
    entry = (
        db.query(JournalEntry)
        .filter(JournalEntry.user_id == user_id, JournalEntry.date == today_local())
        .first()
    )
    if not entry:
        raise HTTPException(status_code=404, detail="No journal entry for today")
    return entry


def list_entries(db: Session, user_id: int) -> List[JournalEntry]:
    return (
        db.query(JournalEntry)
        .filter(JournalEntry.user_id == user_id)
        .order_by(JournalEntry.date.desc())
        .all()
    )
