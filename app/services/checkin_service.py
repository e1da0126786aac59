# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindTrack - Check-in & CBT Companion project.
# Licensed under the MIT License - see the LICENSE file for details.

import logging
from datetime import date
from typing import List, Optional, Tuple
from fastapi import HTTPException
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from app.models.checkin import CheckIn, normalize_goals
from app.services.streak_calculator import CheckinStats, compute_checkin_stats
from app.utils.date_utils import today_local, to_local_date

logger = logging.getLogger(__name__)


def _validated_goals(goals, intentions: Optional[str], checkin_date: Optional[date]) -> List[str]:
    cleaned = normalize_goals(goals)
    if not cleaned or not (intentions and intentions.strip()) or not checkin_date:
        raise HTTPException(status_code=400, detail="Missing required fields")
    return cleaned


def find_checkin_for_date(db: Session, user_id: int, checkin_date: date) -> Optional[CheckIn]:
    return (
        db.query(CheckIn)
        .filter(CheckIn.user_id == user_id, CheckIn.date == checkin_date)
        .first()
    )


def save_checkin(db: Session, user_id: int, goals, intentions: str, checkin_date: date) -> Tuple[CheckIn, bool]:
    """
    Records the day's check-in. A second save for the same date edits the
    existing row. Returns (checkin, created).

    If another request inserted the same date first, the unique constraint
    rejects our insert and we update that row instead.
    """
    cleaned = _validated_goals(goals, intentions, checkin_date)
    checkin_date = to_local_date(checkin_date)
    intentions = intentions.strip()

    checkin = find_checkin_for_date(db, user_id, checkin_date)
    created = checkin is None
    if created:
        checkin = CheckIn(user_id=user_id, date=checkin_date)
        db.add(checkin)

    checkin.goals = cleaned
    checkin.intentions = intentions

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        checkin = find_checkin_for_date(db, user_id, checkin_date)
        if checkin is None:
            raise
        logger.warning(f"⚠️ Concurrent check-in for user {user_id} on {checkin_date}; updating the existing row")
        created = False
        checkin.goals = cleaned
        checkin.intentions = intentions
        try:
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            raise
    except SQLAlchemyError:
        db.rollback()
        raise
    db.refresh(checkin)

    logger.info(f"✅ User {user_id} {'created' if created else 'updated'} check-in {checkin.id} for {checkin_date}")
    return checkin, created


def update_checkin(db: Session, user_id: int, checkin_id: int, goals, intentions: str, checkin_date: date) -> CheckIn:
    cleaned = _validated_goals(goals, intentions, checkin_date)
    checkin_date = to_local_date(checkin_date)

    checkin = db.query(CheckIn).filter(CheckIn.id == checkin_id, CheckIn.user_id == user_id).first()
    if not checkin:
        raise HTTPException(status_code=404, detail="Check-in not found or not authorized to update")

    if checkin_date != checkin.date:
        clash = (
            db.query(CheckIn.id)
            .filter(CheckIn.user_id == user_id, CheckIn.date == checkin_date, CheckIn.id != checkin.id)
            .first()
        )
        if clash:
            raise HTTPException(status_code=409, detail="Another check-in already exists for that date")

    checkin.goals = cleaned
    checkin.intentions = intentions.strip()
    checkin.date = checkin_date

    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    db.refresh(checkin)
    return checkin


def list_checkins(db: Session, user_id: int, page: int, limit: int) -> Tuple[List[CheckIn], int]:
    query = db.query(CheckIn).filter(CheckIn.user_id == user_id)
    total = query.count()
    records = (
        query.order_by(CheckIn.date.desc(), CheckIn.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return records, total


def get_todays_checkin(db: Session, user_id: int) -> CheckIn:
    checkin = (
        db.query(CheckIn)
        .filter(CheckIn.user_id == user_id, CheckIn.date == today_local())
        .first()
    )
    if not checkin:
        raise HTTPException(status_code=404, detail="No check-in found for today")
    return checkin


def get_checkin_stats(db: Session, user_id: int) -> CheckinStats:
    rows = db.query(CheckIn.date).filter(CheckIn.user_id == user_id).all()
    return compute_checkin_stats([to_local_date(row.date) for row in rows], today_local())
