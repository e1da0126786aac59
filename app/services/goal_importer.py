# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindTrack - Check-in & CBT Companion project.
# Licensed under the MIT License - see the LICENSE file for details.

import logging
from typing import List, NamedTuple
from fastapi import HTTPException
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from app.models.checkin import CheckIn
from app.models.todo import Todo, GoalImport

logger = logging.getLogger(__name__)


class ImportResult(NamedTuple):
    created: bool
    todos: List[Todo]


def get_owned_checkin(db: Session, user_id: int, checkin_id: int) -> CheckIn:
    checkin = db.query(CheckIn).filter(CheckIn.id == checkin_id, CheckIn.user_id == user_id).first()
    if not checkin:
        raise HTTPException(status_code=404, detail="Check-in not found")
    return checkin


def is_imported(db: Session, user_id: int, checkin_id: int) -> bool:
    marker = (
        db.query(GoalImport.id)
        .filter(GoalImport.user_id == user_id, GoalImport.checkin_id == checkin_id)
        .first()
    )
    if marker:
        return True

    count = db.query(Todo).filter(Todo.user_id == user_id, Todo.checkin_id == checkin_id).count()
    return count > 0


def import_goals(db: Session, user_id: int, checkin_id: int) -> ImportResult:
    """
    Turns a check-in's goals into todos, at most once per check-in.

    The GoalImport row is unique per (user, check-in) and is written in the
    same commit as the todos, so two racing imports cannot both succeed.
    """
    checkin = get_owned_checkin(db, user_id, checkin_id)
    checkin_id = checkin.id

    if is_imported(db, user_id, checkin.id):
        logger.info(f"🔁 Check-in {checkin.id} already imported for user {user_id}")
        return ImportResult(created=False, todos=[])

    goals = checkin.goal_list
    if not goals:
        raise HTTPException(status_code=400, detail="No goals found in the check-in")

    todos = [
        Todo(user_id=user_id, text=goal, completed=False, checkin_id=checkin_id)
        for goal in goals
    ]

    try:
        db.add(GoalImport(user_id=user_id, checkin_id=checkin_id))
        db.add_all(todos)
        db.commit()
    except IntegrityError:
        db.rollback()
        if not is_imported(db, user_id, checkin_id):
            raise
        logger.warning(f"⚠️ Concurrent import of check-in {checkin_id} for user {user_id} lost the race")
        return ImportResult(created=False, todos=[])
    except SQLAlchemyError:
        db.rollback()
        raise

    for todo in todos:
        db.refresh(todo)

    logger.info(f"📥 Imported {len(todos)} goals from check-in {checkin_id} for user {user_id}")
    return ImportResult(created=True, todos=todos)
