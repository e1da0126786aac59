# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindTrack - Check-in & CBT Companion project.
# Licensed under the MIT License - see the LICENSE file for details.

import logging
from typing import List, Optional, Tuple
from fastapi import HTTPException
from sqlalchemy.orm import Session, aliased
from sqlalchemy.exc import SQLAlchemyError
from app.models.todo import Todo
from app.services.goal_importer import get_owned_checkin
from app.services.task_tree import get_owned_todo, get_parent_todo, group_todos

logger = logging.getLogger(__name__)


def create_todo(
    db: Session,
    user_id: int,
    text: str,
    completed: bool = False,
    checkin_id: Optional[int] = None,
    parent_id: Optional[int] = None,
) -> Todo:
    if not text or not text.strip():
        raise HTTPException(status_code=400, detail="Todo text is required")

    if parent_id is not None:
        get_parent_todo(db, user_id, parent_id)
    if checkin_id is not None:
        get_owned_checkin(db, user_id, checkin_id)

    todo = Todo(
        user_id=user_id,
        text=text.strip(),
        completed=completed,
        checkin_id=checkin_id,
        parent_id=parent_id,
    )
    try:
        db.add(todo)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    db.refresh(todo)

    logger.info(f"📝 User {user_id} created todo {todo.id}")
    return todo


def update_todo(db: Session, user_id: int, todo_id: int, text: Optional[str] = None, completed: Optional[bool] = None) -> Todo:
    todo = get_owned_todo(db, user_id, todo_id)

    if text is not None:
        if not text.strip():
            raise HTTPException(status_code=400, detail="Todo text cannot be empty")
        todo.text = text.strip()
    if completed is not None:
        todo.completed = completed

    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    db.refresh(todo)
    return todo


def list_todos(db: Session, user_id: int, page: int, limit: int) -> Tuple[List[Todo], int]:
    query = db.query(Todo).filter(Todo.user_id == user_id)
    total = query.count()
    todos = (
        query.order_by(Todo.created_at.desc(), Todo.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return todos, total


def list_grouped_todos(db: Session, user_id: int, page: int, limit: int, include_orphans: bool = False) -> Tuple[List[Todo], int]:
    """
    Pages over top-level todos only and brings each one's subtasks along, so
    a parent and its children are never split across pages. The total counts
    top-level todos.

    With include_orphans, subtasks without a valid top-level parent are added
    to the last page.
    """
    top_query = db.query(Todo).filter(Todo.user_id == user_id, Todo.parent_id.is_(None))
    total = top_query.count()
    parents = (
        top_query.order_by(Todo.created_at.desc(), Todo.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )

    todos = list(parents)
    parent_ids = [p.id for p in parents]
    if parent_ids:
        todos.extend(
            db.query(Todo)
            .filter(Todo.user_id == user_id, Todo.parent_id.in_(parent_ids))
            .all()
        )

    last_page = max(1, -(-total // limit))
    if include_orphans and page == last_page:
        parent = aliased(Todo)
        todos.extend(
            db.query(Todo)
            .outerjoin(parent, Todo.parent_id == parent.id)
            .filter(
                Todo.user_id == user_id,
                Todo.parent_id.isnot(None),
                (parent.id.is_(None)) | (parent.parent_id.isnot(None)),
            )
            .all()
        )

    return group_todos(todos, include_orphans=include_orphans), total
