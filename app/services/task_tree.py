# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindTrack - Check-in & CBT Companion project.
# Licensed under the MIT License - see the LICENSE file for details.

import logging
from collections import defaultdict
from datetime import datetime
from typing import Iterable, List, Optional
from fastapi import HTTPException
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from app.models.todo import Todo

logger = logging.getLogger(__name__)


def _created_key(todo) -> datetime:
    return todo.created_at or datetime.min


def group_todos(todos: Iterable[Todo], include_orphans: bool = False) -> List[Todo]:
    """
    Display order for a flat todo list: newest top-level task first, each one
    followed by its own subtasks (newest first).

    Subtasks whose parent is missing, or whose parent is itself a subtask, are
    orphans. They are left out unless include_orphans is set, in which case
    they go at the end, newest first.
    """
    todos = list(todos)
    top_level = [t for t in todos if t.parent_id is None]
    children = defaultdict(list)
    for t in todos:
        if t.parent_id is not None:
            children[t.parent_id].append(t)

    ordered = []
    for parent in sorted(top_level, key=_created_key, reverse=True):
        ordered.append(parent)
        ordered.extend(sorted(children.pop(parent.id, []), key=_created_key, reverse=True))

    if include_orphans:
        orphans = [t for group in children.values() for t in group]
        ordered.extend(sorted(orphans, key=_created_key, reverse=True))

    return ordered


def get_owned_todo(db: Session, user_id: int, todo_id: int) -> Todo:
    todo = db.query(Todo).filter(Todo.id == todo_id, Todo.user_id == user_id).first()
    if not todo:
        raise HTTPException(status_code=404, detail="Todo not found or not authorized")
    return todo


def get_parent_todo(db: Session, user_id: int, parent_id: int) -> Todo:
    """Owned top-level todo that may receive subtasks."""
    parent = get_owned_todo(db, user_id, parent_id)
    if parent.is_subtask:
        raise HTTPException(status_code=400, detail="Subtasks cannot have subtasks of their own")
    return parent


def break_down_task(db: Session, user_id: int, parent_id: int, texts: Iterable[Optional[str]]) -> List[Todo]:
    """
    Creates one subtask per non-blank text under the given parent, in a single
    commit. Nothing left after dropping blanks is a no-op.
    """
    parent = get_parent_todo(db, user_id, parent_id)

    cleaned = [t.strip() for t in texts if t and t.strip()]
    if not cleaned:
        return []

    subtasks = [
        Todo(user_id=user_id, text=text, completed=False, parent_id=parent.id)
        for text in cleaned
    ]
    try:
        db.add_all(subtasks)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    for subtask in subtasks:
        db.refresh(subtask)

    logger.info(f"🧩 User {user_id} broke todo {parent.id} into {len(subtasks)} subtasks")
    return subtasks


def delete_todo(db: Session, user_id: int, todo_id: int) -> int:
    """
    Deletes a todo. A top-level todo takes its subtasks with it; the children
    and the parent go in one transaction so a failure leaves everything in
    place. Returns how many rows were removed.
    """
    todo = get_owned_todo(db, user_id, todo_id)

    try:
        removed = 0
        if not todo.is_subtask:
            removed = (
                db.query(Todo)
                .filter(Todo.parent_id == todo.id, Todo.user_id == user_id)
                .delete(synchronize_session=False)
            )
        db.delete(todo)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    logger.info(f"🗑️ User {user_id} deleted todo {todo_id} and {removed} subtasks")
    return removed + 1
