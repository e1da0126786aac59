# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindTrack - Check-in & CBT Companion project.
# Licensed under the MIT License - see the LICENSE file for details.

import math
from fastapi import APIRouter, Depends, Query, Request, Response
from sqlalchemy.orm import Session

from app.auth import get_db, get_current_user_id
from app.schemas.checkin_schemas import Pagination
from app.schemas.todo_schemas import (
    TodoCreateRequest,
    TodoUpdateRequest,
    ImportGoalsRequest,
    SubtasksRequest,
    TodoOut,
    TodoListResponse,
    ImportGoalsResponse,
    SubtasksResponse,
)
from app.services import todo_service, goal_importer, task_tree
from app.utils.rate_limit_utils import limiter, WRITE_RATE_LIMIT

router = APIRouter(prefix="/todos", tags=["Todos"])


@router.get("", response_model=TodoListResponse)
def get_user_todos(
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=200),
    grouped: bool = False,
    include_orphans: bool = False,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    """
    Newest first. With grouped=true the pages are made of top-level todos,
    each followed by its own subtasks.
    """
    if grouped:
        todos, total = todo_service.list_grouped_todos(db, user_id, page, limit, include_orphans=include_orphans)
    else:
        todos, total = todo_service.list_todos(db, user_id, page, limit)

    return TodoListResponse(
        todos=[TodoOut.model_validate(t) for t in todos],
        pagination=Pagination(total=total, page=page, limit=limit, totalPages=math.ceil(total / limit)),
    )


@router.post("", status_code=201, response_model=TodoOut)
@limiter.limit(WRITE_RATE_LIMIT)
def create_todo(
    request: Request,
    payload: TodoCreateRequest,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    todo = todo_service.create_todo(
        db,
        user_id,
        payload.text,
        completed=payload.completed,
        checkin_id=payload.checkin_id,
        parent_id=payload.parent_id,
    )
    return TodoOut.model_validate(todo)


@router.put("/{todo_id}", response_model=TodoOut)
@limiter.limit(WRITE_RATE_LIMIT)
def update_todo(
    request: Request,
    todo_id: int,
    payload: TodoUpdateRequest,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    todo = todo_service.update_todo(db, user_id, todo_id, text=payload.text, completed=payload.completed)
    return TodoOut.model_validate(todo)


@router.delete("/{todo_id}")
@limiter.limit(WRITE_RATE_LIMIT)
def delete_todo(
    request: Request,
    todo_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    removed = task_tree.delete_todo(db, user_id, todo_id)
    return {"message": "Todo deleted successfully", "deleted": removed}


@router.get("/imported")
def check_imported_goals(
    checkin_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    return {"imported": goal_importer.is_imported(db, user_id, checkin_id)}


@router.post("/import", response_model=ImportGoalsResponse)
@limiter.limit(WRITE_RATE_LIMIT)
def import_from_checkin(
    request: Request,
    response: Response,
    payload: ImportGoalsRequest,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    result = goal_importer.import_goals(db, user_id, payload.checkin_id)
    if not result.created:
        response.status_code = 200
        return ImportGoalsResponse(message="Goals already imported", already_imported=True)

    response.status_code = 201
    return ImportGoalsResponse(
        message=f"Successfully imported {len(result.todos)} goals as todo items",
        already_imported=False,
        todos=[TodoOut.model_validate(t) for t in result.todos],
    )


@router.post("/{todo_id}/subtasks", response_model=SubtasksResponse)
@limiter.limit(WRITE_RATE_LIMIT)
def create_subtasks(
    request: Request,
    response: Response,
    todo_id: int,
    payload: SubtasksRequest,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    subtasks = task_tree.break_down_task(db, user_id, todo_id, payload.subtasks)
    response.status_code = 201 if subtasks else 200
    return SubtasksResponse(
        message=f"Created {len(subtasks)} subtasks" if subtasks else "No subtasks to create",
        todos=[TodoOut.model_validate(t) for t in subtasks],
    )
