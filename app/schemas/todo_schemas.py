# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindTrack - Check-in & CBT Companion project.
# Licensed under the MIT License - see the LICENSE file for details.

from pydantic import BaseModel, ConfigDict
from typing import List, Optional
from datetime import datetime
from app.schemas.checkin_schemas import Pagination


class TodoCreateRequest(BaseModel):
    text: Optional[str] = None
    completed: bool = False
    checkin_id: Optional[int] = None
    parent_id: Optional[int] = None

class TodoUpdateRequest(BaseModel):
    text: Optional[str] = None
    completed: Optional[bool] = None

class ImportGoalsRequest(BaseModel):
    checkin_id: int

class SubtasksRequest(BaseModel):
    subtasks: List[Optional[str]] = []

class TodoOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    text: str
    completed: bool
    checkin_id: Optional[int] = None
    parent_id: Optional[int] = None
    is_subtask: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

class TodoListResponse(BaseModel):
    todos: List[TodoOut]
    pagination: Pagination

class ImportGoalsResponse(BaseModel):
    message: str
    already_imported: bool
    todos: List[TodoOut] = []

class SubtasksResponse(BaseModel):
    message: str
    todos: List[TodoOut]
