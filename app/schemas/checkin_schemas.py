# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindTrack - Check-in & CBT Companion project.
# Licensed under the MIT License - see the LICENSE file for details.

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from typing import List, Optional, Union
import datetime


class CheckinRequest(BaseModel):
    # A bare string is accepted for older clients
    goals: Union[List[Optional[str]], str, None] = None
    intentions: Optional[str] = None
    date: Optional[datetime.date] = None

class CheckinOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    goals: List[str] = Field(validation_alias=AliasChoices("goal_list", "goals"))
    intentions: str
    date: datetime.date
    created_at: datetime.datetime
    updated_at: Optional[datetime.datetime] = None

class Pagination(BaseModel):
    total: int
    page: int
    limit: int
    totalPages: int

class CheckinListResponse(BaseModel):
    checkins: List[CheckinOut]
    pagination: Pagination

class CheckinStatsResponse(BaseModel):
    totalCheckins: int
    currentStreak: int
