# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindTrack - Check-in & CBT Companion project.
# Licensed under the MIT License - see the LICENSE file for details.

from pydantic import BaseModel, ConfigDict
from typing import Optional
import datetime


class JournalRequest(BaseModel):
    entry: Optional[str] = None

class JournalOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    date: datetime.date
    entry: str
    updated_at: Optional[datetime.datetime] = None
