# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindTrack - Check-in & CBT Companion project.
# Licensed under the MIT License - see the LICENSE file for details.

from pydantic import BaseModel, ConfigDict
from typing import List, Optional
from datetime import datetime


class ThoughtRecordRequest(BaseModel):
    situation: str
    automatic_thought: str
    emotion_intensity: int
    evidence_for: Optional[str] = None
    evidence_against: Optional[str] = None
    balanced_thought: Optional[str] = None
    new_emotion_intensity: Optional[int] = None

class ThoughtRecordOut(ThoughtRecordRequest):
    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: datetime

class ExperimentRequest(BaseModel):
    negative_prediction: str
    experiment_plan: str
    outcome: Optional[str] = None
    comparison: Optional[str] = None

class ExperimentOutcomeRequest(BaseModel):
    outcome: Optional[str] = None
    comparison: Optional[str] = None

class ExperimentOut(ExperimentRequest):
    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: datetime
    updated_at: Optional[datetime] = None

class QuizAnswerRequest(BaseModel):
    selected: List[str] = []
    rephrase: Optional[str] = None
