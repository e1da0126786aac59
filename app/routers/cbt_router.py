# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindTrack - Check-in & CBT Companion project.
# Licensed under the MIT License - see the LICENSE file for details.

from typing import List
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.auth import get_db, get_current_user_id
from app.schemas.cbt_schemas import (
    ThoughtRecordRequest,
    ThoughtRecordOut,
    ExperimentRequest,
    ExperimentOutcomeRequest,
    ExperimentOut,
    QuizAnswerRequest,
)
from app.services import cbt_service
from app.utils.rate_limit_utils import limiter, WRITE_RATE_LIMIT

router = APIRouter(prefix="/cbt", tags=["CBT Toolbox"])


#------------------------------------ Thought records ------------------------------------

@router.post("/thought-records", status_code=201, response_model=ThoughtRecordOut)
@limiter.limit(WRITE_RATE_LIMIT)
def create_thought_record(
    request: Request,
    payload: ThoughtRecordRequest,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    record = cbt_service.create_thought_record(db, user_id, **payload.model_dump())
    return ThoughtRecordOut.model_validate(record)


@router.get("/thought-records", response_model=List[ThoughtRecordOut])
def list_thought_records(db: Session = Depends(get_db), user_id: int = Depends(get_current_user_id)):
    return [ThoughtRecordOut.model_validate(r) for r in cbt_service.list_thought_records(db, user_id)]


@router.delete("/thought-records/{record_id}")
@limiter.limit(WRITE_RATE_LIMIT)
def delete_thought_record(
    request: Request,
    record_id: int,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    cbt_service.delete_thought_record(db, user_id, record_id)
    return {"message": "Thought record deleted"}


#------------------------------------ Behavioural experiments ------------------------------------

@router.post("/experiments", status_code=201, response_model=ExperimentOut)
@limiter.limit(WRITE_RATE_LIMIT)
def create_experiment(
    request: Request,
    payload: ExperimentRequest,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    experiment = cbt_service.create_experiment(db, user_id, **payload.model_dump())
    return ExperimentOut.model_validate(experiment)


@router.put("/experiments/{experiment_id}", response_model=ExperimentOut)
@limiter.limit(WRITE_RATE_LIMIT)
def record_experiment_outcome(
    request: Request,
    experiment_id: int,
    payload: ExperimentOutcomeRequest,
    db: Session = Depends(get_db),
    user_id: int = Depends(get_current_user_id),
):
    experiment = cbt_service.record_experiment_outcome(
        db, user_id, experiment_id, payload.outcome, payload.comparison
    )
    return ExperimentOut.model_validate(experiment)


@router.get("/experiments", response_model=List[ExperimentOut])
def list_experiments(db: Session = Depends(get_db), user_id: int = Depends(get_current_user_id)):
    return [ExperimentOut.model_validate(e) for e in cbt_service.list_experiments(db, user_id)]


#------------------------------------ Distortions quiz ------------------------------------

@router.get("/distortion-quiz")
def get_distortion_quiz():
    return cbt_service.get_quiz()


@router.post("/distortion-quiz")
def answer_distortion_quiz(payload: QuizAnswerRequest, user_id: int = Depends(get_current_user_id)):
    return cbt_service.grade_quiz(payload.selected, payload.rephrase)
