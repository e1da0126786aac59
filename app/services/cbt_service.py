# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindTrack - Check-in & CBT Companion project.
# Licensed under the MIT License - see the LICENSE file for details.

import logging
from typing import Dict, Iterable, List, Optional
from fastapi import HTTPException
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from app.models.cbt import ThoughtRecord, BehaviouralExperiment

logger = logging.getLogger(__name__)

DISTORTIONS = [
    {"key": "allOrNothing", "label": "All-or-Nothing Thinking"},
    {"key": "mindReading", "label": "Mind Reading"},
    {"key": "catastrophizing", "label": "Catastrophizing"},
]

QUIZ_SCENARIO = {
    "text": (
        "You missed a deadline at work. You think, \"I always screw up. My boss is going "
        "to fire me. Everyone will think I'm incompetent.\""
    ),
    "correct": ["allOrNothing", "catastrophizing", "mindReading"],
    "feedback": {
        "allOrNothing": "That's all-or-nothing thinking: believing one mistake means total failure.",
        "mindReading": "That's mind reading: assuming you know what others think without evidence.",
        "catastrophizing": "That's catastrophizing: imagining the worst possible outcome.",
    },
    "rephrase_prompt": "How might you rephrase your thought in a more balanced way?",
}


def get_quiz() -> Dict:
    return {
        "scenario": QUIZ_SCENARIO["text"],
        "options": DISTORTIONS,
        "rephrase_prompt": QUIZ_SCENARIO["rephrase_prompt"],
    }


def grade_quiz(selected: Iterable[str], rephrase: Optional[str] = None) -> Dict:
    """
    Marks each selected distortion right or wrong, lists the ones the user
    missed and scores correct picks minus wrong picks over the correct set.
    """
    known = {d["key"] for d in DISTORTIONS}
    selected = list(dict.fromkeys(selected))
    unknown = [key for key in selected if key not in known]
    if unknown:
        raise HTTPException(status_code=400, detail=f"Unknown distortion keys: {', '.join(unknown)}")

    correct = QUIZ_SCENARIO["correct"]
    results = []
    for key in selected:
        hit = key in correct
        results.append({
            "key": key,
            "correct": hit,
            "feedback": QUIZ_SCENARIO["feedback"][key] if hit else "Not quite",
        })

    hits = sum(1 for r in results if r["correct"])
    misses = len(results) - hits
    score = max(hits - misses, 0) / len(correct)

    response = {
        "results": results,
        "missed": [key for key in correct if key not in selected],
        "score": round(score, 2),
    }
    if rephrase and rephrase.strip():
        response["rephrase_feedback"] = "Great! Practicing balanced thinking helps challenge distortions."
    return response


def _check_intensity(name: str, value: Optional[int]):
    if value is not None and not 0 <= value <= 100:
        raise HTTPException(status_code=400, detail=f"{name} must be between 0 and 100")


def create_thought_record(db: Session, user_id: int, **fields) -> ThoughtRecord:
    if not (fields.get("situation") or "").strip() or not (fields.get("automatic_thought") or "").strip():
        raise HTTPException(status_code=400, detail="Situation and automatic thought are required")
    _check_intensity("emotion_intensity", fields.get("emotion_intensity"))
    _check_intensity("new_emotion_intensity", fields.get("new_emotion_intensity"))

    record = ThoughtRecord(user_id=user_id, **fields)
    try:
        db.add(record)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    db.refresh(record)

    logger.info(f"🧠 User {user_id} saved thought record {record.id}")
    return record


def list_thought_records(db: Session, user_id: int) -> List[ThoughtRecord]:
    return (
        db.query(ThoughtRecord)
        .filter(ThoughtRecord.user_id == user_id)
        .order_by(ThoughtRecord.created_at.desc(), ThoughtRecord.id.desc())
        .all()
    )


def delete_thought_record(db: Session, user_id: int, record_id: int):
    record = db.query(ThoughtRecord).filter(ThoughtRecord.id == record_id, ThoughtRecord.user_id == user_id).first()
    if not record:
        raise HTTPException(status_code=404, detail="Thought record not found")
    try:
        db.delete(record)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise


def create_experiment(db: Session, user_id: int, **fields) -> BehaviouralExperiment:
    if not (fields.get("negative_prediction") or "").strip() or not (fields.get("experiment_plan") or "").strip():
        raise HTTPException(status_code=400, detail="Prediction and experiment plan are required")

    experiment = BehaviouralExperiment(user_id=user_id, **fields)
    try:
        db.add(experiment)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    db.refresh(experiment)

    logger.info(f"🧪 User {user_id} planned experiment {experiment.id}")
    return experiment


def record_experiment_outcome(db: Session, user_id: int, experiment_id: int, outcome: Optional[str], comparison: Optional[str]) -> BehaviouralExperiment:
    experiment = (
        db.query(BehaviouralExperiment)
        .filter(BehaviouralExperiment.id == experiment_id, BehaviouralExperiment.user_id == user_id)
        .first()
    )
    if not experiment:
        raise HTTPException(status_code=404, detail="Experiment not found")

    if outcome is not None:
        experiment.outcome = outcome
    if comparison is not None:
        experiment.comparison = comparison

    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    db.refresh(experiment)
    return experiment


def list_experiments(db: Session, user_id: int) -> List[BehaviouralExperiment]:
    return (
        db.query(BehaviouralExperiment)
        .filter(BehaviouralExperiment.user_id == user_id)
        .order_by(BehaviouralExperiment.created_at.desc(), BehaviouralExperiment.id.desc())
        .all()
    )
