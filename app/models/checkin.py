# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindTrack - Check-in & CBT Companion project.
# Licensed under the MIT License - see the LICENSE file for details.


from sqlalchemy import Column, Integer, Text, Date, ForeignKey, DateTime, JSON, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
from typing import List
from app.models.database import Base

LEGACY_GOAL_FIELDS = ("goal1", "goal2", "goal3", "goal4")


def normalize_goals(goals, legacy_values=()) -> List[str]:
    """
    Canonical goal list: the stored list when there is one, otherwise the old
    goal1..goal4 columns in order. Entries are trimmed and blanks dropped.
    """
    if isinstance(goals, str):
        goals = [goals]
    if not isinstance(goals, (list, tuple)):
        goals = list(legacy_values)

    return [g.strip() for g in goals if isinstance(g, str) and g.strip()]


class CheckIn(Base):
    __tablename__ = "checkins"
    __table_args__ = (
        UniqueConstraint("user_id", "date", name="uq_checkins_user_date"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    date = Column(Date, nullable=False)

    goals = Column(JSON, nullable=True)
    intentions = Column(Text, nullable=False)

    # Rows written before goals became a list; read through goal_list only
    goal1 = Column(Text, nullable=True)
    goal2 = Column(Text, nullable=True)
    goal3 = Column(Text, nullable=True)
    goal4 = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="checkins")
    todos = relationship("Todo", back_populates="checkin")

    @property
    def goal_list(self) -> List[str]:
        return normalize_goals(self.goals, [getattr(self, f) for f in LEGACY_GOAL_FIELDS])

    def __repr__(self):
        return f"<CheckIn id={self.id} user={self.user_id} date={self.date}>"
