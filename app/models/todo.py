# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindTrack - Check-in & CBT Companion project.
# Licensed under the MIT License - see the LICENSE file for details.


from sqlalchemy import Column, Integer, Text, Boolean, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.ext.hybrid import hybrid_property
from datetime import datetime
from app.models.database import Base


class Todo(Base):
    __tablename__ = "todos"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    text = Column(Text, nullable=False)
    completed = Column(Boolean, default=False, nullable=False)

    # Source check-in for imported goals; many todos may point at one check-in
    checkin_id = Column(Integer, ForeignKey("checkins.id", ondelete="SET NULL"), nullable=True, index=True)
    # One level only: a subtask's parent is always a top-level todo
    parent_id = Column(Integer, ForeignKey("todos.id"), nullable=True, index=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="todos")
    checkin = relationship("CheckIn", back_populates="todos")

    @hybrid_property
    def is_subtask(self):
        return self.parent_id is not None

    @is_subtask.expression
    def is_subtask(cls):
        return cls.parent_id.isnot(None)

    def __repr__(self):
        return f"<Todo id={self.id} parent={self.parent_id} completed={self.completed}>"


class GoalImport(Base):
    """Marks a check-in whose goals were already turned into todos."""
    __tablename__ = "goal_imports"
    __table_args__ = (
        UniqueConstraint("user_id", "checkin_id", name="uq_goal_imports_user_checkin"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    checkin_id = Column(Integer, ForeignKey("checkins.id", ondelete="CASCADE"), nullable=False)
    imported_at = Column(DateTime, default=datetime.utcnow)

    user = relationship("User", back_populates="goal_imports")
