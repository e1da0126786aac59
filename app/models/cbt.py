# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindTrack - Check-in & CBT Companion project.
# Licensed under the MIT License - see the LICENSE file for details.


from sqlalchemy import Column, Integer, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from app.models.database import Base
from app.utils.encryption import EncryptedText  # 🔐 Encryption utils


class ThoughtRecord(Base):
    __tablename__ = "thought_records"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    situation = Column(EncryptedText, nullable=False)          # 🔐
    automatic_thought = Column(EncryptedText, nullable=False)  # 🔐
    emotion_intensity = Column(Integer, nullable=False)        # 0-100
    evidence_for = Column(EncryptedText, nullable=True)        # 🔐
    evidence_against = Column(EncryptedText, nullable=True)    # 🔐
    balanced_thought = Column(EncryptedText, nullable=True)    # 🔐
    new_emotion_intensity = Column(Integer, nullable=True)     # 0-100

    created_at = Column(DateTime, default=datetime.utcnow)

    user = relationship("User", back_populates="thought_records")

    def __repr__(self):
        return f"<ThoughtRecord id={self.id} intensity={self.emotion_intensity}->{self.new_emotion_intensity}>"


class BehaviouralExperiment(Base):
    __tablename__ = "behavioural_experiments"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    negative_prediction = Column(EncryptedText, nullable=False)  # 🔐
    experiment_plan = Column(EncryptedText, nullable=False)      # 🔐
    outcome = Column(EncryptedText, nullable=True)               # 🔐
    comparison = Column(EncryptedText, nullable=True)            # 🔐

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="behavioural_experiments")
