"""
SQLAlchemy models for interview sessions and their per-question log.
"""
import uuid
from sqlalchemy import Column, String, Text, Integer, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from interview_ace.database.connection import Base
from interview_ace.models.interview import InterviewStage


def _new_id() -> str:
    return str(uuid.uuid4())


class InterviewSession(Base):
    """One mock interview: resume, generated questions and wizard progress."""
    __tablename__ = "interview_sessions"

    id = Column(String(36), primary_key=True, default=_new_id)
    stage = Column(String(50), nullable=False, default=InterviewStage.INITIAL.value, index=True)
    resume_data = Column(JSON, nullable=True)  # ParseResumeOutput as a dict
    resume_summary = Column(Text, nullable=True)
    questions = Column(JSON, nullable=False, default=list)
    current_question_index = Column(Integer, nullable=False, default=0)
    error_message = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    log_entries = relationship(
        "InterviewLogEntry",
        back_populates="session",
        cascade="all, delete-orphan",
        order_by="InterviewLogEntry.id"
    )

    @property
    def current_stage(self) -> InterviewStage:
        return InterviewStage(self.stage)

    @property
    def current_question(self):
        questions = self.questions or []
        if 0 <= self.current_question_index < len(questions):
            return questions[self.current_question_index]
        return None

    def __repr__(self):
        return f"<InterviewSession(id={self.id}, stage={self.stage}, questions={len(self.questions or [])})>"


class InterviewLogEntry(Base):
    """The recorded outcome of one answered question."""
    __tablename__ = "interview_log_entries"

    id = Column(Integer, primary_key=True, autoincrement=True)
    session_id = Column(String(36), ForeignKey("interview_sessions.id", ondelete="CASCADE"), nullable=False, index=True)
    question_index = Column(Integer, nullable=False)
    question = Column(Text, nullable=False)
    media_mime_type = Column(String(100), nullable=True)
    media_size = Column(Integer, nullable=True)
    transcribed_answer = Column(Text, nullable=True)
    evaluation = Column(JSON, nullable=True)  # EvaluateAnswerOutput as a dict
    video_analysis = Column(JSON, nullable=True)  # AnalyzeVideoPerformanceOutput as a dict
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    session = relationship("InterviewSession", back_populates="log_entries")

    @property
    def score(self):
        if not self.evaluation:
            return None
        return self.evaluation.get("score")

    def __repr__(self):
        return f"<InterviewLogEntry(id={self.id}, session_id={self.session_id}, question_index={self.question_index})>"
