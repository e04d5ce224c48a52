"""
mathpractice.db.models

Persistence schema for practice sessions.

Responsibilities:
- MathProblemSession: one generated problem and its correct answer.
- MathProblemSubmission: one graded answer attempt against a session.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from sqlalchemy import Boolean, Float, ForeignKey, Index, Text, Uuid as SAUuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from mathpractice.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(tz=UTC).replace(tzinfo=None)


class MathProblemSession(Base):
    __tablename__ = "math_problem_sessions"

    id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    problem_text: Mapped[str] = mapped_column(Text, nullable=False)
    correct_answer: Mapped[float] = mapped_column(Float, nullable=False)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)

    submissions: Mapped[list[MathProblemSubmission]] = relationship(
        back_populates="session", cascade="all, delete-orphan"
    )


class MathProblemSubmission(Base):
    __tablename__ = "math_problem_submissions"

    id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    session_id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), ForeignKey("math_problem_sessions.id"), nullable=False, index=True
    )

    user_answer: Mapped[float] = mapped_column(Float, nullable=False)
    is_correct: Mapped[bool] = mapped_column(Boolean, nullable=False)
    feedback_text: Mapped[str] = mapped_column(Text, nullable=False, default="")

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)

    session: Mapped[MathProblemSession] = relationship(back_populates="submissions")

    __table_args__ = (Index("ix_submissions_session_created", "session_id", "created_at"),)


# --- Module Notes -----------------------------------------------------------
# Answers are stored as floats; whole-number answers read back as e.g. 19.0, which
# still compares equal to 19 under exact numeric equality.
