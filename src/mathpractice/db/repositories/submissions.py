"""
mathpractice.db.repositories.submissions

Repository for `MathProblemSubmission` entities.

Responsibilities:
- Append graded submissions (append-only in normal operation).
- List the submissions recorded against one session, oldest first.
"""

from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from mathpractice.db.models import MathProblemSubmission


class SubmissionRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(
        self,
        *,
        session_id: uuid.UUID,
        user_answer: float,
        is_correct: bool,
        feedback_text: str,
    ) -> MathProblemSubmission:
        row = MathProblemSubmission(
            session_id=session_id,
            user_answer=user_answer,
            is_correct=is_correct,
            feedback_text=feedback_text,
        )
        self._session.add(row)
        await self._session.flush()
        return row

    async def list_for_session(self, session_id: uuid.UUID) -> list[MathProblemSubmission]:
        stmt = (
            select(MathProblemSubmission)
            .where(MathProblemSubmission.session_id == session_id)
            .order_by(MathProblemSubmission.created_at)
        )
        return list((await self._session.execute(stmt)).scalars().all())
