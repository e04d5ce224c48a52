from __future__ import annotations

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from mathpractice.db.models import MathProblemSession


class ProblemSessionRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, *, problem_text: str, correct_answer: float) -> MathProblemSession:
        row = MathProblemSession(problem_text=problem_text, correct_answer=correct_answer)
        self._session.add(row)
        await self._session.flush()
        return row

    async def get(self, session_id: uuid.UUID) -> MathProblemSession | None:
        return await self._session.get(MathProblemSession, session_id)
