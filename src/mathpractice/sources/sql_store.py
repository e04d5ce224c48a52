"""
mathpractice.sources.sql_store

`SessionStore` implementation on async SQLAlchemy.

Responsibilities:
- Own one transaction per store call (repositories never commit).
- Translate SQLAlchemy failures into `StoreError` so callers see a collaborator
  failure rather than a driver exception.
"""

from __future__ import annotations

import uuid

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from mathpractice.db.repositories.sessions import ProblemSessionRepo
from mathpractice.db.repositories.submissions import SubmissionRepo
from mathpractice.grading import Number
from mathpractice.observability.logging import get_logger
from mathpractice.sources.base import StoredSession, StoredSubmission
from mathpractice.sources.errors import SessionNotFound, StoreError

log = get_logger(__name__)


class SqlSessionStore:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def create_session(self, *, problem_text: str, correct_answer: Number) -> str:
        try:
            async with self._session_factory() as session:
                row = await ProblemSessionRepo(session).create(
                    problem_text=problem_text, correct_answer=correct_answer
                )
                await session.commit()
                return str(row.id)
        except SQLAlchemyError as e:
            log.error("store.create_session_failed", error=str(e))
            raise StoreError("Failed to save problem") from e

    async def get_session(self, session_id: str) -> StoredSession:
        key = _parse_id(session_id)
        try:
            async with self._session_factory() as session:
                row = await ProblemSessionRepo(session).get(key)
        except SQLAlchemyError as e:
            log.error("store.get_session_failed", session_id=session_id, error=str(e))
            raise StoreError("Failed to load session") from e
        if row is None:
            raise SessionNotFound(session_id)
        return StoredSession(
            session_id=str(row.id),
            problem_text=row.problem_text,
            correct_answer=row.correct_answer,
        )

    async def record_submission(
        self,
        *,
        session_id: str,
        user_answer: Number,
        is_correct: bool,
        feedback_text: str,
    ) -> None:
        key = _parse_id(session_id)
        try:
            async with self._session_factory() as session:
                if await ProblemSessionRepo(session).get(key) is None:
                    raise SessionNotFound(session_id)
                await SubmissionRepo(session).add(
                    session_id=key,
                    user_answer=user_answer,
                    is_correct=is_correct,
                    feedback_text=feedback_text,
                )
                await session.commit()
        except SQLAlchemyError as e:
            log.error("store.record_submission_failed", session_id=session_id, error=str(e))
            raise StoreError("Failed to save submission") from e

    async def list_submissions(self, session_id: str) -> list[StoredSubmission]:
        key = _parse_id(session_id)
        try:
            async with self._session_factory() as session:
                if await ProblemSessionRepo(session).get(key) is None:
                    raise SessionNotFound(session_id)
                rows = await SubmissionRepo(session).list_for_session(key)
        except SQLAlchemyError as e:
            log.error("store.list_submissions_failed", session_id=session_id, error=str(e))
            raise StoreError("Failed to load submissions") from e
        return [
            StoredSubmission(
                session_id=str(r.session_id),
                user_answer=r.user_answer,
                is_correct=r.is_correct,
                feedback_text=r.feedback_text,
            )
            for r in rows
        ]


def _parse_id(session_id: str) -> uuid.UUID:
    # Identifiers are opaque to callers; anything that is not one of ours is unknown.
    try:
        return uuid.UUID(str(session_id))
    except ValueError as e:
        raise SessionNotFound(str(session_id)) from e
