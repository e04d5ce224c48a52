"""
tests.test_sql_store

SqlSessionStore against a temporary SQLite database.
"""

from __future__ import annotations

import uuid
from pathlib import Path

import pytest

from mathpractice.db.init_db import init_db
from mathpractice.db.session import create_engine, create_sessionmaker
from mathpractice.settings import Settings
from mathpractice.sources.errors import SessionNotFound
from mathpractice.sources.sql_store import SqlSessionStore


async def _store(tmp_path: Path):
    engine = create_engine(Settings(database_url=f"sqlite+aiosqlite:///{tmp_path}/store.db"))
    await init_db(engine)
    return engine, SqlSessionStore(create_sessionmaker(engine))


@pytest.mark.asyncio
async def test_session_round_trip_and_submissions(tmp_path: Path) -> None:
    engine, store = await _store(tmp_path)
    try:
        session_id = await store.create_session(problem_text="What is 12+7?", correct_answer=19)
        uuid.UUID(session_id)

        stored = await store.get_session(session_id)
        assert stored.problem_text == "What is 12+7?"
        assert stored.correct_answer == 19

        await store.record_submission(
            session_id=session_id, user_answer=20, is_correct=False, feedback_text="Close."
        )
        await store.record_submission(
            session_id=session_id, user_answer=19, is_correct=True, feedback_text="Yes!"
        )

        submissions = await store.list_submissions(session_id)
        assert [(s.user_answer, s.is_correct) for s in submissions] == [(20, False), (19, True)]
        assert submissions[1].feedback_text == "Yes!"
    finally:
        await engine.dispose()


@pytest.mark.asyncio
@pytest.mark.parametrize("session_id", [str(uuid.uuid4()), "not-a-session"])
async def test_unknown_session(tmp_path: Path, session_id: str) -> None:
    engine, store = await _store(tmp_path)
    try:
        with pytest.raises(SessionNotFound) as exc_info:
            await store.get_session(session_id)
        assert exc_info.value.message == "Session not found"

        with pytest.raises(SessionNotFound):
            await store.record_submission(
                session_id=session_id, user_answer=1, is_correct=False, feedback_text=""
            )
    finally:
        await engine.dispose()
