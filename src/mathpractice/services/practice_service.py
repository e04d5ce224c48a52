"""
mathpractice.services.practice_service

Server-side practice operations.

Responsibilities:
- generate_problem: ask the problem source for a problem, then persist it.
- submit_answer: load the stored session, grade, ask for feedback, record.
  A failed record is logged; the graded result is still returned.
"""

from __future__ import annotations

from dataclasses import dataclass

from mathpractice.grading import Number, is_correct
from mathpractice.observability.logging import get_logger
from mathpractice.sources.base import FeedbackSource, ProblemSource, SessionStore
from mathpractice.sources.errors import SessionNotFound, StoreError

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class GeneratedSession:
    session_id: str
    problem_text: str
    final_answer: Number


@dataclass(frozen=True, slots=True)
class GradedSubmission:
    is_correct: bool
    feedback_text: str


class PracticeService:
    def __init__(
        self,
        *,
        problems: ProblemSource,
        feedback: FeedbackSource,
        store: SessionStore,
    ) -> None:
        self._problems = problems
        self._feedback = feedback
        self._store = store

    async def generate_problem(self) -> GeneratedSession:
        problem = await self._problems.generate()
        session_id = await self._store.create_session(
            problem_text=problem.problem_text,
            correct_answer=problem.final_answer,
        )
        log.info("problem.generated", session_id=session_id)
        return GeneratedSession(
            session_id=session_id,
            problem_text=problem.problem_text,
            final_answer=problem.final_answer,
        )

    async def submit_answer(self, *, session_id: str, user_answer: Number) -> GradedSubmission:
        # Grading uses the stored answer, never one supplied by the caller.
        session = await self._store.get_session(session_id)
        correct = is_correct(user_answer, session.correct_answer)
        feedback_text = await self._feedback.explain(
            problem_text=session.problem_text,
            correct_answer=session.correct_answer,
            user_answer=user_answer,
        )
        try:
            await self._store.record_submission(
                session_id=session_id,
                user_answer=user_answer,
                is_correct=correct,
                feedback_text=feedback_text,
            )
        except SessionNotFound:
            raise
        except StoreError as e:
            # Grading and feedback stand even when the write fails.
            log.error("answer.persist_failed", session_id=session_id, detail=e.message)
        log.info("answer.graded", session_id=session_id, is_correct=correct)
        return GradedSubmission(is_correct=correct, feedback_text=feedback_text)
