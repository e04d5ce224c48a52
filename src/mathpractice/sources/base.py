"""
mathpractice.sources.base

Interfaces and payload types for the external collaborators.

Responsibilities:
- `ProblemSource`, `FeedbackSource`, `SessionStore` protocols.
- Validated payload shapes exchanged across the boundary.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from pydantic import BaseModel, StrictFloat, StrictInt

from mathpractice.grading import Number


class GeneratedProblem(BaseModel):
    """
    Shape a problem source must produce. Strict numeric types: the correct
    answer is kept exactly as the source produced it, never coerced from text.
    """

    problem_text: str
    final_answer: StrictInt | StrictFloat


@dataclass(frozen=True, slots=True)
class StoredSession:
    session_id: str
    problem_text: str
    correct_answer: Number


@dataclass(frozen=True, slots=True)
class StoredSubmission:
    session_id: str
    user_answer: Number
    is_correct: bool
    feedback_text: str


class ProblemSource(Protocol):
    async def generate(self) -> GeneratedProblem: ...


class FeedbackSource(Protocol):
    async def explain(
        self, *, problem_text: str, correct_answer: Number, user_answer: Number
    ) -> str: ...


class SessionStore(Protocol):
    async def create_session(self, *, problem_text: str, correct_answer: Number) -> str: ...

    async def get_session(self, session_id: str) -> StoredSession: ...

    async def record_submission(
        self,
        *,
        session_id: str,
        user_answer: Number,
        is_correct: bool,
        feedback_text: str,
    ) -> None: ...

    async def list_submissions(self, session_id: str) -> list[StoredSubmission]: ...
