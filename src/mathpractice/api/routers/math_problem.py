"""
mathpractice.api.routers.math_problem

Practice endpoints used by web front ends.

Responsibilities:
- Generate and persist a new problem.
- Grade a submitted answer against a stored session and return feedback.
- List the submissions recorded against a session.

Error bodies are `{"error": "..."}` so clients can classify them without parsing
status text.
"""

from __future__ import annotations

from typing import Any

import httpx
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.status import HTTP_404_NOT_FOUND, HTTP_500_INTERNAL_SERVER_ERROR

from mathpractice.api.deps import practice_service, session_store
from mathpractice.observability.logging import get_logger
from mathpractice.services.practice_service import PracticeService
from mathpractice.sources.errors import SessionNotFound, StoreError, UpstreamError
from mathpractice.sources.sql_store import SqlSessionStore

log = get_logger(__name__)

router = APIRouter(prefix="/api/math-problem", tags=["math-problem"])


class GenerateResponse(BaseModel):
    problem_text: str
    final_answer: int | float
    session_id: str


class SubmitRequest(BaseModel):
    session_id: str
    user_answer: int | float


class SubmitResponse(BaseModel):
    is_correct: bool
    feedback_text: str


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.post("", response_model=GenerateResponse)
async def generate_problem(
    svc: PracticeService = Depends(practice_service),
) -> Any:
    try:
        generated = await svc.generate_problem()
    except StoreError:
        return _error(HTTP_500_INTERNAL_SERVER_ERROR, "Failed to save problem")
    except (UpstreamError, httpx.HTTPError, ValueError) as e:
        log.error("problem.generate_failed", error=type(e).__name__, detail=str(e))
        return _error(HTTP_500_INTERNAL_SERVER_ERROR, "Failed to generate problem")
    return GenerateResponse(
        problem_text=generated.problem_text,
        final_answer=generated.final_answer,
        session_id=generated.session_id,
    )


@router.post("/submit", response_model=SubmitResponse)
async def submit_answer(
    body: SubmitRequest,
    svc: PracticeService = Depends(practice_service),
) -> Any:
    try:
        graded = await svc.submit_answer(session_id=body.session_id, user_answer=body.user_answer)
    except SessionNotFound:
        return _error(HTTP_404_NOT_FOUND, "Session not found")
    except (UpstreamError, httpx.HTTPError, ValueError) as e:
        log.error("answer.submit_failed", error=type(e).__name__, detail=str(e))
        return _error(HTTP_500_INTERNAL_SERVER_ERROR, "Failed to submit answer")
    return SubmitResponse(is_correct=graded.is_correct, feedback_text=graded.feedback_text)


@router.get("/{session_id}/submissions")
async def list_submissions(
    session_id: str,
    store: SqlSessionStore = Depends(session_store),
) -> Any:
    try:
        submissions = await store.list_submissions(session_id)
    except SessionNotFound:
        return _error(HTTP_404_NOT_FOUND, "Session not found")
    except StoreError:
        return _error(HTTP_500_INTERNAL_SERVER_ERROR, "Failed to load submissions")
    return [
        {
            "user_answer": s.user_answer,
            "is_correct": s.is_correct,
            "feedback_text": s.feedback_text,
        }
        for s in submissions
    ]
