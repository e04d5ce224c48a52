"""
mathpractice.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide DB sessions and a ready-to-use PracticeService from app.state.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from mathpractice.services.practice_service import PracticeService
from mathpractice.settings import Settings
from mathpractice.sources.gemini_http import GeminiClient, GeminiFeedbackSource, GeminiProblemSource
from mathpractice.sources.sql_store import SqlSessionStore


def settings_from_app(request: Request) -> Settings:
    return request.app.state.settings  # type: ignore[attr-defined]


def sessionmaker_from_app(request: Request) -> async_sessionmaker[AsyncSession]:
    # Created in the lifespan of `mathpractice.api.app.create_app`.
    return request.app.state.sessionmaker  # type: ignore[attr-defined]


async def db_session(
    session_factory: async_sessionmaker[AsyncSession] = Depends(sessionmaker_from_app),
) -> AsyncIterator[AsyncSession]:
    async with session_factory() as session:
        yield session


def session_store(
    session_factory: async_sessionmaker[AsyncSession] = Depends(sessionmaker_from_app),
) -> SqlSessionStore:
    return SqlSessionStore(session_factory)


def practice_service(
    request: Request,
    settings: Settings = Depends(settings_from_app),
    store: SqlSessionStore = Depends(session_store),
) -> PracticeService:
    gemini = GeminiClient(settings=settings, http=request.app.state.http)
    return PracticeService(
        problems=GeminiProblemSource(gemini),
        feedback=GeminiFeedbackSource(gemini),
        store=store,
    )
