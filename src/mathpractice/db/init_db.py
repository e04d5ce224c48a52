"""
mathpractice.db.init_db

Table bootstrap for local development, the terminal client and tests.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine

from mathpractice.db import models  # noqa: F401  # registers tables on Base.metadata
from mathpractice.db.base import Base


async def init_db(engine: AsyncEngine) -> None:
    """
    Create the practice tables if they don't exist.
    """

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
