"""
mathpractice.api.app

FastAPI app factory.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Create and dispose shared infrastructure (DB engine, session factory,
  outbound HTTP client) in the app lifespan.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from mathpractice import __version__
from mathpractice.api.routers.health import router as health_router
from mathpractice.api.routers.math_problem import router as math_problem_router
from mathpractice.db.init_db import init_db
from mathpractice.db.session import create_engine, create_sessionmaker
from mathpractice.observability.logging import configure_logging, get_logger
from mathpractice.observability.middleware import RequestContextMiddleware
from mathpractice.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings) -> FastAPI:
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        engine = create_engine(settings)
        app.state.settings = settings
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        app.state.http = httpx.AsyncClient(timeout=settings.request_timeout_seconds)
        if settings.env in ("dev", "test"):
            await init_db(engine)
        try:
            yield
        finally:
            await app.state.http.aclose()
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="Math Practice Sessions",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(RequestContextMiddleware)
    app.include_router(health_router, tags=["health"])
    app.include_router(math_problem_router)

    return app


# --- Module Notes -----------------------------------------------------------
# Tables are created automatically only in dev/test; prod databases are provisioned
# out of band.
