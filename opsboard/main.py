"""Ops board — FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from opsboard.adapters.persistence.database import engine
from opsboard.adapters.persistence.models import LoadDriverAssignmentModel
from opsboard.config import settings
from opsboard.infrastructure.api.routes_assignments import router as assignments_router
from opsboard.infrastructure.api.routes_board import router as board_router
from opsboard.infrastructure.api.routes_health import router as health_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Check the database once so a missing ledger shows up in the startup log."""
    logger.info(
        "Ops board starting (default scope=%s, cors=%s)",
        settings.default_board_scope, ", ".join(settings.cors_origins) or "none",
    )
    try:
        async with engine.connect() as conn:
            await conn.execute(select(func.count()).select_from(LoadDriverAssignmentModel))
    except (SQLAlchemyError, OSError) as e:
        logger.warning("Board database unavailable at startup; /api/board will return 503: %s", e)
    else:
        logger.info("Board database reachable")
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s | %(message)s",
    )

    app = FastAPI(
        title="Ops Board",
        description="Driver/load truth reconciliation for the dispatch board",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    app.include_router(health_router, prefix="/api")
    app.include_router(board_router, prefix="/api")
    app.include_router(assignments_router, prefix="/api")

    return app


app = create_app()
