"""Liveness check for the ops board: API up, database reachable, board defaults."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from opsboard.adapters.persistence.database import get_session
from opsboard.config import settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(session: AsyncSession = Depends(get_session)):
    body = {
        "service": "opsboard",
        "default_board_scope": settings.default_board_scope,
        "database": {"reachable": False, "server_time": None},
    }
    try:
        server_time = await session.scalar(select(func.now()))
    except (SQLAlchemyError, OSError) as e:
        logger.warning("Health check could not reach the database: %s", e)
        body["database"]["error"] = str(e)
        body["status"] = "degraded"
        return body

    body["database"] = {
        "reachable": True,
        "server_time": server_time.isoformat() if server_time else None,
    }
    body["status"] = "ok"
    return body
