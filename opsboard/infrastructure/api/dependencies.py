"""FastAPI dependency injection — wires adapters into use cases."""

from __future__ import annotations

import logging

from fastapi import Depends, Header, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from opsboard.adapters.persistence.database import get_session
from opsboard.adapters.persistence.repositories import (
    SqlAssignmentRepository,
    SqlDriverRepository,
    SqlLoadRepository,
    SqlOrgResolver,
)
from opsboard.application.ports.org_resolver import OrgResolver
from opsboard.application.use_cases.assign_driver import AssignDriverUseCase
from opsboard.application.use_cases.build_board_view import BuildBoardViewUseCase

logger = logging.getLogger(__name__)

# Re-export session dependency
get_db_session = get_session


def get_org_resolver(session: AsyncSession = Depends(get_session)) -> OrgResolver:
    return SqlOrgResolver(session)


def get_build_board_uc(session: AsyncSession = Depends(get_session)) -> BuildBoardViewUseCase:
    return BuildBoardViewUseCase(
        load_repo=SqlLoadRepository(session),
        driver_repo=SqlDriverRepository(session),
        assignment_repo=SqlAssignmentRepository(session),
    )


def get_assign_driver_uc(session: AsyncSession = Depends(get_session)) -> AssignDriverUseCase:
    return AssignDriverUseCase(
        load_repo=SqlLoadRepository(session),
        driver_repo=SqlDriverRepository(session),
        assignment_repo=SqlAssignmentRepository(session),
    )


async def get_current_user_id(x_user_id: str | None = Header(default=None)) -> str:
    """Caller identity, set by the auth gateway in front of this service."""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")
    return x_user_id.strip()


async def get_current_org_id(
    user_id: str = Depends(get_current_user_id),
    resolver: OrgResolver = Depends(get_org_resolver),
) -> str:
    org_id = await resolver.resolve(user_id)
    if not org_id:
        logger.warning("No organization for user %s", user_id)
        raise HTTPException(status_code=400, detail="Unable to resolve org")
    return org_id
