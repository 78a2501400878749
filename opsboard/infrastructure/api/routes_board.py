"""Ops-board endpoint — reconciled snapshot of loads, drivers and the assignment ledger."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from opsboard.application.errors import BoardDataUnavailableError
from opsboard.application.use_cases.build_board_view import BuildBoardViewUseCase
from opsboard.config import settings
from opsboard.domain.entities.board import BoardSnapshot
from opsboard.domain.value_objects.enums import BoardScope
from opsboard.infrastructure.api.dependencies import get_build_board_uc, get_current_org_id

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/board", tags=["board"])


@router.get("")
async def get_board(
    scope: str | None = None,
    org_id: str = Depends(get_current_org_id),
    board_uc: BuildBoardViewUseCase = Depends(get_build_board_uc),
):
    """Board snapshot; `?scope=dispatcher|active_only|all`."""
    return await _build(org_id, resolve_scope(scope, None), board_uc)


@router.post("")
async def post_board(
    request: Request,
    scope: str | None = None,
    org_id: str = Depends(get_current_org_id),
    board_uc: BuildBoardViewUseCase = Depends(get_build_board_uc),
):
    """Same as GET; scope may also come from a JSON body `{"scope": ...}`."""
    body_scope = None
    try:
        body = await request.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("scope"), str):
        body_scope = body["scope"]
    return await _build(org_id, resolve_scope(scope, body_scope), board_uc)


def resolve_scope(query_scope: str | None, body_scope: str | None) -> BoardScope:
    """Query string wins over body; anything unrecognised falls back to the default."""
    return (
        BoardScope.parse(query_scope)
        or BoardScope.parse(body_scope)
        or BoardScope.parse(settings.default_board_scope)
        or BoardScope.DISPATCHER
    )


async def _build(org_id: str, scope: BoardScope, board_uc: BuildBoardViewUseCase) -> dict:
    try:
        snapshot = await board_uc.execute(org_id, scope)
    except BoardDataUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return _serialize_snapshot(org_id, snapshot)


def _serialize_snapshot(org_id: str, snapshot: BoardSnapshot) -> dict:
    return {
        "ok": True,
        "org_id": org_id,
        "scope": snapshot.scope.value,
        "summary": snapshot.summary.to_dict(),
        "loads": [item.to_dict() for item in snapshot.loads],
        "drivers": [item.to_dict() for item in snapshot.drivers],
        "integrity_warnings": [c.to_dict() for c in snapshot.integrity_warnings],
    }
