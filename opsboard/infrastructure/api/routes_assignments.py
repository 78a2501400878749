"""Assignment endpoint — assign or unassign a driver on a load."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, model_validator
from sqlalchemy.ext.asyncio import AsyncSession

from opsboard.adapters.persistence.database import get_session
from opsboard.application.use_cases.assign_driver import AssignDriverUseCase, AssignmentResult
from opsboard.infrastructure.api.dependencies import get_assign_driver_uc, get_current_org_id

router = APIRouter(prefix="/assignments", tags=["assignments"])

_ERROR_DETAILS = {
    "load_not_found": "Load not found",
    "driver_not_found": "Driver not found",
}


class AssignDriverRequest(BaseModel):
    load_id: str | None = None
    load_number: str | None = None
    driver_id: str | None = None  # neither driver_id nor driver_name = unassign
    driver_name: str | None = None
    reason: str | None = None

    @model_validator(mode="after")
    def _require_load(self):
        if not (self.load_id or "").strip() and not (self.load_number or "").strip():
            raise ValueError("Missing required field: load_id or load_number")
        return self


@router.post("")
async def assign_driver(
    payload: AssignDriverRequest,
    org_id: str = Depends(get_current_org_id),
    assign_uc: AssignDriverUseCase = Depends(get_assign_driver_uc),
    session: AsyncSession = Depends(get_session),
):
    """Close the load's open assignments and, if a driver is given, open a new one."""
    result = await assign_uc.execute(
        org_id,
        payload.load_id,
        payload.driver_id,
        payload.reason,
        load_number=payload.load_number,
        driver_name=payload.driver_name,
    )
    if result.error:
        raise HTTPException(status_code=404, detail=_ERROR_DETAILS.get(result.error, result.error))

    await session.commit()
    return {"ok": True, **_result_to_dict(result)}


def _result_to_dict(r: AssignmentResult) -> dict:
    return {
        "load_id": r.load_id,
        "driver_id": r.driver_id,
        "assignment": r.assignment.to_dict() if r.assignment else None,
        "closed": [a.to_dict() for a in r.closed],
        "released_driver_ids": list(r.released_driver_ids),
    }
