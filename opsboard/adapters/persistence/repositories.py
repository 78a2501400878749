"""SQLAlchemy repository implementations."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import and_, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from opsboard.adapters.persistence.models import (
    DriverModel,
    LoadDriverAssignmentModel,
    LoadModel,
    OrgMemberModel,
)
from opsboard.application.ports.assignment_repo import AssignmentRepository
from opsboard.application.ports.driver_repo import DriverRepository
from opsboard.application.ports.load_repo import LoadRepository
from opsboard.application.ports.org_resolver import OrgResolver
from opsboard.domain.entities.assignment import Assignment
from opsboard.domain.entities.driver import Driver
from opsboard.domain.entities.load import Load

# ─── Mappers ─────────────────────────────────────────────────────────


def _load_to_domain(m: LoadModel) -> Load:
    return Load(
        id=m.id,
        org_id=m.org_id,
        reference=m.reference,
        status=m.status,
        pod_status=m.pod_status,
        assigned_driver_id=m.assigned_driver_id,
        driver_name=m.driver_name,
        pickup_at=m.pickup_at,
        delivery_at=m.delivery_at,
        extra=dict(m.extra or {}),
    )


def _driver_to_domain(m: DriverModel) -> Driver:
    return Driver(
        id=m.id,
        org_id=m.org_id,
        first_name=m.first_name,
        last_name=m.last_name,
        code=m.code,
        status=m.status,
        extra=dict(m.extra or {}),
    )


def _assignment_to_domain(m: LoadDriverAssignmentModel) -> Assignment:
    return Assignment(
        id=m.id,
        org_id=m.org_id,
        load_id=m.load_id,
        driver_id=m.driver_id,
        assigned_at=m.assigned_at,
        unassigned_at=m.unassigned_at,
        reason=m.reason,
    )


def _like_escape(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


# ─── Repositories ────────────────────────────────────────────────────


class SqlLoadRepository(LoadRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def get_by_org(self, org_id: str) -> list[Load]:
        result = await self._s.execute(
            select(LoadModel).where(LoadModel.org_id == org_id).order_by(LoadModel.created_at)
        )
        return [_load_to_domain(m) for m in result.scalars()]

    async def get_by_id(self, org_id: str, load_id: str) -> Load | None:
        result = await self._s.execute(
            select(LoadModel).where(LoadModel.id == load_id, LoadModel.org_id == org_id)
        )
        m = result.scalar_one_or_none()
        return _load_to_domain(m) if m else None

    async def find_by_reference(self, org_id: str, reference: str) -> Load | None:
        term = reference.strip()
        if not term:
            return None
        for match in (
            LoadModel.reference == term,
            LoadModel.reference.ilike(_like_escape(term), escape="\\"),
        ):
            result = await self._s.execute(
                select(LoadModel)
                .where(LoadModel.org_id == org_id, match)
                .order_by(LoadModel.updated_at.desc().nulls_last(), LoadModel.created_at.desc())
                .limit(1)
            )
            m = result.scalar_one_or_none()
            if m:
                return _load_to_domain(m)
        return None

    async def set_assigned_driver(self, load_id: str, driver_id: str | None) -> None:
        await self._s.execute(
            update(LoadModel)
            .where(LoadModel.id == load_id)
            .values(assigned_driver_id=driver_id, updated_at=func.now())
        )
        await self._s.flush()


class SqlDriverRepository(DriverRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def get_by_org(self, org_id: str) -> list[Driver]:
        result = await self._s.execute(
            select(DriverModel).where(DriverModel.org_id == org_id).order_by(DriverModel.created_at)
        )
        return [_driver_to_domain(m) for m in result.scalars()]

    async def get_by_id(self, org_id: str, driver_id: str) -> Driver | None:
        result = await self._s.execute(
            select(DriverModel).where(DriverModel.id == driver_id, DriverModel.org_id == org_id)
        )
        m = result.scalar_one_or_none()
        return _driver_to_domain(m) if m else None

    async def find_by_name_or_code(self, org_id: str, term: str) -> Driver | None:
        term = " ".join(term.split())
        if not term:
            return None
        full_name = func.concat_ws(" ", DriverModel.first_name, DriverModel.last_name)
        pattern = f"%{_like_escape(term)}%"

        candidates = [
            or_(DriverModel.code == term, full_name == term),
            or_(
                DriverModel.code.ilike(pattern, escape="\\"),
                full_name.ilike(pattern, escape="\\"),
            ),
        ]
        first, _, last = term.partition(" ")
        if last:
            # "Jo Smi" against separate first/last columns
            candidates.append(and_(
                DriverModel.first_name.ilike(f"%{_like_escape(first)}%", escape="\\"),
                DriverModel.last_name.ilike(f"%{_like_escape(last)}%", escape="\\"),
            ))

        for match in candidates:
            result = await self._s.execute(
                select(DriverModel)
                .where(DriverModel.org_id == org_id, match)
                .order_by(DriverModel.updated_at.desc().nulls_last(), DriverModel.created_at.desc())
                .limit(1)
            )
            m = result.scalar_one_or_none()
            if m:
                return _driver_to_domain(m)
        return None

    async def update_status(self, driver_id: str, status: str) -> None:
        await self._s.execute(
            update(DriverModel)
            .where(DriverModel.id == driver_id)
            .values(status=status, updated_at=func.now())
        )
        await self._s.flush()


class SqlAssignmentRepository(AssignmentRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def get_active_by_org(self, org_id: str) -> list[Assignment]:
        result = await self._s.execute(
            select(LoadDriverAssignmentModel)
            .where(
                LoadDriverAssignmentModel.org_id == org_id,
                LoadDriverAssignmentModel.unassigned_at.is_(None),
            )
            .order_by(LoadDriverAssignmentModel.assigned_at)
        )
        return [_assignment_to_domain(m) for m in result.scalars()]

    async def get_active_for_load(self, load_id: str) -> list[Assignment]:
        result = await self._s.execute(
            select(LoadDriverAssignmentModel).where(
                LoadDriverAssignmentModel.load_id == load_id,
                LoadDriverAssignmentModel.unassigned_at.is_(None),
            )
        )
        return [_assignment_to_domain(m) for m in result.scalars()]

    async def get_active_for_driver(self, driver_id: str) -> list[Assignment]:
        result = await self._s.execute(
            select(LoadDriverAssignmentModel).where(
                LoadDriverAssignmentModel.driver_id == driver_id,
                LoadDriverAssignmentModel.unassigned_at.is_(None),
            )
        )
        return [_assignment_to_domain(m) for m in result.scalars()]

    async def save(self, assignment: Assignment) -> Assignment:
        m = LoadDriverAssignmentModel(
            id=assignment.id,
            org_id=assignment.org_id,
            load_id=assignment.load_id,
            driver_id=assignment.driver_id,
            assigned_at=assignment.assigned_at,
            unassigned_at=assignment.unassigned_at,
            reason=assignment.reason,
        )
        self._s.add(m)
        await self._s.flush()
        assignment.id = m.id
        return assignment

    async def close(self, assignment_id: str, unassigned_at: datetime) -> None:
        await self._s.execute(
            update(LoadDriverAssignmentModel)
            .where(
                LoadDriverAssignmentModel.id == assignment_id,
                LoadDriverAssignmentModel.unassigned_at.is_(None),
            )
            .values(unassigned_at=unassigned_at)
        )
        await self._s.flush()


class SqlOrgResolver(OrgResolver):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def resolve(self, user_id: str) -> str | None:
        result = await self._s.execute(
            select(OrgMemberModel.org_id)
            .where(OrgMemberModel.user_id == user_id)
            .order_by(OrgMemberModel.created_at)
            .limit(1)
        )
        return result.scalar_one_or_none()
