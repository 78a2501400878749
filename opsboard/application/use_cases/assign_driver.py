"""AssignDriverUseCase — move a load between drivers while keeping the ledger consistent."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable

from opsboard.application.ports.assignment_repo import AssignmentRepository
from opsboard.application.ports.driver_repo import DriverRepository
from opsboard.application.ports.load_repo import LoadRepository
from opsboard.domain.entities.assignment import Assignment
from opsboard.domain.entities.driver import Driver
from opsboard.domain.entities.load import Load

logger = logging.getLogger(__name__)

DISPATCHED_STATUS = "DISPATCHED"
RELEASED_STATUS = "AVAILABLE"


@dataclass
class AssignmentResult:
    """Outcome of one assign / unassign request."""

    load_id: str | None
    driver_id: str | None
    assignment: Assignment | None = None
    closed: list[Assignment] = field(default_factory=list)
    released_driver_ids: list[str] = field(default_factory=list)
    error: str | None = None


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _clean(value: str | None) -> str | None:
    value = (value or "").strip()
    return value or None


class AssignDriverUseCase:
    """Assign a driver to a load, or unassign when no driver is given.

    Loads are addressed by id or by reference (load number); drivers by id,
    code or full name. Closes every open assignment on the load, and every
    open assignment of the incoming driver, before opening the new one, so
    the ledger holds at most one open assignment per load and per driver
    afterwards. Loads whose only open row was closed lose their
    assigned_driver_id as well.
    """

    def __init__(
        self,
        load_repo: LoadRepository,
        driver_repo: DriverRepository,
        assignment_repo: AssignmentRepository,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._loads = load_repo
        self._drivers = driver_repo
        self._assignments = assignment_repo
        self._clock = clock

    async def execute(
        self,
        org_id: str,
        load_id: str | None = None,
        driver_id: str | None = None,
        reason: str | None = None,
        *,
        load_number: str | None = None,
        driver_name: str | None = None,
    ) -> AssignmentResult:
        result = AssignmentResult(load_id=load_id, driver_id=driver_id)

        load = await self._resolve_load(org_id, _clean(load_id), _clean(load_number))
        if load is None:
            result.error = "load_not_found"
            return result
        load_id = result.load_id = load.id

        requested_driver, driver_name = _clean(driver_id), _clean(driver_name)
        driver_id = None
        if requested_driver is not None or driver_name is not None:
            driver = await self._resolve_driver(org_id, requested_driver, driver_name)
            if driver is None:
                result.error = "driver_not_found"
                return result
            driver_id = driver.id
        result.driver_id = driver_id

        now = self._clock()

        to_close = {a.id: a for a in await self._assignments.get_active_for_load(load_id)}
        if driver_id is not None:
            for a in await self._assignments.get_active_for_driver(driver_id):
                to_close.setdefault(a.id, a)

        for a in to_close.values():
            await self._assignments.close(a.id, now)
            a.unassigned_at = now
            result.closed.append(a)

        if driver_id is not None:
            assignment = Assignment(
                id=str(uuid.uuid4()),
                org_id=org_id,
                load_id=load_id,
                driver_id=driver_id,
                assigned_at=now,
                reason=reason,
            )
            result.assignment = await self._assignments.save(assignment)
            await self._drivers.update_status(driver_id, DISPATCHED_STATUS)

        await self._loads.set_assigned_driver(load_id, driver_id)

        # Loads the incoming driver was pulled off
        for other_load_id in sorted({a.load_id for a in result.closed if a.load_id != load_id}):
            if not await self._assignments.get_active_for_load(other_load_id):
                await self._loads.set_assigned_driver(other_load_id, None)

        # Drivers taken off this load go back to AVAILABLE once nothing else is open
        for prev_driver_id in sorted({a.driver_id for a in result.closed}):
            if prev_driver_id == driver_id:
                continue
            if await self._assignments.get_active_for_driver(prev_driver_id):
                continue
            await self._drivers.update_status(prev_driver_id, RELEASED_STATUS)
            result.released_driver_ids.append(prev_driver_id)

        logger.info(
            "Load %s → driver %s (closed %d assignment(s), released %s)",
            load_id, driver_id or "<none>", len(result.closed),
            result.released_driver_ids or "none",
        )
        return result

    async def _resolve_load(
        self, org_id: str, load_id: str | None, load_number: str | None
    ) -> Load | None:
        if load_id is not None:
            load = await self._loads.get_by_id(org_id, load_id)
            if load is not None:
                return load
        # A non-id load_id is read as a reference too
        for term in (load_number, load_id):
            if term is not None:
                load = await self._loads.find_by_reference(org_id, term)
                if load is not None:
                    return load
        return None

    async def _resolve_driver(
        self, org_id: str, driver_id: str | None, driver_name: str | None
    ) -> Driver | None:
        if driver_id is not None:
            driver = await self._drivers.get_by_id(org_id, driver_id)
            if driver is not None:
                return driver
        for term in (driver_name, driver_id):
            if term is not None:
                driver = await self._drivers.find_by_name_or_code(org_id, term)
                if driver is not None:
                    return driver
        return None
