"""BuildBoardViewUseCase — fetch an org's loads, drivers and ledger, then reconcile."""

from __future__ import annotations

import logging
from typing import Awaitable, TypeVar

from opsboard.application.errors import BoardDataUnavailableError
from opsboard.application.ports.assignment_repo import AssignmentRepository
from opsboard.application.ports.driver_repo import DriverRepository
from opsboard.application.ports.load_repo import LoadRepository
from opsboard.domain.entities.board import BoardSnapshot
from opsboard.domain.policies.board_reconciliation import reconcile_board
from opsboard.domain.value_objects.enums import BoardScope, DriverTruthStatus

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BuildBoardViewUseCase:
    """Orchestrates one ops-board snapshot for a single organization."""

    def __init__(
        self,
        load_repo: LoadRepository,
        driver_repo: DriverRepository,
        assignment_repo: AssignmentRepository,
    ):
        self._loads = load_repo
        self._drivers = driver_repo
        self._assignments = assignment_repo

    async def execute(self, org_id: str, scope: BoardScope = BoardScope.DISPATCHER) -> BoardSnapshot:
        """Build the board.

        Pipeline:
        1. Fetch loads, drivers and open assignments for org_id
        2. Index the ledger, enrich loads (scoped) and drivers (full)
        3. Aggregate the summary

        Raises:
            BoardDataUnavailableError: if any of the three fetches fails.
        """
        loads = await self._fetch("loads", self._loads.get_by_org(org_id))
        drivers = await self._fetch("drivers", self._drivers.get_by_org(org_id))
        assignments = await self._fetch(
            "load_driver_assignments", self._assignments.get_active_by_org(org_id)
        )

        snapshot = reconcile_board(loads, drivers, assignments, scope)

        s = snapshot.summary
        logger.info(
            "Board snapshot org=%s scope=%s loads_all=%d loads_scope=%d drivers=%d "
            "active_assignments=%d truth[available=%d on_load=%d should_be_free=%d "
            "should_be_on_load=%d unknown=%d] conflicts=%d",
            org_id, scope.value, snapshot.total_loads_all, len(snapshot.loads),
            len(snapshot.drivers), snapshot.active_assignments,
            s.truth_count(DriverTruthStatus.AVAILABLE),
            s.truth_count(DriverTruthStatus.ON_LOAD),
            s.truth_count(DriverTruthStatus.SHOULD_BE_FREE),
            s.truth_count(DriverTruthStatus.SHOULD_BE_ON_LOAD),
            s.truth_count(DriverTruthStatus.UNKNOWN),
            s.duplicate_open_assignments,
        )
        return snapshot

    @staticmethod
    async def _fetch(collection: str, pending: Awaitable[T]) -> T:
        try:
            return await pending
        except Exception as e:
            logger.exception("Failed to fetch %s", collection)
            raise BoardDataUnavailableError(collection) from e
