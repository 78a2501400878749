"""Board reconciliation — ledger index → enrichment → summary in one pass."""

from __future__ import annotations

from typing import Sequence

from opsboard.domain.entities.assignment import Assignment
from opsboard.domain.entities.board import BoardSnapshot
from opsboard.domain.entities.driver import Driver
from opsboard.domain.entities.load import Load
from opsboard.domain.policies.assignment_ledger import build_assignment_ledger
from opsboard.domain.policies.board_summary import build_board_summary
from opsboard.domain.policies.enrichment import enrich_drivers, enrich_loads, index_loads
from opsboard.domain.policies.load_scope import filter_loads_by_scope
from opsboard.domain.value_objects.enums import BoardScope


def reconcile_board(
    loads: Sequence[Load],
    drivers: Sequence[Driver],
    active_assignments: Sequence[Assignment],
    scope: BoardScope = BoardScope.DISPATCHER,
) -> BoardSnapshot:
    """Compute the board snapshot for one organization.

    All three collections must belong to the same organization. Inputs are
    never modified; scope filters loads only, drivers are always complete.

    Args:
        loads: every load of the organization.
        drivers: every driver of the organization.
        active_assignments: assignments whose unassigned_at is unset.
        scope: which loads to return and summarise.

    Returns:
        BoardSnapshot with enriched loads/drivers, summary and ledger conflicts.
    """
    ledger = build_assignment_ledger(active_assignments)
    full_load_index = index_loads(loads)
    scoped_loads = filter_loads_by_scope(list(loads), scope)

    enriched_loads = enrich_loads(scoped_loads, ledger)
    enriched_drivers = enrich_drivers(drivers, ledger, full_load_index)
    summary = build_board_summary(enriched_loads, enriched_drivers, ledger.conflicts)

    return BoardSnapshot(
        scope=scope,
        summary=summary,
        loads=enriched_loads,
        drivers=enriched_drivers,
        integrity_warnings=list(ledger.conflicts),
        total_loads_all=len(loads),
        active_assignments=len(active_assignments),
    )
