"""Enrichment — attach ledger facts and truth state to loads and drivers."""

from __future__ import annotations

from typing import Iterable, Mapping

from opsboard.domain.entities.board import EnrichedDriver, EnrichedLoad
from opsboard.domain.entities.driver import Driver
from opsboard.domain.entities.load import Load
from opsboard.domain.policies.assignment_ledger import AssignmentLedger
from opsboard.domain.policies.driver_truth import classify_driver_truth


def index_loads(loads: Iterable[Load]) -> dict[str, Load]:
    """Map load id → load. A repeated id keeps the last record."""
    return {load.id: load for load in loads}


def enrich_loads(scoped_loads: Iterable[Load], ledger: AssignmentLedger) -> list[EnrichedLoad]:
    return [
        EnrichedLoad(load=load, active_assignment=ledger.for_load(load.id))
        for load in scoped_loads
    ]


def enrich_drivers(
    drivers: Iterable[Driver],
    ledger: AssignmentLedger,
    full_load_index: Mapping[str, Load],
) -> list[EnrichedDriver]:
    """Attach active assignment, active load and truth status to every driver.

    `full_load_index` must cover every load of the organization, not only the
    scoped subset, so a driver's active load resolves even when the board
    scope hides it.
    """
    enriched = []
    for driver in drivers:
        assignment = ledger.for_driver(driver.id)
        active_load = full_load_index.get(assignment.load_id) if assignment else None
        enriched.append(
            EnrichedDriver(
                driver=driver,
                active_assignment=assignment,
                active_load=active_load,
                driver_truth_status=classify_driver_truth(driver.status, assignment is not None),
            )
        )
    return enriched
