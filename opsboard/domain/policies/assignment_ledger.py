"""AssignmentLedger — index open assignments by load and by driver."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable

from opsboard.domain.entities.assignment import Assignment
from opsboard.domain.entities.board import LedgerConflict

logger = logging.getLogger(__name__)

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


@dataclass(frozen=True)
class AssignmentLedger:
    """Lookup structures over the currently open assignments."""

    by_load: dict[str, Assignment] = field(default_factory=dict)
    by_driver: dict[str, Assignment] = field(default_factory=dict)
    conflicts: tuple[LedgerConflict, ...] = ()

    def for_load(self, load_id: str) -> Assignment | None:
        return self.by_load.get(load_id)

    def for_driver(self, driver_id: str) -> Assignment | None:
        return self.by_driver.get(driver_id)


def assigned_at_key(assignment: Assignment) -> datetime:
    """Comparable timestamp: naive values are read as UTC, missing ones sort oldest."""
    ts = assignment.assigned_at
    if ts is None:
        return _OLDEST
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts


def build_assignment_ledger(active_assignments: Iterable[Assignment]) -> AssignmentLedger:
    """Build load → assignment and driver → assignment maps.

    When several open assignments share a load or a driver, the one with the
    latest assigned_at wins. On an exact timestamp tie the first record seen
    is kept. Duplicates never raise; they are returned as LedgerConflict
    entries so the caller can surface them.

    Closed assignments (unassigned_at set) are skipped.
    """
    by_load: dict[str, Assignment] = {}
    by_driver: dict[str, Assignment] = {}
    seen_by_load: dict[str, list[Assignment]] = {}
    seen_by_driver: dict[str, list[Assignment]] = {}

    for row in active_assignments:
        if not row.is_active():
            logger.debug("Skipping closed assignment %s", row.id)
            continue

        _keep_latest(by_load, row.load_id, row)
        _keep_latest(by_driver, row.driver_id, row)
        seen_by_load.setdefault(row.load_id, []).append(row)
        seen_by_driver.setdefault(row.driver_id, []).append(row)

    conflicts = _collect_conflicts("load", seen_by_load, by_load) + _collect_conflicts(
        "driver", seen_by_driver, by_driver
    )
    for c in conflicts:
        logger.warning(
            "Duplicate open assignments for %s %s: kept %s, shadowed %s",
            c.kind, c.key, c.kept_assignment_id, ", ".join(c.shadowed_assignment_ids),
        )

    return AssignmentLedger(by_load=by_load, by_driver=by_driver, conflicts=tuple(conflicts))


def _keep_latest(index: dict[str, Assignment], key: str, row: Assignment) -> None:
    existing = index.get(key)
    if existing is None or assigned_at_key(row) > assigned_at_key(existing):
        index[key] = row


def _collect_conflicts(
    kind: str,
    seen: dict[str, list[Assignment]],
    winners: dict[str, Assignment],
) -> list[LedgerConflict]:
    conflicts = []
    for key, rows in seen.items():
        if len(rows) < 2:
            continue
        kept = winners[key]
        conflicts.append(
            LedgerConflict(
                kind=kind,
                key=key,
                kept_assignment_id=kept.id,
                shadowed_assignment_ids=tuple(r.id for r in rows if r is not kept),
            )
        )
    return conflicts
