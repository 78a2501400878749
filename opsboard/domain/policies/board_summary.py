"""BoardSummaryPolicy — one pass over loads and drivers to build board counts."""

from __future__ import annotations

from typing import Iterable, Sequence

from opsboard.domain.entities.board import (
    BoardSummary,
    EnrichedDriver,
    EnrichedLoad,
    LedgerConflict,
)
from opsboard.domain.value_objects.enums import (
    AT_RISK_LOAD_STATUSES,
    BUSY_DRIVER_STATUSES,
    POD_RECEIVED,
    PROBLEM_LOAD_STATUSES,
    UNSET_LOAD_STATUS,
    UNSET_POD_STATUS,
    normalize_status,
)


def build_board_summary(
    loads: Sequence[EnrichedLoad],
    drivers: Sequence[EnrichedDriver],
    conflicts: Iterable[LedgerConflict] = (),
) -> BoardSummary:
    """Aggregate status histograms and exception counts.

    Every load lands in exactly one loads_by_status bucket and every driver in
    exactly one truth bucket, so each histogram sums to its collection size.
    """
    summary = BoardSummary(total_loads=len(loads), total_drivers=len(drivers))

    for item in loads:
        status = normalize_status(item.load.status) or UNSET_LOAD_STATUS
        pod = normalize_status(item.load.pod_status) or UNSET_POD_STATUS
        summary.loads_by_status[status] = summary.loads_by_status.get(status, 0) + 1
        summary.loads_by_pod_status[pod] = summary.loads_by_pod_status.get(pod, 0) + 1

        if status == "DELIVERED" and pod != POD_RECEIVED:
            summary.delivered_without_pod += 1
        if status in PROBLEM_LOAD_STATUSES:
            summary.problem_loads += 1
        if status in AT_RISK_LOAD_STATUSES:
            summary.at_risk_loads += 1

    for item in drivers:
        raw = normalize_status(item.driver.status)
        if raw == "AVAILABLE":
            summary.drivers_available += 1
        if raw in BUSY_DRIVER_STATUSES:
            summary.drivers_assigned += 1
        summary.drivers_truth[item.driver_truth_status] += 1

    summary.duplicate_open_assignments = sum(1 for _ in conflicts)
    return summary
