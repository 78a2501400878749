"""DriverTruthPolicy — compare a driver's own status against the assignment ledger."""

from opsboard.domain.value_objects.enums import (
    DriverStatusClass,
    DriverTruthStatus,
    classify_driver_status,
)


def classify_driver_truth(
    status: str | None,
    has_active_assignment: bool,
) -> DriverTruthStatus:
    """Pure, total function: every (status, ledger) pair maps to one truth state.

    Rules:
      1. No open assignment + free status (AVAILABLE/OFF_DUTY/IDLE/empty) → AVAILABLE.
      2. No open assignment + busy status (ON_LOAD/DISPATCHED/IN_TRANSIT) → SHOULD_BE_FREE.
      3. Open assignment + busy status → ON_LOAD.
      4. Open assignment + free status → SHOULD_BE_ON_LOAD.
      5. Any other status → UNKNOWN.
    """
    status_class = classify_driver_status(status)

    if status_class == DriverStatusClass.OTHER:
        return DriverTruthStatus.UNKNOWN

    if not has_active_assignment:
        if status_class == DriverStatusClass.FREE:
            return DriverTruthStatus.AVAILABLE
        return DriverTruthStatus.SHOULD_BE_FREE

    if status_class == DriverStatusClass.BUSY:
        return DriverTruthStatus.ON_LOAD
    return DriverTruthStatus.SHOULD_BE_ON_LOAD
