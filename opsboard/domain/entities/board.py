"""Board result types — enriched records, summary and the full snapshot."""

from dataclasses import dataclass, field

from opsboard.domain.entities.assignment import Assignment
from opsboard.domain.entities.driver import Driver
from opsboard.domain.entities.load import Load
from opsboard.domain.value_objects.enums import BoardScope, DriverTruthStatus


@dataclass(frozen=True)
class EnrichedLoad:
    load: Load
    active_assignment: Assignment | None

    def to_dict(self) -> dict:
        data = self.load.to_dict()
        data["active_assignment"] = (
            self.active_assignment.to_dict() if self.active_assignment else None
        )
        return data


@dataclass(frozen=True)
class EnrichedDriver:
    driver: Driver
    active_assignment: Assignment | None
    active_load: Load | None
    driver_truth_status: DriverTruthStatus

    def to_dict(self) -> dict:
        data = self.driver.to_dict()
        data["active_assignment"] = (
            self.active_assignment.to_dict() if self.active_assignment else None
        )
        data["active_load"] = self.active_load.to_dict() if self.active_load else None
        data["driver_truth_status"] = self.driver_truth_status.value
        return data


@dataclass(frozen=True)
class LedgerConflict:
    """More than one open assignment for the same load or driver."""

    kind: str  # "load" | "driver"
    key: str
    kept_assignment_id: str
    shadowed_assignment_ids: tuple[str, ...]

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "key": self.key,
            "kept_assignment_id": self.kept_assignment_id,
            "shadowed_assignment_ids": list(self.shadowed_assignment_ids),
        }


@dataclass
class BoardSummary:
    total_loads: int = 0
    total_drivers: int = 0
    loads_by_status: dict[str, int] = field(default_factory=dict)
    loads_by_pod_status: dict[str, int] = field(default_factory=dict)
    delivered_without_pod: int = 0
    problem_loads: int = 0
    at_risk_loads: int = 0
    # Counts from the driver's own status, kept for older consumers
    drivers_available: int = 0
    drivers_assigned: int = 0
    drivers_truth: dict[DriverTruthStatus, int] = field(
        default_factory=lambda: {s: 0 for s in DriverTruthStatus}
    )
    duplicate_open_assignments: int = 0

    def truth_count(self, status: DriverTruthStatus) -> int:
        return self.drivers_truth.get(status, 0)

    def to_dict(self) -> dict:
        return {
            "totals": {"loads": self.total_loads, "drivers": self.total_drivers},
            "loads_by_status": dict(self.loads_by_status),
            "loads_by_pod_status": dict(self.loads_by_pod_status),
            "delivered_without_pod": self.delivered_without_pod,
            "problem_loads": self.problem_loads,
            "at_risk_loads": self.at_risk_loads,
            "drivers_available": self.drivers_available,
            "drivers_assigned": self.drivers_assigned,
            "drivers_truth_available": self.truth_count(DriverTruthStatus.AVAILABLE),
            "drivers_truth_on_load": self.truth_count(DriverTruthStatus.ON_LOAD),
            "drivers_truth_should_be_free": self.truth_count(DriverTruthStatus.SHOULD_BE_FREE),
            "drivers_truth_should_be_on_load": self.truth_count(
                DriverTruthStatus.SHOULD_BE_ON_LOAD
            ),
            "drivers_truth_unknown": self.truth_count(DriverTruthStatus.UNKNOWN),
            "duplicate_open_assignments": self.duplicate_open_assignments,
        }


@dataclass
class BoardSnapshot:
    scope: BoardScope
    summary: BoardSummary
    loads: list[EnrichedLoad]
    drivers: list[EnrichedDriver]
    integrity_warnings: list[LedgerConflict] = field(default_factory=list)
    total_loads_all: int = 0
    active_assignments: int = 0
