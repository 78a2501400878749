"""Tests for BoardSummaryPolicy."""

from opsboard.domain.entities.board import EnrichedDriver, EnrichedLoad, LedgerConflict
from opsboard.domain.entities.driver import Driver
from opsboard.domain.entities.load import Load
from opsboard.domain.policies.board_summary import build_board_summary
from opsboard.domain.value_objects.enums import DriverTruthStatus


def _load(lid: str, status=None, pod=None) -> EnrichedLoad:
    return EnrichedLoad(load=Load(id=lid, status=status, pod_status=pod), active_assignment=None)


def _driver(did: str, status, truth: DriverTruthStatus) -> EnrichedDriver:
    return EnrichedDriver(
        driver=Driver(id=did, status=status),
        active_assignment=None,
        active_load=None,
        driver_truth_status=truth,
    )


def test_empty_board():
    s = build_board_summary([], [])
    assert s.total_loads == 0
    assert s.total_drivers == 0
    assert s.loads_by_status == {}
    assert all(v == 0 for v in s.drivers_truth.values())


def test_delivered_without_pod():
    s = build_board_summary(
        [_load("L1", "DELIVERED", None), _load("L2", "DELIVERED", "RECEIVED"), _load("L3", "delivered", "pending")],
        [],
    )
    assert s.delivered_without_pod == 2
    assert s.loads_by_status == {"DELIVERED": 3}
    assert s.loads_by_pod_status == {"NONE": 1, "RECEIVED": 1, "PENDING": 1}


def test_problem_and_at_risk_groups():
    loads = [
        _load("L1", "PROBLEM"), _load("L2", "failed"), _load("L3", "CANCELLED"),
        _load("L4", "AT_RISK"), _load("L5", "late"), _load("L6", "DELAYED"),
        _load("L7", "CANCELED"), _load("L8", "IN_TRANSIT"),
    ]
    s = build_board_summary(loads, [])
    assert s.problem_loads == 3
    assert s.at_risk_loads == 3


def test_unset_status_counted_as_unknown():
    s = build_board_summary([_load("L1", None), _load("L2", ""), _load("L3", "booked")], [])
    assert s.loads_by_status == {"UNKNOWN": 2, "BOOKED": 1}


def test_legacy_driver_counts_use_raw_status():
    drivers = [
        _driver("D1", "AVAILABLE", DriverTruthStatus.SHOULD_BE_ON_LOAD),
        _driver("D2", "available", DriverTruthStatus.AVAILABLE),
        _driver("D3", "OFF_DUTY", DriverTruthStatus.AVAILABLE),
        _driver("D4", "IN_TRANSIT", DriverTruthStatus.ON_LOAD),
        _driver("D5", "DISPATCHED", DriverTruthStatus.SHOULD_BE_FREE),
    ]
    s = build_board_summary([], drivers)
    assert s.drivers_available == 2
    assert s.drivers_assigned == 2


def test_truth_counts():
    drivers = [
        _driver("D1", "AVAILABLE", DriverTruthStatus.AVAILABLE),
        _driver("D2", "AVAILABLE", DriverTruthStatus.AVAILABLE),
        _driver("D3", "ON_LOAD", DriverTruthStatus.ON_LOAD),
        _driver("D4", "ASSIGNED", DriverTruthStatus.UNKNOWN),
    ]
    s = build_board_summary([], drivers)
    assert s.truth_count(DriverTruthStatus.AVAILABLE) == 2
    assert s.truth_count(DriverTruthStatus.ON_LOAD) == 1
    assert s.truth_count(DriverTruthStatus.UNKNOWN) == 1
    assert s.truth_count(DriverTruthStatus.SHOULD_BE_FREE) == 0


def test_histograms_sum_to_totals():
    loads = [_load("L1", "A"), _load("L2", "B"), _load("L3", None), _load("L4", "a")]
    drivers = [
        _driver("D1", None, DriverTruthStatus.AVAILABLE),
        _driver("D2", "X", DriverTruthStatus.UNKNOWN),
        _driver("D3", "ON_LOAD", DriverTruthStatus.SHOULD_BE_FREE),
    ]
    s = build_board_summary(loads, drivers)
    assert sum(s.loads_by_status.values()) == len(loads)
    assert sum(s.loads_by_pod_status.values()) == len(loads)
    assert sum(s.drivers_truth.values()) == len(drivers)


def test_duplicate_open_assignments_counted():
    conflicts = [
        LedgerConflict(kind="driver", key="D1", kept_assignment_id="A2", shadowed_assignment_ids=("A1",)),
    ]
    s = build_board_summary([], [], conflicts)
    assert s.duplicate_open_assignments == 1


def test_to_dict_flat_shape():
    s = build_board_summary([_load("L1", "DELIVERED")], [_driver("D1", "AVAILABLE", DriverTruthStatus.AVAILABLE)])
    data = s.to_dict()
    assert data["totals"] == {"loads": 1, "drivers": 1}
    assert data["delivered_without_pod"] == 1
    assert data["drivers_truth_available"] == 1
    assert data["drivers_truth_on_load"] == 0
    assert data["drivers_truth_should_be_free"] == 0
    assert data["drivers_truth_should_be_on_load"] == 0
    assert data["drivers_truth_unknown"] == 0
