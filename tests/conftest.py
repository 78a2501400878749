"""Pytest configuration and shared fixtures."""

from datetime import datetime, timezone

import pytest

from opsboard.domain.entities.assignment import Assignment
from opsboard.domain.entities.driver import Driver
from opsboard.domain.entities.load import Load

ORG = "org-1"


@pytest.fixture
def board_loads() -> list[Load]:
    return [
        Load(id="L1", org_id=ORG, reference="ATL-1001", status="IN_TRANSIT"),
        Load(id="L2", org_id=ORG, reference="ATL-1002", status="DELIVERED", pod_status="RECEIVED"),
        Load(id="L3", org_id=ORG, reference="ATL-1003", status="DELIVERED"),
        Load(id="L4", org_id=ORG, reference="ATL-1004", status="CANCELLED"),
        Load(id="L5", org_id=ORG, reference="ATL-1005", status="at_risk"),
        Load(id="L6", org_id=ORG, reference="ATL-1006", status=None),
    ]


@pytest.fixture
def board_drivers() -> list[Driver]:
    return [
        Driver(id="D1", org_id=ORG, first_name="Ana", last_name="Lopez", status="ON_LOAD"),
        Driver(id="D2", org_id=ORG, first_name="Ben", last_name="Cole", status="AVAILABLE"),
        Driver(id="D3", org_id=ORG, first_name="Cy", last_name="Park", status="DISPATCHED"),
        Driver(id="D4", org_id=ORG, first_name="Dee", last_name="Ray", status="available"),
        Driver(id="D5", org_id=ORG, first_name="Eli", last_name="Moss", status="ON_BREAK"),
    ]


@pytest.fixture
def board_assignments() -> list[Assignment]:
    return [
        Assignment(
            id="A1", org_id=ORG, load_id="L1", driver_id="D1",
            assigned_at=datetime(2024, 3, 1, 8, 0, tzinfo=timezone.utc),
        ),
        # D4 claims to be free but is still on the (cancelled) L4
        Assignment(
            id="A2", org_id=ORG, load_id="L4", driver_id="D4",
            assigned_at=datetime(2024, 3, 2, 9, 30, tzinfo=timezone.utc),
        ),
    ]
