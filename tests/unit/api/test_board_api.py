"""Tests for the board and assignment endpoints with dependency overrides."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from opsboard.adapters.persistence.database import get_session
from opsboard.application.errors import BoardDataUnavailableError
from opsboard.application.ports.org_resolver import OrgResolver
from opsboard.application.use_cases.assign_driver import AssignmentResult
from opsboard.domain.entities.assignment import Assignment
from opsboard.domain.policies.board_reconciliation import reconcile_board
from opsboard.domain.value_objects.enums import BoardScope
from opsboard.infrastructure.api.dependencies import (
    get_assign_driver_uc,
    get_build_board_uc,
    get_org_resolver,
)
from opsboard.infrastructure.api.routes_board import resolve_scope
from opsboard.main import app

HEADERS = {"X-User-Id": "user-1"}


class FakeOrgResolver(OrgResolver):
    def __init__(self, mapping: dict[str, str]):
        self._mapping = mapping

    async def resolve(self, user_id):
        return self._mapping.get(user_id)


class FakeBoardUseCase:
    def __init__(self, loads, drivers, assignments, fail: bool = False):
        self._data = (loads, drivers, assignments)
        self._fail = fail
        self.calls: list[tuple[str, BoardScope]] = []

    async def execute(self, org_id, scope=BoardScope.DISPATCHER):
        self.calls.append((org_id, scope))
        if self._fail:
            raise BoardDataUnavailableError("drivers")
        return reconcile_board(*self._data, scope)


class FakeAssignUseCase:
    def __init__(self, error: str | None = None):
        self._error = error
        self.calls: list[dict] = []

    async def execute(
        self, org_id, load_id=None, driver_id=None, reason=None, *, load_number=None, driver_name=None,
    ):
        self.calls.append({
            "load_id": load_id, "driver_id": driver_id,
            "load_number": load_number, "driver_name": driver_name,
        })
        load_id = load_id or "L-" + (load_number or "")
        driver_id = driver_id or (driver_name and "D-resolved")
        result = AssignmentResult(load_id=load_id, driver_id=driver_id, error=self._error)
        if not self._error and driver_id:
            result.assignment = Assignment(
                id="A-new", org_id=org_id, load_id=load_id, driver_id=driver_id, assigned_at=None,
            )
        return result


class FakeSession:
    def __init__(self, db_error: Exception | None = None):
        self.commits = 0
        self._db_error = db_error

    async def scalar(self, statement):
        if self._db_error:
            raise self._db_error
        return datetime(2024, 7, 1, 12, 0, tzinfo=timezone.utc)

    async def commit(self):
        self.commits += 1


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def board_uc(board_loads, board_drivers, board_assignments):
    return FakeBoardUseCase(board_loads, board_drivers, board_assignments)


@pytest.fixture
def assign_uc():
    return FakeAssignUseCase()


@pytest.fixture
def client(board_uc, assign_uc, session):
    async def _session():
        yield session

    app.dependency_overrides[get_session] = _session
    app.dependency_overrides[get_org_resolver] = lambda: FakeOrgResolver({"user-1": "org-1"})
    app.dependency_overrides[get_build_board_uc] = lambda: board_uc
    app.dependency_overrides[get_assign_driver_uc] = lambda: assign_uc
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_get_board_default_scope(client, board_uc):
    resp = client.get("/api/board", headers=HEADERS)
    assert resp.status_code == 200
    body = resp.json()
    assert body["ok"] is True
    assert body["org_id"] == "org-1"
    assert body["scope"] == "dispatcher"
    assert len(body["loads"]) == 5
    assert len(body["drivers"]) == 5
    assert body["summary"]["totals"] == {"loads": 5, "drivers": 5}
    assert body["integrity_warnings"] == []
    assert board_uc.calls == [("org-1", BoardScope.DISPATCHER)]


def test_get_board_enriched_driver_shape(client):
    body = client.get("/api/board?scope=all", headers=HEADERS).json()
    d4 = next(d for d in body["drivers"] if d["id"] == "D4")
    assert d4["driver_truth_status"] == "SHOULD_BE_ON_LOAD"
    assert d4["active_assignment"]["id"] == "A2"
    assert d4["active_load"]["id"] == "L4"
    assert d4["first_name"] == "Dee"


def test_post_board_scope_from_body(client, board_uc):
    resp = client.post("/api/board", headers=HEADERS, json={"scope": "all"})
    assert resp.status_code == 200
    assert resp.json()["scope"] == "all"
    assert len(resp.json()["loads"]) == 6


def test_post_board_query_wins_over_body(client):
    resp = client.post("/api/board?scope=active_only", headers=HEADERS, json={"scope": "all"})
    assert resp.json()["scope"] == "active_only"


def test_post_board_ignores_bad_body(client):
    resp = client.post(
        "/api/board", headers={**HEADERS, "Content-Type": "application/json"}, content=b"{not json",
    )
    assert resp.status_code == 200
    assert resp.json()["scope"] == "dispatcher"


def test_invalid_scope_falls_back(client):
    assert client.get("/api/board?scope=everything", headers=HEADERS).json()["scope"] == "dispatcher"


def test_missing_user_header_is_401(client):
    assert client.get("/api/board").status_code == 401


def test_unknown_org_is_400(client):
    resp = client.get("/api/board", headers={"X-User-Id": "stranger"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Unable to resolve org"


def test_fetch_failure_is_503(client, board_loads, board_drivers, board_assignments):
    app.dependency_overrides[get_build_board_uc] = lambda: FakeBoardUseCase(
        board_loads, board_drivers, board_assignments, fail=True
    )
    resp = client.get("/api/board", headers=HEADERS)
    assert resp.status_code == 503
    assert resp.json()["detail"] == "Failed to fetch drivers"


def test_assign_driver_commits(client, session):
    resp = client.post("/api/assignments", headers=HEADERS, json={"load_id": "L1", "driver_id": "D2"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["assignment"]["id"] == "A-new"
    assert body["closed"] == []
    assert session.commits == 1


def test_assign_unknown_load_is_404(client, session):
    app.dependency_overrides[get_assign_driver_uc] = lambda: FakeAssignUseCase(error="load_not_found")
    resp = client.post("/api/assignments", headers=HEADERS, json={"load_id": "nope", "driver_id": None})
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Load not found"
    assert session.commits == 0


def test_resolve_scope_precedence():
    assert resolve_scope("all", "active_only") is BoardScope.ALL
    assert resolve_scope(None, "active_only") is BoardScope.ACTIVE_ONLY
    assert resolve_scope("bogus", "bogus") is BoardScope.DISPATCHER


def test_assign_by_load_number_and_driver_name(client, assign_uc, session):
    resp = client.post(
        "/api/assignments",
        headers=HEADERS,
        json={"load_number": "LD-1001", "driver_name": "Ana Ruiz", "reason": "phone call"},
    )
    assert resp.status_code == 200
    assert assign_uc.calls == [
        {"load_id": None, "driver_id": None, "load_number": "LD-1001", "driver_name": "Ana Ruiz"}
    ]
    assert resp.json()["driver_id"] == "D-resolved"
    assert session.commits == 1


def test_assign_without_load_is_422(client, assign_uc):
    resp = client.post("/api/assignments", headers=HEADERS, json={"driver_name": "Ana Ruiz"})
    assert resp.status_code == 422
    assert assign_uc.calls == []


def test_health_ok(client):
    body = client.get("/api/health").json()
    assert body["status"] == "ok"
    assert body["service"] == "opsboard"
    assert body["database"] == {"reachable": True, "server_time": "2024-07-01T12:00:00+00:00"}


def test_health_degraded_when_database_down(client):
    down = FakeSession(db_error=OperationalError("SELECT now()", {}, Exception("refused")))

    async def _down():
        yield down

    app.dependency_overrides[get_session] = _down
    body = client.get("/api/health").json()
    assert body["status"] == "degraded"
    assert body["database"]["reachable"] is False
    assert "refused" in body["database"]["error"]
