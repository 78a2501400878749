"""Tests for LoadScopePolicy."""

from opsboard.domain.entities.load import Load
from opsboard.domain.policies.load_scope import filter_loads_by_scope, is_active_load
from opsboard.domain.value_objects.enums import BoardScope


def test_terminal_statuses_are_inactive():
    for status in ("CANCELLED", "canceled", "Closed", "ARCHIVED", "deleted"):
        assert is_active_load(Load(id="L", status=status)) is False


def test_unset_status_is_active():
    assert is_active_load(Load(id="L", status=None)) is True
    assert is_active_load(Load(id="L", status="  ")) is True


def test_free_text_status_is_active():
    assert is_active_load(Load(id="L", status="waiting on shipper")) is True


def test_all_scope_keeps_everything(board_loads):
    assert filter_loads_by_scope(board_loads, BoardScope.ALL) == board_loads


def test_dispatcher_and_active_only_drop_terminal(board_loads):
    for scope in (BoardScope.DISPATCHER, BoardScope.ACTIVE_ONLY):
        ids = [load.id for load in filter_loads_by_scope(board_loads, scope)]
        assert ids == ["L1", "L2", "L3", "L5", "L6"]


def test_filter_returns_new_list(board_loads):
    result = filter_loads_by_scope(board_loads, BoardScope.ALL)
    result.pop()
    assert len(board_loads) == 6
