"""LoadScopePolicy — decide which loads a board scope shows."""

from __future__ import annotations

from opsboard.domain.entities.load import Load
from opsboard.domain.value_objects.enums import (
    INACTIVE_LOAD_STATUSES,
    BoardScope,
    normalize_status,
)


def is_active_load(load: Load) -> bool:
    """A load is active unless its status is terminal. Unset status counts as active."""
    status = normalize_status(load.status)
    if not status:
        return True
    return status not in INACTIVE_LOAD_STATUSES


def filter_loads_by_scope(loads: list[Load], scope: BoardScope) -> list[Load]:
    """`all` keeps everything; `dispatcher` and `active_only` drop terminal loads.

    Input order is preserved and the input list is not modified.
    """
    if scope == BoardScope.ALL:
        return list(loads)
    return [load for load in loads if is_active_load(load)]
