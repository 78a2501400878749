"""Domain enums and status vocabularies — pure Python, no external dependencies."""

from enum import Enum


class DriverTruthStatus(str, Enum):
    AVAILABLE = "AVAILABLE"
    ON_LOAD = "ON_LOAD"
    SHOULD_BE_FREE = "SHOULD_BE_FREE"
    SHOULD_BE_ON_LOAD = "SHOULD_BE_ON_LOAD"
    UNKNOWN = "UNKNOWN"


class BoardScope(str, Enum):
    DISPATCHER = "dispatcher"
    ACTIVE_ONLY = "active_only"
    ALL = "all"

    @classmethod
    def parse(cls, raw: str | None) -> "BoardScope | None":
        """Return the matching scope, or None for absent / unrecognised input."""
        if raw is None:
            return None
        try:
            return cls(raw)
        except ValueError:
            return None


class DriverStatusClass(str, Enum):
    """What a driver's self-reported status claims about availability."""

    FREE = "FREE"
    BUSY = "BUSY"
    OTHER = "OTHER"


FREE_DRIVER_STATUSES = frozenset({"AVAILABLE", "OFF_DUTY", "IDLE", ""})
BUSY_DRIVER_STATUSES = frozenset({"ON_LOAD", "DISPATCHED", "IN_TRANSIT"})

INACTIVE_LOAD_STATUSES = frozenset({"CANCELLED", "CANCELED", "CLOSED", "ARCHIVED", "DELETED"})
PROBLEM_LOAD_STATUSES = frozenset({"PROBLEM", "FAILED", "CANCELLED"})
AT_RISK_LOAD_STATUSES = frozenset({"AT_RISK", "LATE", "DELAYED"})

POD_RECEIVED = "RECEIVED"
UNSET_LOAD_STATUS = "UNKNOWN"
UNSET_POD_STATUS = "NONE"


def normalize_status(raw: str | None) -> str:
    """Uppercase and strip a free-text status; None becomes the empty string."""
    if raw is None:
        return ""
    return str(raw).strip().upper()


def classify_driver_status(raw: str | None) -> DriverStatusClass:
    status = normalize_status(raw)
    if status in FREE_DRIVER_STATUSES:
        return DriverStatusClass.FREE
    if status in BUSY_DRIVER_STATUSES:
        return DriverStatusClass.BUSY
    return DriverStatusClass.OTHER
