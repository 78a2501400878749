"""CSV loader — reads board exports (loads, drivers, assignments) into domain entities."""

from __future__ import annotations

import csv
import logging
from pathlib import Path

from opsboard.adapters.csv_loader.normalizer import (
    clean_status,
    clean_string,
    normalize_column_name,
    parse_timestamp,
)
from opsboard.domain.entities.assignment import Assignment
from opsboard.domain.entities.driver import Driver
from opsboard.domain.entities.load import Load

logger = logging.getLogger(__name__)

_LOAD_COLUMNS = {
    "id", "load_id", "org_id", "reference", "load_number", "status", "pod_status",
    "assigned_driver_id", "driver_id", "driver_name", "pickup_at", "delivery_at",
}
_DRIVER_COLUMNS = {"id", "driver_id", "org_id", "first_name", "last_name", "code", "driver_code", "status"}


def _sniff_dialect(sample: str) -> type[csv.Dialect] | csv.Dialect:
    """Detect delimiter (comma/semicolon/tab) so spreadsheet exports load as-is."""
    if not sample:
        return csv.get_dialect("excel")

    first_line = sample.splitlines()[0]
    delims = [",", ";", "\t"]
    counts = {d: first_line.count(d) for d in delims}
    best_delim = max(counts, key=counts.get)

    if counts[best_delim] > 0:
        class DynamicDialect(csv.excel):
            delimiter = best_delim
        return DynamicDialect

    return csv.get_dialect("excel")


def _read_csv(file_path: Path, encoding: str = "utf-8-sig") -> list[dict[str, str | None]]:
    """Read a CSV file with BOM handling and column normalization.

    Args:
        file_path: path to the CSV file.
        encoding: file encoding (utf-8-sig strips BOM automatically).

    Returns:
        List of dicts with normalized column names and cleaned values.
    """
    with open(file_path, encoding=encoding, newline="") as f:
        sample = f.read(4096)
        f.seek(0)
        reader = csv.DictReader(f, dialect=_sniff_dialect(sample))
        if reader.fieldnames is None:
            raise ValueError(f"CSV file {file_path} has no header row")

        col_map = {col: normalize_column_name(col) for col in reader.fieldnames}
        rows = []
        for raw_row in reader:
            rows.append({col_map[k]: clean_string(v) for k, v in raw_row.items() if k is not None})

    logger.info("Loaded %d rows from %s (columns: %s)", len(rows), file_path.name, list(col_map.values()))
    return rows


def load_loads(file_path: Path, org_id: str | None = None) -> list[Load]:
    """Parse a loads export.

    Expected columns (after normalization):
        id, reference/load_number, status, pod_status, assigned_driver_id/driver_id,
        driver_name, pickup_at, delivery_at; anything else is kept in `extra`.
    """
    loads = []
    for row in _read_csv(file_path):
        load_id = row.get("id") or row.get("load_id")
        if not load_id:
            logger.warning("Skipping load row without id: %s", row)
            continue
        loads.append(
            Load(
                id=load_id,
                org_id=org_id or row.get("org_id"),
                reference=row.get("reference") or row.get("load_number"),
                status=clean_status(row.get("status")),
                pod_status=clean_status(row.get("pod_status")),
                assigned_driver_id=row.get("assigned_driver_id") or row.get("driver_id"),
                driver_name=row.get("driver_name"),
                pickup_at=parse_timestamp(row.get("pickup_at")),
                delivery_at=parse_timestamp(row.get("delivery_at")),
                extra={k: v for k, v in row.items() if k not in _LOAD_COLUMNS and v is not None},
            )
        )
    logger.info("Parsed %d loads", len(loads))
    return loads


def load_drivers(file_path: Path, org_id: str | None = None) -> list[Driver]:
    """Parse a drivers export.

    Expected columns (after normalization):
        id, first_name, last_name, code/driver_code, status
    """
    drivers = []
    for row in _read_csv(file_path):
        driver_id = row.get("id") or row.get("driver_id")
        if not driver_id:
            logger.warning("Skipping driver row without id: %s", row)
            continue
        drivers.append(
            Driver(
                id=driver_id,
                org_id=org_id or row.get("org_id"),
                first_name=row.get("first_name"),
                last_name=row.get("last_name"),
                code=row.get("code") or row.get("driver_code"),
                status=clean_status(row.get("status")),
                extra={k: v for k, v in row.items() if k not in _DRIVER_COLUMNS and v is not None},
            )
        )
    logger.info("Parsed %d drivers", len(drivers))
    return drivers


def load_assignments(file_path: Path, org_id: str | None = None) -> list[Assignment]:
    """Parse a load_driver_assignments export.

    Expected columns (after normalization):
        id, load_id, driver_id, assigned_at, unassigned_at, reason
    """
    assignments = []
    for i, row in enumerate(_read_csv(file_path), start=1):
        load_id = row.get("load_id")
        driver_id = row.get("driver_id")
        if not load_id or not driver_id:
            logger.warning("Skipping assignment row %d without load_id/driver_id", i)
            continue
        assignments.append(
            Assignment(
                id=row.get("id") or f"{load_id}:{driver_id}:{i}",
                org_id=org_id or row.get("org_id"),
                load_id=load_id,
                driver_id=driver_id,
                assigned_at=parse_timestamp(row.get("assigned_at")),
                unassigned_at=parse_timestamp(row.get("unassigned_at")),
                reason=row.get("reason"),
            )
        )
    logger.info("Parsed %d assignments", len(assignments))
    return assignments


def load_org_members(file_path: Path) -> list[dict]:
    """Parse an org_members export: user_id, org_id, role."""
    members = []
    for row in _read_csv(file_path):
        if not row.get("user_id") or not row.get("org_id"):
            continue
        members.append({"user_id": row["user_id"], "org_id": row["org_id"], "role": row.get("role")})
    logger.info("Parsed %d org members", len(members))
    return members
