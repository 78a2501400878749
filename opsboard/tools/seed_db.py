"""Seed the ops-board database from CSV exports.

Usage:
    python -m opsboard.tools.seed_db --org-id <uuid>
    python -m opsboard.tools.seed_db --data-dir data --org-id <uuid>
    python -m opsboard.tools.seed_db --org-id <uuid> --drop  # wipe the org first
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from opsboard.adapters.csv_loader.loader import (
    load_assignments,
    load_drivers,
    load_loads,
    load_org_members,
)
from opsboard.adapters.persistence.database import async_session_factory
from opsboard.adapters.persistence.models import (
    DriverModel,
    LoadDriverAssignmentModel,
    LoadModel,
    OrgMemberModel,
)
from opsboard.config import settings

logger = logging.getLogger(__name__)


async def _drop_org(session: AsyncSession, org_id: str) -> None:
    """Delete one org's rows in FK order."""
    for model in [LoadDriverAssignmentModel, LoadModel, DriverModel, OrgMemberModel]:
        await session.execute(delete(model).where(model.org_id == org_id))
    await session.commit()
    logger.info("Dropped existing data for org %s", org_id)


async def seed(data_dir: Path, org_id: str, drop: bool = False) -> dict[str, int]:
    """Main seed function. Existing ids are skipped. Returns counts of inserted rows."""
    counts = {"org_members": 0, "drivers": 0, "loads": 0, "assignments": 0}

    driver_csv = _find_csv(data_dir, ["drivers"])
    load_csv = _find_csv(data_dir, ["loads"])
    assignment_csv = _find_csv(data_dir, ["assignments", "load_driver_assignments"])
    member_csv = _find_csv(data_dir, ["org_members", "members"])

    if not load_csv:
        raise FileNotFoundError(f"No loads CSV found in {data_dir}. Expected something like loads.csv")
    if not driver_csv:
        raise FileNotFoundError(f"No drivers CSV found in {data_dir}. Expected something like drivers.csv")

    async with async_session_factory() as session:
        if drop:
            await _drop_org(session, org_id)

        # 1. Members
        if member_csv:
            for md in load_org_members(member_csv):
                if md["org_id"] != org_id:
                    continue
                existing = await session.execute(
                    select(OrgMemberModel).where(
                        OrgMemberModel.user_id == md["user_id"],
                        OrgMemberModel.org_id == org_id,
                    )
                )
                if existing.scalar_one_or_none():
                    continue
                session.add(OrgMemberModel(user_id=md["user_id"], org_id=org_id, role=md["role"]))
                counts["org_members"] += 1
            await session.commit()

        # 2. Drivers (loads reference them)
        for d in load_drivers(driver_csv, org_id=org_id):
            if await session.get(DriverModel, d.id):
                logger.debug("Driver '%s' already exists, skipping", d.id)
                continue
            session.add(
                DriverModel(
                    id=d.id, org_id=org_id, first_name=d.first_name, last_name=d.last_name,
                    code=d.code, status=d.status, extra=d.extra,
                )
            )
            counts["drivers"] += 1
        await session.commit()

        # 3. Loads
        known_drivers = set(
            (await session.execute(select(DriverModel.id).where(DriverModel.org_id == org_id))).scalars()
        )
        for ld in load_loads(load_csv, org_id=org_id):
            if await session.get(LoadModel, ld.id):
                logger.debug("Load '%s' already exists, skipping", ld.id)
                continue
            assigned = ld.assigned_driver_id
            if assigned and assigned not in known_drivers:
                logger.warning("Load '%s': unknown driver '%s', leaving unassigned", ld.id, assigned)
                assigned = None
            session.add(
                LoadModel(
                    id=ld.id, org_id=org_id, reference=ld.reference, status=ld.status,
                    pod_status=ld.pod_status, assigned_driver_id=assigned,
                    driver_name=ld.driver_name, pickup_at=ld.pickup_at,
                    delivery_at=ld.delivery_at, extra=ld.extra,
                )
            )
            counts["loads"] += 1
        await session.commit()

        # 4. Assignment ledger
        if assignment_csv:
            known_loads = set(
                (await session.execute(select(LoadModel.id).where(LoadModel.org_id == org_id))).scalars()
            )
            for a in load_assignments(assignment_csv, org_id=org_id):
                if a.load_id not in known_loads or a.driver_id not in known_drivers:
                    logger.warning(
                        "Assignment '%s' references unknown load/driver (%s, %s), skipping",
                        a.id, a.load_id, a.driver_id,
                    )
                    continue
                if await session.get(LoadDriverAssignmentModel, a.id):
                    continue
                row = LoadDriverAssignmentModel(
                    id=a.id, org_id=org_id, load_id=a.load_id, driver_id=a.driver_id,
                    unassigned_at=a.unassigned_at, reason=a.reason,
                )
                if a.assigned_at is not None:
                    row.assigned_at = a.assigned_at
                session.add(row)
                counts["assignments"] += 1
            await session.commit()
        else:
            logger.info("No assignments CSV found, skipping ledger import")

    logger.info(
        "Seed complete for org %s: %d members, %d drivers, %d loads, %d assignments",
        org_id, counts["org_members"], counts["drivers"], counts["loads"], counts["assignments"],
    )
    return counts


def _find_csv(data_dir: Path, name_hints: list[str]) -> Path | None:
    """Find a CSV file whose stem matches any of the hints exactly, then by substring."""
    files = sorted(data_dir.glob("*.csv"))
    for hint in name_hints:
        for f in files:
            if f.stem.lower() == hint:
                return f
    for hint in name_hints:
        for f in files:
            if hint in f.stem.lower():
                logger.info("Found CSV: %s (matched hint '%s')", f.name, hint)
                return f
    return None


async def _verify_data(org_id: str) -> None:
    """Print sanity checks after seeding."""
    async with async_session_factory() as session:
        async def _count(model, *where) -> int:
            return (
                await session.execute(select(func.count(model.id)).where(model.org_id == org_id, *where))
            ).scalar() or 0

        loads = await _count(LoadModel)
        drivers = await _count(DriverModel)
        open_rows = await _count(LoadDriverAssignmentModel, LoadDriverAssignmentModel.unassigned_at.is_(None))

        print(f"\n{'='*50}")
        print(f"SEED VERIFICATION: org {org_id}")
        print(f"{'='*50}")
        print(f"Loads:              {loads}")
        print(f"Drivers:            {drivers}")
        print(f"Open assignments:   {open_rows}")
        print(f"{'='*50}\n")


def main():
    parser = argparse.ArgumentParser(description="Seed the ops-board database from CSV files")
    parser.add_argument(
        "--data-dir", type=str, default=settings.csv_data_path,
        help="Directory containing CSV files (default: CSV_DATA_PATH or 'data')",
    )
    parser.add_argument("--org-id", type=str, required=True, help="Organization the rows belong to")
    parser.add_argument("--drop", action="store_true", help="Delete the org's existing rows first")
    parser.add_argument("--verify-only", action="store_true", help="Only run verification, don't seed")
    args = parser.parse_args()

    logging.basicConfig(level=settings.log_level.upper(), format="%(levelname)s | %(message)s")

    data_dir = Path(args.data_dir)
    if not args.verify_only and not data_dir.exists():
        logger.error("Data directory not found: %s", data_dir)
        sys.exit(1)

    if args.verify_only:
        asyncio.run(_verify_data(args.org_id))
    else:
        async def run_all():
            await seed(data_dir, args.org_id, drop=args.drop)
            await _verify_data(args.org_id)
        asyncio.run(run_all())


if __name__ == "__main__":
    main()
