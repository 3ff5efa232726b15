# src/ngo_registry/crud/zone.py
"""
Persistence of an NGO's intervention zones.

The editing list references parents by name; storage references them by id.
`resolve_and_persist` bridges the two in three ordered passes (roots,
departments, municipalities), each pass feeding the ids it produced into the
next. `replace_zones` is the update path: unchanged lists cost nothing, any
change deletes every zone of the NGO and re-runs the create path.
"""
from __future__ import annotations

import asyncio
import logging
import uuid
import weakref
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from sqlalchemy import select, insert, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.ngo_registry.config import settings
from src.ngo_registry.logic.integrity import check_integrity
from src.ngo_registry.logic.snapshot import canonical_zones, rows_to_nodes, stored_municipality_names
from src.ngo_registry.models.ngo.zone_info import InterventionZone
from src.ngo_registry.schemas.zone import ZoneNode, ZoneType
from src.ngo_registry.utils.errors import (
    PersistenceBatchError,
    UnresolvedParentError,
    UnresolvedParentWarning,
    ZoneError,
)
from src.ngo_registry.utils.timezone import now_local

logger = logging.getLogger(__name__)

# one resolution at a time per NGO; a lock lives only while someone holds or awaits it
_ngo_locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = weakref.WeakValueDictionary()

PASS_ROOTS = "pass 1 (countries/regions)"
PASS_DEPARTMENTS = "pass 2 (departments)"
PASS_MUNICIPALITIES = "pass 3 (municipalities)"


def _lock_for(ngo_id: str) -> asyncio.Lock:
    lock = _ngo_locks.get(ngo_id)
    if lock is None:
        lock = asyncio.Lock()
        _ngo_locks[ngo_id] = lock
    return lock


def _sorted(rows: Iterable[InterventionZone]) -> List[InterventionZone]:
    return sorted(rows, key=lambda r: (ZoneType(r.zone_type).depth, r.name))


# ---------- read ----------

async def load_zones(db: AsyncSession, ngo_id: str) -> List[InterventionZone]:
    res = await db.execute(select(InterventionZone).where(InterventionZone.ngo_id == ngo_id))
    return _sorted(res.scalars().all())


async def load_zone_nodes(db: AsyncSession, ngo_id: str) -> List[ZoneNode]:
    """Read path for the editing form: persisted rows turned back into the flat list."""
    return rows_to_nodes(await load_zones(db, ngo_id))


# ---------- storage batches ----------

async def _insert_batch(
    db: AsyncSession, ngo_id: str, stage: str, rows: List[dict]
) -> List[InterventionZone]:
    if not rows:
        return []
    logger.debug("NGO %s %s: inserting %d zone(s)", ngo_id, stage, len(rows))
    try:
        res = await db.scalars(
            insert(InterventionZone).returning(InterventionZone, sort_by_parameter_order=True),
            rows,
        )
        return list(res.all())
    except SQLAlchemyError as e:
        raise PersistenceBatchError(stage, ngo_id, e) from e


async def _delete_rows(db: AsyncSession, ngo_id: str) -> int:
    try:
        res = await db.execute(delete(InterventionZone).where(InterventionZone.ngo_id == ngo_id))
    except SQLAlchemyError as e:
        raise PersistenceBatchError("delete", ngo_id, e) from e
    return res.rowcount or 0


async def _commit(db: AsyncSession, ngo_id: str, stage: str) -> None:
    try:
        await db.commit()
    except SQLAlchemyError as e:
        raise PersistenceBatchError(stage, ngo_id, e) from e


# ---------- resolver ----------

def _resolve_parent(
    node: ZoneNode,
    by_key: Dict[str, str],
    by_name: Dict[str, str],
    mode: str,
    reported: Set[Tuple[str, str, Optional[str]]],
) -> Optional[str]:
    if node.parent_key and node.parent_key in by_key:
        return by_key[node.parent_key]
    if node.parent_name and node.parent_name in by_name:
        return by_name[node.parent_name]

    parent_type = node.zone_type.parent_type
    orphan = UnresolvedParentWarning(
        node.zone_type.value,
        node.name,
        node.parent_name,
        f"parent {parent_type.value if parent_type else 'zone'} '{node.parent_name}' was not stored",
    )
    if mode == "strict":
        raise UnresolvedParentError([orphan])
    if node.identity not in reported:
        logger.warning("Unresolved parent, zone will be stored as a root: %s", orphan)
    return None


async def _resolve(
    db: AsyncSession,
    ngo_id: str,
    zones: Sequence[ZoneNode],
    mode: str,
    atomic: bool,
    reported: Set[Tuple[str, str, Optional[str]]],
) -> List[InterventionZone]:
    now = now_local()

    def _row(node: ZoneNode, name: str, parent_id: Optional[str]) -> dict:
        return {
            "id": str(uuid.uuid4()),
            "ngo_id": ngo_id,
            "zone_type": node.zone_type,
            "name": name,
            "parent_zone_id": parent_id,
            "created_at": now,
            "updated_at": now,
        }

    roots = [z for z in zones if z.is_root]
    departments = [z for z in zones if z.zone_type == ZoneType.department]
    municipalities = [z for z in zones if z.zone_type == ZoneType.municipality]

    # Pass 1: countries and regions, always top-level
    created_roots = await _insert_batch(
        db, ngo_id, PASS_ROOTS, [_row(z, z.name, None) for z in roots]
    )
    if not atomic:
        await _commit(db, ngo_id, PASS_ROOTS)

    region_by_key: Dict[str, str] = {}
    region_by_name: Dict[str, str] = {}
    for node, row in zip(roots, created_roots):
        if node.zone_type == ZoneType.region:
            region_by_key[node.key] = row.id
            region_by_name[row.name] = row.id

    # Pass 2: departments under the regions stored above
    created_depts = await _insert_batch(
        db,
        ngo_id,
        PASS_DEPARTMENTS,
        [
            _row(z, z.name, _resolve_parent(z, region_by_key, region_by_name, mode, reported))
            for z in departments
        ],
    )
    if not atomic:
        await _commit(db, ngo_id, PASS_DEPARTMENTS)

    dept_by_key = {node.key: row.id for node, row in zip(departments, created_depts)}
    dept_by_name = {row.name: row.id for row in created_depts}

    # Pass 3: municipalities, repeated names prefixed with their department
    names = stored_municipality_names(municipalities)
    created_munis = await _insert_batch(
        db,
        ngo_id,
        PASS_MUNICIPALITIES,
        [
            _row(z, name, _resolve_parent(z, dept_by_key, dept_by_name, mode, reported))
            for z, name in zip(municipalities, names)
        ],
    )
    if not atomic:
        await _commit(db, ngo_id, PASS_MUNICIPALITIES)

    return [*created_roots, *created_depts, *created_munis]


def _options(mode: Optional[str], atomic: Optional[bool]) -> Tuple[str, bool]:
    return (
        mode or settings.ZONE_RESOLUTION_MODE,
        settings.ZONE_ATOMIC_WRITES if atomic is None else atomic,
    )


def _gate(
    zones: Sequence[ZoneNode],
    mode: str,
    checked: Optional[Sequence[UnresolvedParentWarning]],
) -> Set[Tuple[str, str, Optional[str]]]:
    """Run the integrity gate unless the caller already did; returns the orphans it reported."""
    if checked is None:
        checked = check_integrity(zones, mode)
    return {(o.zone_type, o.name, o.parent_name) for o in checked}


async def resolve_and_persist(
    db: AsyncSession,
    ngo_id: str,
    zones: Sequence[ZoneNode],
    mode: Optional[str] = None,
    atomic: Optional[bool] = None,
    checked: Optional[Sequence[UnresolvedParentWarning]] = None,
) -> List[InterventionZone]:
    """
    Store a flat zone list for an NGO that has none yet (entity creation).

    With atomic writes the three passes share one transaction; otherwise each
    pass is committed on its own and a failure leaves earlier passes stored.
    `checked` carries the orphans of an integrity check the caller already ran
    with the same mode, so they are not validated and logged a second time.
    """
    mode, atomic = _options(mode, atomic)
    zones = list(zones)
    reported = _gate(zones, mode, checked)

    async with _lock_for(ngo_id):
        try:
            created = await _resolve(db, ngo_id, zones, mode, atomic, reported)
            await _commit(db, ngo_id, "commit")
        except ZoneError:
            await db.rollback()
            raise

    logger.info("NGO %s: stored %d intervention zone(s)", ngo_id, len(created))
    return _sorted(created)


async def replace_zones(
    db: AsyncSession,
    ngo_id: str,
    zones: Sequence[ZoneNode],
    mode: Optional[str] = None,
    atomic: Optional[bool] = None,
    checked: Optional[Sequence[UnresolvedParentWarning]] = None,
) -> Tuple[bool, List[InterventionZone]]:
    """
    Update path. Returns (changed, rows). When the stored set already matches
    `zones` nothing is written and the stored rows are returned as-is.
    """
    mode, atomic = _options(mode, atomic)
    zones = list(zones)
    reported = _gate(zones, mode, checked)

    async with _lock_for(ngo_id):
        current = await load_zones(db, ngo_id)
        if canonical_zones(rows_to_nodes(current)) == canonical_zones(zones):
            logger.debug("NGO %s: intervention zones unchanged, skipping write", ngo_id)
            return False, current

        try:
            removed = await _delete_rows(db, ngo_id)
            if not atomic:
                await _commit(db, ngo_id, "delete")
            created = await _resolve(db, ngo_id, zones, mode, atomic, reported)
            await _commit(db, ngo_id, "commit")
        except ZoneError:
            await db.rollback()
            raise

    logger.info(
        "NGO %s: replaced %d intervention zone(s) with %d", ngo_id, removed, len(created)
    )
    return True, _sorted(created)


async def delete_zones(db: AsyncSession, ngo_id: str) -> int:
    async with _lock_for(ngo_id):
        removed = await _delete_rows(db, ngo_id)
        await _commit(db, ngo_id, "delete")
    return removed
