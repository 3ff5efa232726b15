# src/ngo_registry/crud/ngo.py
from typing import Optional, Tuple

from sqlalchemy import select, delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.ngo_registry.crud.zone import delete_zones, replace_zones, resolve_and_persist
from src.ngo_registry.logic.integrity import check_integrity
from src.ngo_registry.models.ngo.ngo_info import NgoInfo
from src.ngo_registry.schemas.ngo import NgoCreate, NgoUpdate
from src.ngo_registry.utils.timezone import now_local

def _normalize_status(v: Optional[str]) -> str:
    return (v or "active").strip().lower()

async def list_ngos(
    db: AsyncSession,
    q: Optional[str] = None,
    limit: int = 50,
    offset: int = 0,
) -> Tuple[list[NgoInfo], int]:
    base = select(NgoInfo)
    if q:
        base = base.where(NgoInfo.name.ilike(f"%{q.strip()}%"))
    base = base.order_by(NgoInfo.name)
    count_stmt = base.with_only_columns(NgoInfo.id).order_by(None)
    res = await db.execute(count_stmt)
    total = len(res.scalars().all())

    res2 = await db.execute(base.limit(limit).offset(offset))
    rows = list(res2.scalars().all())
    return rows, total

async def get_ngo(db: AsyncSession, ngo_id: str) -> Optional[NgoInfo]:
    res = await db.execute(select(NgoInfo).where(NgoInfo.id == ngo_id))
    return res.scalar_one_or_none()

async def create_ngo(db: AsyncSession, data: NgoCreate, created_by: str = "System") -> NgoInfo:
    # reject a bad zone list before the NGO row exists
    warnings = check_integrity(data.intervention_zones)

    row = NgoInfo(
        name=data.name,
        status=_normalize_status(data.status),
        created_by=created_by,
        updated_by=created_by,
        created_at=now_local(),
        updated_at=now_local(),
    )
    db.add(row)
    try:
        await db.commit()
        await db.refresh(row)
    except IntegrityError:
        await db.rollback()
        raise

    if data.intervention_zones:
        await resolve_and_persist(db, row.id, data.intervention_zones, checked=warnings)
    return row

async def update_ngo(
    db: AsyncSession, ngo_id: str, data: NgoUpdate, updated_by: str = "System"
) -> Optional[Tuple[NgoInfo, bool]]:
    """Returns (row, zones_changed), or None when the NGO does not exist."""
    row = await get_ngo(db, ngo_id)
    if not row:
        return None

    warnings = None
    if data.intervention_zones is not None:
        warnings = check_integrity(data.intervention_zones)

    if data.name is not None:
        row.name = data.name
    if data.status is not None:
        row.status = _normalize_status(data.status)
    row.updated_by = updated_by
    row.updated_at = now_local()
    try:
        await db.commit()
        await db.refresh(row)
    except IntegrityError:
        await db.rollback()
        raise

    changed = False
    if data.intervention_zones is not None:
        changed, _ = await replace_zones(db, ngo_id, data.intervention_zones, checked=warnings)
    return row, changed

async def delete_ngo(db: AsyncSession, ngo_id: str) -> bool:
    row = await get_ngo(db, ngo_id)
    if not row:
        return False
    # zones are owned by the NGO and go first
    await delete_zones(db, ngo_id)
    await db.execute(delete(NgoInfo).where(NgoInfo.id == ngo_id))
    await db.commit()
    return True
