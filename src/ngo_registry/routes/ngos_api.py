# src/ngo_registry/routes/ngos_api.py
from __future__ import annotations

import math
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError

from src.ngo_registry.utils.database import get_db
from src.ngo_registry.crud.ngo import create_ngo, delete_ngo, get_ngo, list_ngos, update_ngo
from src.ngo_registry.crud.zone import load_zones, replace_zones, resolve_and_persist
from src.ngo_registry.logic.snapshot import rows_to_nodes
from src.ngo_registry.schemas.ngo import NgoCreate, NgoOut, NgoUpdate
from src.ngo_registry.schemas.zone import PersistedZoneOut, ReplaceOut, ZoneListIn

router = APIRouter(prefix="/api/ngos", tags=["NGOs"])

def _actor(x_actor: Optional[str] = Header(None)) -> str:
    return (x_actor or "").strip() or "System"

async def _require_ngo(db: AsyncSession, ngo_id: str):
    row = await get_ngo(db, ngo_id)
    if not row:
        raise HTTPException(status_code=404, detail="NGO not found")
    return row

async def _ngo_out(db: AsyncSession, row) -> NgoOut:
    out = NgoOut.model_validate(row)
    out.intervention_zones = [PersistedZoneOut.model_validate(z) for z in await load_zones(db, row.id)]
    return out

# -------- NGOs --------
@router.get("")
async def api_list_ngos(
    q: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    size: int = Query(20, ge=5, le=100),
    db: AsyncSession = Depends(get_db),
):
    rows, total = await list_ngos(db, q=q, limit=size, offset=(page - 1) * size)
    return {
        "rows": [NgoOut.model_validate(r) for r in rows],
        "page": page,
        "pages": math.ceil(total / size) if size else 1,
        "size": size,
        "total": total,
    }

@router.post("", status_code=201, response_model=NgoOut)
async def api_create_ngo(
    payload: NgoCreate,
    actor: str = Depends(_actor),
    db: AsyncSession = Depends(get_db),
):
    try:
        row = await create_ngo(db, payload, created_by=actor)
    except IntegrityError:
        raise HTTPException(status_code=400, detail="NGO could not be created")
    return await _ngo_out(db, row)

@router.get("/{ngo_id}", response_model=NgoOut)
async def api_get_ngo(ngo_id: str, db: AsyncSession = Depends(get_db)):
    row = await _require_ngo(db, ngo_id)
    return await _ngo_out(db, row)

@router.patch("/{ngo_id}", response_model=NgoOut)
async def api_update_ngo(
    ngo_id: str,
    payload: NgoUpdate,
    actor: str = Depends(_actor),
    db: AsyncSession = Depends(get_db),
):
    res = await update_ngo(db, ngo_id, payload, updated_by=actor)
    if not res:
        raise HTTPException(status_code=404, detail="NGO not found")
    row, _ = res
    return await _ngo_out(db, row)

@router.delete("/{ngo_id}")
async def api_delete_ngo(ngo_id: str, db: AsyncSession = Depends(get_db)):
    if not await delete_ngo(db, ngo_id):
        raise HTTPException(status_code=404, detail="NGO not found")
    return {"message": "deleted", "id": ngo_id}

# -------- Intervention zones --------
@router.get("/{ngo_id}/zones")
async def api_load_zones(
    ngo_id: str,
    flat: bool = Query(False, description="Return the editing list instead of stored rows"),
    db: AsyncSession = Depends(get_db),
):
    await _require_ngo(db, ngo_id)
    rows = await load_zones(db, ngo_id)
    if flat:
        return {"zones": [n.model_dump(mode="json") for n in rows_to_nodes(rows)]}
    return {"zones": [PersistedZoneOut.model_validate(r).model_dump(mode="json") for r in rows]}

@router.post("/{ngo_id}/zones", status_code=201)
async def api_create_zones(
    ngo_id: str,
    payload: ZoneListIn,
    db: AsyncSession = Depends(get_db),
):
    await _require_ngo(db, ngo_id)
    if await load_zones(db, ngo_id):
        raise HTTPException(status_code=409, detail="NGO already has intervention zones; use PUT to replace them")
    rows = await resolve_and_persist(db, ngo_id, payload.zones)
    return {"zones": [PersistedZoneOut.model_validate(r).model_dump(mode="json") for r in rows]}

@router.put("/{ngo_id}/zones", response_model=ReplaceOut)
async def api_replace_zones(
    ngo_id: str,
    payload: ZoneListIn,
    db: AsyncSession = Depends(get_db),
):
    await _require_ngo(db, ngo_id)
    changed, rows = await replace_zones(db, ngo_id, payload.zones)
    return {"changed": changed, "zones": [PersistedZoneOut.model_validate(r) for r in rows]}
