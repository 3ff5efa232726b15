# src/ngo_registry/routes/zones_api.py
from __future__ import annotations

from fastapi import APIRouter, HTTPException

from src.ngo_registry.logic.cascade import apply_toggle
from src.ngo_registry.logic.integrity import check_integrity
from src.ngo_registry.schemas.zone import (
    ToggleIn,
    ValidationOut,
    ZoneListIn,
    ZoneListOut,
    ZoneType,
)
from src.ngo_registry.utils.zone_catalog import catalog_tree, check_toggle_known, region_for_department

router = APIRouter(prefix="/api/zones", tags=["Intervention Zones"])

@router.get("/catalog")
async def api_catalog():
    return catalog_tree()

@router.post("/toggle", response_model=ZoneListOut)
async def api_toggle(payload: ToggleIn):
    event = payload.event
    if event.zone_type == ZoneType.municipality and not event.region and event.parent_name:
        # the form only knows the department; the catalog knows its region
        event = event.model_copy(update={"region": region_for_department(event.parent_name)})

    check_toggle_known(event)
    try:
        zones = apply_toggle(payload.zones, event)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return {"zones": zones}

@router.post("/validate", response_model=ValidationOut)
async def api_validate(payload: ZoneListIn):
    # duplicates (409) and strict-mode orphans (422) surface through the error handler
    warnings = check_integrity(payload.zones)
    return {"ok": True, "warnings": [w.as_dict() for w in warnings]}
