# src/ngo_registry/schemas/ngo.py
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from src.ngo_registry.schemas.zone import PersistedZoneOut, ZoneNode


class NgoBase(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=200)
    status: Optional[str] = Field("active", max_length=20)


class NgoCreate(NgoBase):
    intervention_zones: List[ZoneNode] = Field(default_factory=list)


class NgoUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    status: Optional[str] = Field(None, max_length=20)
    # None leaves the stored zones untouched; [] clears them
    intervention_zones: Optional[List[ZoneNode]] = None


class NgoOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    status: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    intervention_zones: List[PersistedZoneOut] = Field(default_factory=list)
