# src/ngo_registry/schemas/zone.py
from __future__ import annotations

import uuid
from datetime import datetime
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class ZoneType(str, Enum):
    country = "country"
    region = "region"
    department = "department"
    municipality = "municipality"

    @property
    def depth(self) -> int:
        return _DEPTH[self]

    @property
    def parent_type(self) -> Optional["ZoneType"]:
        """Type a node of this type points at through parent_name (regions hang off the root implicitly)."""
        return _PARENT_TYPE.get(self)


_DEPTH = {
    ZoneType.country: 0,
    ZoneType.region: 1,
    ZoneType.department: 2,
    ZoneType.municipality: 3,
}
_PARENT_TYPE = {
    ZoneType.department: ZoneType.region,
    ZoneType.municipality: ZoneType.department,
}


def _blank_to_none(v):
    if v is None:
        return None
    if isinstance(v, str):
        v = v.strip()
        if v == "":
            return None
    return v


def new_zone_key() -> str:
    return uuid.uuid4().hex


class ZoneNode(BaseModel):
    """
    One entry of the flat editing list.

    `parent_name` is the human-readable parent reference the form works with;
    `key`/`parent_key` are session-local identifiers that let the resolver link
    a child to the exact parent node even when names repeat.
    """

    model_config = ConfigDict(str_strip_whitespace=True, frozen=True, populate_by_name=True)

    zone_type: ZoneType
    name: str = Field(..., min_length=1, max_length=150)
    # the original form payloads call this field parent_zone_id
    parent_name: Optional[str] = Field(
        None, validation_alias=AliasChoices("parent_name", "parent_zone_id")
    )
    key: str = Field(default_factory=new_zone_key)
    parent_key: Optional[str] = None

    @field_validator("parent_name", "parent_key", mode="before")
    @classmethod
    def _blank_parent(cls, v):
        return _blank_to_none(v)

    @field_validator("parent_name")
    @classmethod
    def _roots_have_no_parent(cls, v, info):
        if info.data.get("zone_type") in (ZoneType.country, ZoneType.region):
            return None
        return v

    @property
    def depth(self) -> int:
        return self.zone_type.depth

    @property
    def is_root(self) -> bool:
        return self.zone_type in (ZoneType.country, ZoneType.region)

    @property
    def identity(self) -> Tuple[str, str, Optional[str]]:
        return (self.zone_type.value, self.name, self.parent_name)

    def is_child_of(self, parent: "ZoneNode") -> bool:
        if self.zone_type.parent_type != parent.zone_type:
            return False
        # a session key, when present, wins over the (possibly repeated) name
        if self.parent_key is not None:
            return self.parent_key == parent.key
        return self.parent_name == parent.name


class ZoneToggle(BaseModel):
    """
    A single checkbox click. `parent_name` is the region for a department and
    the department for a municipality; `region` is only needed for municipalities.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    zone_type: ZoneType
    name: str = Field(..., min_length=1, max_length=150)
    parent_name: Optional[str] = None
    region: Optional[str] = None

    @field_validator("parent_name", "region", mode="before")
    @classmethod
    def _blank(cls, v):
        return _blank_to_none(v)

    @property
    def region_name(self) -> Optional[str]:
        if self.zone_type == ZoneType.department:
            return self.parent_name
        if self.zone_type == ZoneType.municipality:
            return self.region
        return None


class PersistedZoneOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    ngo_id: str
    zone_type: ZoneType
    name: str
    parent_zone_id: Optional[str] = None
    created_at: Optional[datetime] = None


# ---------- request / response bodies ----------

class ZoneListIn(BaseModel):
    zones: List[ZoneNode] = Field(default_factory=list)


class ToggleIn(ZoneListIn):
    event: ZoneToggle


class ZoneListOut(BaseModel):
    zones: List[ZoneNode]


class ValidationOut(BaseModel):
    ok: bool
    warnings: List[dict] = Field(default_factory=list)


class ReplaceOut(BaseModel):
    changed: bool
    zones: List[PersistedZoneOut]
