# src/ngo_registry/utils/errors.py
from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Tuple

ZoneTuple = Tuple[str, str, Optional[str]]


class ZoneError(Exception):
    """Base class for intervention-zone failures surfaced to the caller."""

    status_code: int = 400

    def to_payload(self) -> Dict[str, Any]:
        return {}


class DuplicateZoneError(ZoneError):
    """The same (zone_type, name, parent_name) tuple was submitted twice."""

    status_code = 409

    def __init__(self, duplicates: Sequence[ZoneTuple]):
        self.duplicates: List[ZoneTuple] = list(duplicates)
        listed = ", ".join(f"{t}:{n} (parent={p})" for t, n, p in self.duplicates)
        super().__init__(f"Duplicate intervention zones: {listed}")

    def to_payload(self) -> Dict[str, Any]:
        return {
            "conflicts": [
                {"zone_type": t, "name": n, "parent_name": p} for t, n, p in self.duplicates
            ]
        }


class UnresolvedParentWarning(UserWarning):
    """
    A node whose declared parent is absent from the submitted list.
    Lenient mode logs it and persists the node as a root.
    """

    def __init__(self, zone_type: str, name: str, parent_name: Optional[str], reason: str):
        self.zone_type = zone_type
        self.name = name
        self.parent_name = parent_name
        self.reason = reason
        super().__init__(f"{zone_type} '{name}': {reason}")

    def as_dict(self) -> Dict[str, Any]:
        return {
            "zone_type": self.zone_type,
            "name": self.name,
            "parent_name": self.parent_name,
            "reason": self.reason,
        }


class UnresolvedParentError(ZoneError):
    """Strict-mode counterpart of UnresolvedParentWarning."""

    status_code = 422

    def __init__(self, orphans: Sequence[UnresolvedParentWarning]):
        self.orphans = list(orphans)
        super().__init__("Unresolved parent zones: " + "; ".join(str(o) for o in self.orphans))

    def to_payload(self) -> Dict[str, Any]:
        return {"orphans": [o.as_dict() for o in self.orphans]}


class UnknownZoneError(ZoneError):
    """A toggle named a zone that the catalog does not offer."""

    status_code = 422

    def __init__(self, zone_type: str, name: str, scope: Optional[str] = None):
        self.zone_type = zone_type
        self.name = name
        self.scope = scope
        where = f" in {scope}" if scope else ""
        super().__init__(f"Unknown {zone_type} '{name}'{where}")

    def to_payload(self) -> Dict[str, Any]:
        return {"zone_type": self.zone_type, "name": self.name, "scope": self.scope}


class PersistenceBatchError(ZoneError):
    """A storage batch (delete or one of the three insert passes) failed."""

    status_code = 500

    def __init__(self, stage: str, ngo_id: str, cause: Exception):
        self.stage = stage
        self.ngo_id = ngo_id
        self.cause = cause
        super().__init__(f"Zone {stage} failed for NGO {ngo_id}: {cause}")

    def to_payload(self) -> Dict[str, Any]:
        return {"stage": self.stage}
