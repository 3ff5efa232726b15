# src/ngo_registry/logic/integrity.py
from __future__ import annotations

import logging
from collections import Counter
from typing import List, Optional, Sequence

from src.ngo_registry.config import settings
from src.ngo_registry.logic.snapshot import stored_municipality_names
from src.ngo_registry.schemas.zone import ZoneNode, ZoneType
from src.ngo_registry.utils.errors import (
    DuplicateZoneError,
    UnresolvedParentError,
    UnresolvedParentWarning,
)

logger = logging.getLogger(__name__)


def find_duplicates(zones: Sequence[ZoneNode]) -> list:
    counts = Counter(z.identity for z in zones)
    return [identity for identity, n in counts.items() if n > 1]


def find_name_clashes(zones: Sequence[ZoneNode]) -> list:
    """
    Distinct entries that would be stored under the same (zone_type, name):
    departments sharing a name across regions, and municipalities whose
    department-prefixed name meets another municipality's.
    """
    unique = list({z.identity: z for z in zones}.values())
    clashes = []

    departments = [z for z in unique if z.zone_type == ZoneType.department]
    dept_counts = Counter(z.name for z in departments)
    clashes += [z.identity for z in departments if dept_counts[z.name] > 1]

    municipalities = [z for z in unique if z.zone_type == ZoneType.municipality]
    stored = stored_municipality_names(municipalities)
    stored_counts = Counter(stored)
    clashes += [z.identity for z, name in zip(municipalities, stored) if stored_counts[name] > 1]
    return clashes


def find_orphans(zones: Sequence[ZoneNode], root_country: Optional[str] = None) -> List[UnresolvedParentWarning]:
    """Invariants 1-3: every region needs the root country, every child its parent."""
    root = root_country or settings.ZONE_ROOT_COUNTRY
    names = {t: set() for t in ZoneType}
    for z in zones:
        names[z.zone_type].add(z.name)

    orphans: List[UnresolvedParentWarning] = []
    for z in zones:
        if z.zone_type == ZoneType.region and root not in names[ZoneType.country]:
            orphans.append(UnresolvedParentWarning(
                z.zone_type.value, z.name, root, f"country '{root}' is not selected",
            ))
            continue

        parent_type = z.zone_type.parent_type
        if parent_type is None:
            continue
        if z.parent_name is None:
            orphans.append(UnresolvedParentWarning(
                z.zone_type.value, z.name, None, f"no parent {parent_type.value} given",
            ))
        elif z.parent_name not in names[parent_type]:
            orphans.append(UnresolvedParentWarning(
                z.zone_type.value, z.name, z.parent_name,
                f"parent {parent_type.value} '{z.parent_name}' is not selected",
            ))
    return orphans


def check_integrity(
    zones: Sequence[ZoneNode],
    mode: Optional[str] = None,
    root_country: Optional[str] = None,
) -> List[UnresolvedParentWarning]:
    """
    Gate run before any zone write.

    Duplicated (zone_type, name, parent_name) tuples, and distinct tuples that
    would collide in storage, always reject the whole submission. Orphans are
    returned (and logged) in lenient mode, and raise UnresolvedParentError in
    strict mode.
    """
    duplicates = list(dict.fromkeys(find_duplicates(zones) + find_name_clashes(zones)))
    if duplicates:
        logger.error("Rejecting zone list with %d conflicting tuple(s): %s", len(duplicates), duplicates)
        raise DuplicateZoneError(duplicates)

    orphans = find_orphans(zones, root_country)
    if orphans and (mode or settings.ZONE_RESOLUTION_MODE) == "strict":
        raise UnresolvedParentError(orphans)

    for orphan in orphans:
        logger.warning("Unresolved parent, zone will be stored as a root: %s", orphan)
    return orphans
