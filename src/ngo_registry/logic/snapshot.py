# src/ngo_registry/logic/snapshot.py
"""Conversions between persisted zone rows and the flat editing list."""
from __future__ import annotations

import json
from collections import Counter
from typing import Dict, Iterable, List, Optional, Sequence, Set

from src.ngo_registry.schemas.zone import ZoneNode, ZoneType

_SEP = " - "


def disambiguated_name(name: str, parent_name: Optional[str]) -> str:
    """'Centre' under 'Alpha' is stored as 'Alpha - Centre'."""
    if not parent_name:
        return name
    return f"{parent_name}{_SEP}{name}"


def strip_disambiguation(stored: str, parent_name: Optional[str]) -> str:
    prefix = f"{parent_name}{_SEP}" if parent_name else None
    if prefix and stored.startswith(prefix) and len(stored) > len(prefix):
        return stored[len(prefix):]
    return stored


def stored_municipality_names(municipalities: Sequence[ZoneNode]) -> List[str]:
    """
    Names the municipalities are written under, in input order. A name used
    under several departments is prefixed with its department for every
    member of the group.
    """
    counts = Counter(z.name for z in municipalities)
    return [
        disambiguated_name(z.name, z.parent_name) if counts[z.name] > 1 else z.name
        for z in municipalities
    ]


def rows_to_nodes(rows: Iterable) -> List[ZoneNode]:
    """
    Rebuild the flat editing list from persisted rows (anything with
    id/zone_type/name/parent_zone_id). Parent names come from joining on id;
    storage ids become the session keys.
    """
    rows = list(rows)
    by_id: Dict[str, object] = {r.id: r for r in rows}

    def _parent_name(r) -> Optional[str]:
        parent = by_id.get(r.parent_zone_id) if r.parent_zone_id else None
        if parent is None or ZoneType(r.zone_type).parent_type is None:
            return None
        return parent.name

    # a prefix was added by the resolver only when the bare name sits under
    # more than one department; a lone "Alpha - Centre" is a real name
    renamed: Dict[str, Set[Optional[str]]] = {}
    for r in rows:
        if ZoneType(r.zone_type) == ZoneType.municipality:
            parent_name = _parent_name(r)
            bare = strip_disambiguation(r.name, parent_name)
            if bare != r.name:
                renamed.setdefault(bare, set()).add(parent_name)

    nodes: List[ZoneNode] = []
    for r in rows:
        zone_type = ZoneType(r.zone_type)
        parent_name = _parent_name(r)
        name = r.name
        if zone_type == ZoneType.municipality:
            bare = strip_disambiguation(name, parent_name)
            if len(renamed.get(bare, ())) > 1:
                name = bare
        nodes.append(ZoneNode(
            zone_type=zone_type,
            name=name,
            parent_name=parent_name,
            key=r.id,
            parent_key=r.parent_zone_id if r.parent_zone_id in by_id else None,
        ))
    return nodes


def canonical_zones(zones: Sequence[ZoneNode]) -> str:
    """Order-independent serialization used to decide whether an update writes anything."""
    items = sorted(
        (z.depth, z.name, z.parent_name or "", z.zone_type.value) for z in zones
    )
    return json.dumps(
        [[t, n, p or None] for _, n, p, t in items],
        ensure_ascii=False,
    )
