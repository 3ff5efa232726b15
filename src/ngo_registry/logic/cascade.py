# src/ngo_registry/logic/cascade.py
"""
Checkbox cascade for the intervention-zone step.

Every function takes the current flat list and returns a new one; inputs are
never mutated. Selecting a node pulls in its missing ancestors, deselecting a
node drops its descendants but never its ancestors.
"""
from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from src.ngo_registry.config import settings
from src.ngo_registry.schemas.zone import ZoneNode, ZoneToggle, ZoneType

Zones = Sequence[ZoneNode]


def _matches(node: ZoneNode, zone_type: ZoneType, name: str, parent_name: Optional[str] = None) -> bool:
    if node.zone_type != zone_type or node.name != name:
        return False
    # parent only narrows the match for departments and municipalities
    if parent_name is None or node.is_root:
        return True
    return node.parent_name == parent_name


def find_zone(
    zones: Zones, zone_type: ZoneType, name: str, parent_name: Optional[str] = None
) -> Optional[ZoneNode]:
    for node in zones:
        if _matches(node, zone_type, name, parent_name):
            return node
    return None


def find_all(
    zones: Zones, zone_type: ZoneType, name: str, parent_name: Optional[str] = None
) -> List[ZoneNode]:
    return [node for node in zones if _matches(node, zone_type, name, parent_name)]


def is_selected(
    zones: Zones, zone_type: ZoneType, name: str, parent_name: Optional[str] = None
) -> bool:
    return find_zone(zones, zone_type, name, parent_name) is not None


def _ensure(
    zones: List[ZoneNode],
    zone_type: ZoneType,
    name: str,
    parent: Optional[ZoneNode] = None,
) -> ZoneNode:
    """Append the node unless it is already there; returns the node in the list."""
    parent_name = parent.name if parent is not None else None
    existing = find_zone(zones, zone_type, name, parent_name)
    if existing is not None:
        return existing
    node = ZoneNode(
        zone_type=zone_type,
        name=name,
        parent_name=parent_name,
        parent_key=parent.key if parent is not None else None,
    )
    zones.append(node)
    return node


def _children(zones: Iterable[ZoneNode], parents: Sequence[ZoneNode]) -> List[ZoneNode]:
    return [z for z in zones if any(z.is_child_of(p) for p in parents)]


def _without(zones: Iterable[ZoneNode], removed: Sequence[ZoneNode]) -> List[ZoneNode]:
    gone = {id(z) for z in removed}
    return [z for z in zones if id(z) not in gone]


# ---------- toggles ----------

def toggle_country(zones: Zones, country: str, root_country: Optional[str] = None) -> List[ZoneNode]:
    root = root_country or settings.ZONE_ROOT_COUNTRY
    current = list(zones)
    nodes = find_all(current, ZoneType.country, country)

    if not nodes:
        current.append(ZoneNode(zone_type=ZoneType.country, name=country))
        return current

    if country == root:
        # the whole sub-level tree belongs to the root country
        return [z for z in _without(current, nodes) if z.zone_type == ZoneType.country]
    return _without(current, nodes)


def toggle_region(zones: Zones, region: str, root_country: Optional[str] = None) -> List[ZoneNode]:
    root = root_country or settings.ZONE_ROOT_COUNTRY
    current = list(zones)
    nodes = find_all(current, ZoneType.region, region)

    if nodes:
        departments = _children(current, nodes)
        municipalities = _children(current, departments)
        return _without(current, [*nodes, *departments, *municipalities])

    current.append(ZoneNode(zone_type=ZoneType.region, name=region))
    _ensure(current, ZoneType.country, root)
    return current


def toggle_department(
    zones: Zones, region: str, department: str, root_country: Optional[str] = None
) -> List[ZoneNode]:
    root = root_country or settings.ZONE_ROOT_COUNTRY
    current = list(zones)
    nodes = find_all(current, ZoneType.department, department, region)

    if nodes:
        return _without(current, [*nodes, *_children(current, nodes)])

    region_node = _ensure(current, ZoneType.region, region)
    _ensure(current, ZoneType.country, root)
    _ensure(current, ZoneType.department, department, parent=region_node)
    return current


def toggle_municipality(
    zones: Zones,
    region: str,
    department: str,
    municipality: str,
    root_country: Optional[str] = None,
) -> List[ZoneNode]:
    root = root_country or settings.ZONE_ROOT_COUNTRY
    current = list(zones)
    nodes = find_all(current, ZoneType.municipality, municipality, department)

    if nodes:
        return _without(current, nodes)

    _ensure(current, ZoneType.country, root)
    region_node = _ensure(current, ZoneType.region, region)
    dept_node = _ensure(current, ZoneType.department, department, parent=region_node)
    _ensure(current, ZoneType.municipality, municipality, parent=dept_node)
    return current


def apply_toggle(zones: Zones, event: ZoneToggle, root_country: Optional[str] = None) -> List[ZoneNode]:
    """Dispatch a checkbox event to the matching toggle."""
    if event.zone_type == ZoneType.country:
        return toggle_country(zones, event.name, root_country)
    if event.zone_type == ZoneType.region:
        return toggle_region(zones, event.name, root_country)

    if not event.parent_name or not event.region_name:
        raise ValueError(f"{event.zone_type.value} toggle needs its region and parent")

    if event.zone_type == ZoneType.department:
        return toggle_department(zones, event.parent_name, event.name, root_country)
    return toggle_municipality(zones, event.region_name, event.parent_name, event.name, root_country)
