"""Tests for the checkbox cascade: ancestors pulled in on select, descendants dropped on deselect."""
import pytest

from src.ngo_registry.logic.cascade import (
    apply_toggle,
    find_zone,
    is_selected,
    toggle_country,
    toggle_department,
    toggle_municipality,
    toggle_region,
)
from src.ngo_registry.logic.integrity import find_duplicates, find_orphans
from src.ngo_registry.schemas.zone import ZoneToggle, ZoneType


def _tuples(zones):
    return [z.identity for z in zones]


@pytest.fixture
def goree():
    """Selection after a single click on the municipality Gorée."""
    return toggle_municipality([], "Dakar", "Dakar", "Gorée")


class TestSelect:
    def test_municipality_pulls_in_ancestors(self, goree):
        assert _tuples(goree) == [
            ("country", "Sénégal", None),
            ("region", "Dakar", None),
            ("department", "Dakar", "Dakar"),
            ("municipality", "Gorée", "Dakar"),
        ]

    def test_ancestors_are_linked_by_key(self, goree):
        _, region, dept, muni = goree
        assert dept.parent_key == region.key
        assert muni.parent_key == dept.key

    def test_second_municipality_reuses_ancestors(self, goree):
        zones = toggle_municipality(goree, "Dakar", "Dakar", "Ngor")
        assert len(zones) == 5
        assert find_duplicates(zones) == []
        assert zones[-1].parent_key == goree[2].key

    def test_department_pulls_in_region_and_country(self):
        zones = toggle_department([], "Thiès", "Mbour")
        assert _tuples(zones) == [
            ("region", "Thiès", None),
            ("country", "Sénégal", None),
            ("department", "Mbour", "Thiès"),
        ]

    def test_region_adds_root_country_once(self):
        zones = toggle_region([], "Dakar")
        zones = toggle_region(zones, "Thiès")
        assert [z.name for z in zones if z.zone_type == ZoneType.country] == ["Sénégal"]

    def test_other_country(self):
        zones = toggle_country([], "Mali")
        assert _tuples(zones) == [("country", "Mali", None)]

    def test_input_is_not_mutated(self, goree):
        before = list(goree)
        toggle_municipality(goree, "Dakar", "Pikine", "Mbao")
        toggle_region(goree, "Dakar")
        assert goree == before

    def test_selection_is_never_orphaned(self):
        zones = []
        for args in [("Dakar", "Pikine", "Mbao"), ("Fatick", "Fatick", "Patar"), ("Diourbel", "Diourbel", "Patar")]:
            zones = toggle_municipality(zones, *args)
        assert find_orphans(zones) == []
        assert find_duplicates(zones) == []


class TestDeselect:
    def test_region_drops_its_subtree(self, goree):
        zones = toggle_municipality(goree, "Thiès", "Mbour", "Saly Portudal")
        zones = toggle_region(zones, "Dakar")
        assert not is_selected(zones, ZoneType.region, "Dakar")
        assert not is_selected(zones, ZoneType.municipality, "Gorée")
        assert is_selected(zones, ZoneType.municipality, "Saly Portudal", "Mbour")

    def test_last_region_keeps_country(self, goree):
        zones = toggle_region(goree, "Dakar")
        assert _tuples(zones) == [("country", "Sénégal", None)]

    def test_department_keeps_region(self, goree):
        zones = toggle_department(goree, "Dakar", "Dakar")
        assert _tuples(zones) == [("country", "Sénégal", None), ("region", "Dakar", None)]

    def test_municipality_keeps_department(self, goree):
        zones = toggle_municipality(goree, "Dakar", "Dakar", "Gorée")
        assert len(zones) == 3
        assert find_zone(zones, ZoneType.department, "Dakar", "Dakar") is not None

    def test_root_country_clears_everything_below(self, goree):
        zones = toggle_country(goree, "Mali")
        zones = toggle_country(zones, "Sénégal")
        assert _tuples(zones) == [("country", "Mali", None)]

    def test_other_country_leaves_tree(self, goree):
        zones = toggle_country(toggle_country(goree, "Mali"), "Mali")
        assert _tuples(zones) == _tuples(goree)

    def test_repeated_department_name_only_drops_its_branch(self):
        zones = toggle_municipality([], "Alpha", "Centre", "Marché")
        zones = toggle_municipality(zones, "Beta", "Centre", "Gare")
        zones = toggle_department(zones, "Alpha", "Centre")
        assert ("department", "Centre", "Beta") in _tuples(zones)
        assert ("department", "Centre", "Alpha") not in _tuples(zones)
        assert ("municipality", "Gare", "Centre") in _tuples(zones)
        assert ("municipality", "Marché", "Centre") not in _tuples(zones)


class TestApplyToggle:
    def test_dispatches_municipality(self):
        event = ZoneToggle(zone_type="municipality", name="Mlomp", parent_name="Oussouye", region="Ziguinchor")
        zones = apply_toggle([], event)
        assert zones[-1].identity == ("municipality", "Mlomp", "Oussouye")

    def test_toggle_twice_restores(self, goree):
        event = ZoneToggle(zone_type="municipality", name="Ngor", parent_name="Dakar", region="Dakar")
        assert _tuples(apply_toggle(apply_toggle(goree, event), event)) == _tuples(goree)

    def test_municipality_without_region(self):
        with pytest.raises(ValueError):
            apply_toggle([], ZoneToggle(zone_type="municipality", name="Gorée", parent_name="Dakar"))

    def test_department_without_region(self):
        with pytest.raises(ValueError):
            apply_toggle([], ZoneToggle(zone_type="department", name="Pikine"))
