"""Tests for the zone node model and the catalog lookups used by the toggle endpoint."""
import pytest
from pydantic import ValidationError

from src.ngo_registry.schemas.zone import ZoneNode, ZoneToggle, ZoneType
from src.ngo_registry.utils.errors import UnknownZoneError
from src.ngo_registry.utils.zone_catalog import (
    SENEGAL_REGIONS,
    WEST_AFRICA_COUNTRIES,
    catalog_tree,
    check_toggle_known,
    region_for_department,
)


class TestZoneType:
    def test_depths(self):
        assert [t.depth for t in ZoneType] == [0, 1, 2, 3]

    def test_parent_types(self):
        assert ZoneType.country.parent_type is None
        assert ZoneType.region.parent_type is None
        assert ZoneType.department.parent_type == ZoneType.region
        assert ZoneType.municipality.parent_type == ZoneType.department


class TestZoneNode:
    def test_parent_zone_id_alias(self):
        """Form payloads still send the parent as parent_zone_id."""
        node = ZoneNode.model_validate(
            {"zone_type": "department", "name": "Pikine", "parent_zone_id": "Dakar"}
        )
        assert node.parent_name == "Dakar"

    def test_blank_parent_is_none(self):
        node = ZoneNode(zone_type="municipality", name="Gorée", parent_name="   ")
        assert node.parent_name is None

    def test_roots_drop_parent(self):
        node = ZoneNode(zone_type="region", name="Dakar", parent_name="Sénégal")
        assert node.parent_name is None
        assert node.is_root

    def test_names_are_stripped(self):
        node = ZoneNode(zone_type="country", name="  Mali ")
        assert node.name == "Mali"

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            ZoneNode(zone_type="country", name="")

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            ZoneNode(zone_type="province", name="Dakar")

    def test_nodes_are_immutable(self):
        node = ZoneNode(zone_type="country", name="Mali")
        with pytest.raises(ValidationError):
            node.name = "Niger"

    def test_each_node_gets_its_own_key(self):
        a = ZoneNode(zone_type="country", name="Mali")
        b = ZoneNode(zone_type="country", name="Mali")
        assert a.key != b.key
        assert a.identity == b.identity

    def test_is_child_of_prefers_key(self):
        alpha = ZoneNode(zone_type="department", name="Centre", parent_name="Alpha")
        beta = ZoneNode(zone_type="department", name="Centre", parent_name="Beta")
        muni = ZoneNode(
            zone_type="municipality", name="Marché", parent_name="Centre", parent_key=beta.key
        )
        assert muni.is_child_of(beta)
        assert not muni.is_child_of(alpha)

    def test_is_child_of_falls_back_to_name(self):
        dept = ZoneNode(zone_type="department", name="Pikine", parent_name="Dakar")
        muni = ZoneNode(zone_type="municipality", name="Mbao", parent_name="Pikine")
        assert muni.is_child_of(dept)

    def test_is_child_of_checks_type(self):
        region = ZoneNode(zone_type="region", name="Dakar")
        muni = ZoneNode(zone_type="municipality", name="Gorée", parent_name="Dakar")
        assert not muni.is_child_of(region)


class TestCatalog:
    def test_tree_shape(self):
        tree = catalog_tree()
        assert "Sénégal" in tree["countries"]
        assert [r["name"] for r in tree["regions"]] == SENEGAL_REGIONS
        dakar = tree["regions"][0]
        assert dakar["name"] == "Dakar"
        assert "Pikine" in [d["name"] for d in dakar["departments"]]

    def test_tree_is_a_copy(self):
        tree = catalog_tree()
        tree["countries"].append("Atlantide")
        assert "Atlantide" not in WEST_AFRICA_COUNTRIES

    def test_region_for_department(self):
        assert region_for_department("Oussouye") == "Ziguinchor"
        assert region_for_department("Nowhere") is None

    def test_known_toggles_pass(self):
        check_toggle_known(ZoneToggle(zone_type="country", name="Mali"))
        check_toggle_known(ZoneToggle(zone_type="region", name="Dakar"))
        check_toggle_known(ZoneToggle(zone_type="department", name="Pikine", parent_name="Dakar"))
        check_toggle_known(ZoneToggle(
            zone_type="municipality", name="Mlomp", parent_name="Oussouye", region="Ziguinchor",
        ))

    def test_unknown_country(self):
        with pytest.raises(UnknownZoneError) as exc:
            check_toggle_known(ZoneToggle(zone_type="country", name="France"))
        assert exc.value.status_code == 422

    def test_department_in_wrong_region(self):
        with pytest.raises(UnknownZoneError) as exc:
            check_toggle_known(ZoneToggle(zone_type="department", name="Pikine", parent_name="Thiès"))
        assert exc.value.scope == "Thiès"

    def test_municipality_in_wrong_department(self):
        with pytest.raises(UnknownZoneError) as exc:
            check_toggle_known(ZoneToggle(
                zone_type="municipality", name="Gorée", parent_name="Pikine", region="Dakar",
            ))
        assert exc.value.to_payload() == {"zone_type": "municipality", "name": "Gorée", "scope": "Pikine"}
