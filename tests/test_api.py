"""End-to-end tests through the FastAPI routers with the database dependency swapped for SQLite."""
import pytest

pytestmark = pytest.mark.asyncio

DAKAR = [
    {"zone_type": "country", "name": "Sénégal"},
    {"zone_type": "region", "name": "Dakar"},
    {"zone_type": "department", "name": "Pikine", "parent_name": "Dakar"},
    {"zone_type": "municipality", "name": "Mbao", "parent_name": "Pikine"},
]


async def _create_ngo(client, zones=None, name="Enda Tiers Monde"):
    resp = await client.post("/api/ngos", json={"name": name, "intervention_zones": zones or []})
    assert resp.status_code == 201, resp.text
    return resp.json()


class TestZoneEndpoints:
    async def test_catalog(self, client):
        resp = await client.get("/api/zones/catalog")
        assert resp.status_code == 200
        assert "Sénégal" in resp.json()["countries"]
        assert resp.headers["X-Frame-Options"] == "DENY"
        assert resp.headers["Cache-Control"] == "no-store"

    async def test_toggle_fills_region_from_catalog(self, client):
        resp = await client.post("/api/zones/toggle", json={
            "zones": [],
            "event": {"zone_type": "municipality", "name": "Mlomp", "parent_name": "Oussouye"},
        })
        assert resp.status_code == 200, resp.text
        zones = resp.json()["zones"]
        assert [(z["zone_type"], z["name"], z["parent_name"]) for z in zones] == [
            ("country", "Sénégal", None),
            ("region", "Ziguinchor", None),
            ("department", "Oussouye", "Ziguinchor"),
            ("municipality", "Mlomp", "Oussouye"),
        ]

    async def test_toggle_round_trips_keys(self, client):
        first = await client.post("/api/zones/toggle", json={
            "zones": [], "event": {"zone_type": "department", "name": "Pikine", "parent_name": "Dakar"},
        })
        zones = first.json()["zones"]
        second = await client.post("/api/zones/toggle", json={
            "zones": zones, "event": {"zone_type": "region", "name": "Dakar"},
        })
        assert [z["name"] for z in second.json()["zones"]] == ["Sénégal"]

    async def test_toggle_unknown_zone(self, client):
        resp = await client.post("/api/zones/toggle", json={
            "zones": [], "event": {"zone_type": "department", "name": "Mbour", "parent_name": "Dakar"},
        })
        assert resp.status_code == 422
        body = resp.json()
        assert body["error_type"] == "UnknownZoneError"
        assert body["scope"] == "Dakar"

    async def test_validate_ok(self, client):
        resp = await client.post("/api/zones/validate", json={"zones": DAKAR})
        assert resp.status_code == 200
        assert resp.json() == {"ok": True, "warnings": []}

    async def test_validate_duplicates(self, client):
        resp = await client.post("/api/zones/validate", json={"zones": DAKAR + [DAKAR[2]]})
        assert resp.status_code == 409
        assert resp.json()["conflicts"] == [
            {"zone_type": "department", "name": "Pikine", "parent_name": "Dakar"}
        ]

    async def test_bad_zone_type(self, client):
        resp = await client.post("/api/zones/validate", json={"zones": [{"zone_type": "province", "name": "X"}]})
        assert resp.status_code == 422
        assert resp.json()["validation_errors"]


class TestNgoEndpoints:
    async def test_create_with_zones(self, client):
        ngo = await _create_ngo(client, DAKAR)
        assert ngo["status"] == "active"
        assert [z["name"] for z in ngo["intervention_zones"]] == ["Sénégal", "Dakar", "Pikine", "Mbao"]

    async def test_create_with_duplicates_creates_nothing(self, client):
        resp = await client.post("/api/ngos", json={"name": "Doublon", "intervention_zones": DAKAR + DAKAR[:1]})
        assert resp.status_code == 409
        listing = await client.get("/api/ngos")
        assert listing.json()["total"] == 0

    async def test_list_and_search(self, client):
        await _create_ngo(client, name="Enda Tiers Monde")
        await _create_ngo(client, name="Tostan")
        resp = await client.get("/api/ngos", params={"q": "tostan"})
        body = resp.json()
        assert body["total"] == 1
        assert body["rows"][0]["name"] == "Tostan"

    async def test_flat_read_path(self, client):
        ngo = await _create_ngo(client, DAKAR)
        resp = await client.get(f"/api/ngos/{ngo['id']}/zones", params={"flat": True})
        flat = [(z["zone_type"], z["name"], z["parent_name"]) for z in resp.json()["zones"]]
        assert flat == [(z["zone_type"], z["name"], z.get("parent_name")) for z in DAKAR]

    async def test_replace_zones(self, client):
        ngo = await _create_ngo(client, DAKAR)
        url = f"/api/ngos/{ngo['id']}/zones"

        same = await client.put(url, json={"zones": list(reversed(DAKAR))})
        assert same.json()["changed"] is False

        more = DAKAR + [{"zone_type": "municipality", "name": "Mbao", "parent_name": "Rufisque"},
                        {"zone_type": "department", "name": "Rufisque", "parent_name": "Dakar"}]
        changed = await client.put(url, json={"zones": more})
        assert changed.status_code == 200
        body = changed.json()
        assert body["changed"] is True
        assert sorted(z["name"] for z in body["zones"] if z["zone_type"] == "municipality") == [
            "Pikine - Mbao",
            "Rufisque - Mbao",
        ]

    async def test_post_zones_twice(self, client):
        ngo = await _create_ngo(client)
        url = f"/api/ngos/{ngo['id']}/zones"
        assert (await client.post(url, json={"zones": DAKAR})).status_code == 201
        assert (await client.post(url, json={"zones": DAKAR})).status_code == 409

    async def test_patch(self, client):
        ngo = await _create_ngo(client, DAKAR)
        resp = await client.patch(
            f"/api/ngos/{ngo['id']}",
            json={"name": "Enda Sénégal", "status": " Suspended "},
            headers={"X-Actor": "auditor"},
        )
        body = resp.json()
        assert body["name"] == "Enda Sénégal"
        assert body["status"] == "suspended"
        assert len(body["intervention_zones"]) == 4

    async def test_delete(self, client):
        ngo = await _create_ngo(client, DAKAR)
        assert (await client.delete(f"/api/ngos/{ngo['id']}")).status_code == 200
        resp = await client.get(f"/api/ngos/{ngo['id']}")
        assert resp.status_code == 404
        assert resp.json()["message"] == "The requested resource was not found."

    async def test_unknown_ngo_zones(self, client):
        resp = await client.get("/api/ngos/does-not-exist/zones")
        assert resp.status_code == 404
