from conftest import ALLIANCE, HORDE


def test_create_race_returns_201_with_faction(client):
    resp = client.post("/races", json={"name": "Orc", "slug": "orc", "factionId": HORDE})
    assert resp.status_code == 201
    body = resp.json()
    assert body["success"] is True
    assert body["message"] == "Race created successfully"
    assert body["data"]["factionId"] == HORDE
    assert body["data"]["faction"]["name"] == "Horde"


def test_repeated_create_is_duplicate(client):
    payload = {"name": "Orc", "slug": "orc", "factionId": HORDE}
    assert client.post("/races", json=payload).status_code == 201

    resp = client.post("/races", json=payload)
    assert resp.status_code == 409
    body = resp.json()
    assert body["success"] is False
    assert body["error"] == "duplicate"
    assert body["message"] == "A race with this name already exists"


def test_duplicate_slug_reported_separately(client, make):
    make.race("Orc", "orc")
    resp = client.post("/races", json={"name": "Mag'har Orc", "slug": "orc", "factionId": HORDE})
    assert resp.status_code == 409
    assert resp.json()["message"] == "A race with this slug already exists"


def test_unknown_faction_writes_nothing(client):
    resp = client.post("/races", json={"name": "Orc", "slug": "orc", "factionId": 99})
    assert resp.status_code == 400
    assert resp.json()["error"] == "invalid_reference"
    assert resp.json()["message"] == "The specified faction does not exist"
    assert client.get("/races").json()["count"] == 0


def test_slug_must_be_kebab_case(client):
    resp = client.post("/races", json={"name": "Night Elf", "slug": "Night_Elf", "factionId": ALLIANCE})
    assert resp.status_code == 400
    body = resp.json()
    assert body["error"] == "validation_error"
    assert any(d["field"] == "slug" for d in body["details"])


def test_name_is_trimmed(client):
    resp = client.post("/races", json={"name": "  Night Elf  ", "slug": "night-elf", "factionId": ALLIANCE})
    assert resp.status_code == 201
    assert resp.json()["data"]["name"] == "Night Elf"


def test_read_back_matches_input(client, make):
    race = make.race("Night Elf", "night-elf", ALLIANCE)
    data = client.get(f"/races/{race['id']}").json()["data"]
    assert data == {"id": race["id"], "name": "Night Elf", "slug": "night-elf", "factionId": ALLIANCE}


def test_invalid_ids_are_400_not_404(client):
    for raw in ("abc", "0", "-1", "1.5"):
        resp = client.get(f"/races/{raw}")
        assert resp.status_code == 400, raw
        assert resp.json()["error"] == "invalid_id"
        assert resp.json()["message"] == "Race ID must be a positive integer"


def test_missing_race_is_404(client):
    resp = client.get("/races/999")
    assert resp.status_code == 404
    assert resp.json()["error"] == "not_found"
    assert resp.json()["message"] == "Race with ID 999 does not exist"


def test_patch_and_put_are_partial(client, make):
    race = make.race("Orc", "orc")

    resp = client.patch(f"/races/{race['id']}", json={"name": "Orcs"})
    assert resp.status_code == 200
    assert resp.json()["data"]["name"] == "Orcs"
    assert resp.json()["data"]["slug"] == "orc"

    resp = client.put(f"/races/{race['id']}", json={"slug": "orcs"})
    assert resp.status_code == 200
    assert resp.json()["data"] == {
        "id": race["id"],
        "name": "Orcs",
        "slug": "orcs",
        "factionId": HORDE,
        "faction": {"id": HORDE, "name": "Horde"},
    }


def test_update_keeping_own_name_is_not_a_duplicate(client, make):
    race = make.race("Orc", "orc")
    resp = client.patch(f"/races/{race['id']}", json={"name": "Orc", "slug": "orc"})
    assert resp.status_code == 200


def test_update_to_taken_name_conflicts(client, make):
    make.race("Orc", "orc")
    troll = make.race("Troll", "troll")
    resp = client.patch(f"/races/{troll['id']}", json={"name": "Orc"})
    assert resp.status_code == 409
    assert resp.json()["message"] == "A race with this name already exists"


def test_update_unknown_faction_leaves_row_unchanged(client, make):
    race = make.race("Orc", "orc")
    resp = client.patch(f"/races/{race['id']}", json={"factionId": 42})
    assert resp.status_code == 400
    assert resp.json()["error"] == "invalid_reference"
    assert client.get(f"/races/{race['id']}").json()["data"]["factionId"] == HORDE


def test_explicit_null_is_rejected(client, make):
    race = make.race("Orc", "orc")
    resp = client.patch(f"/races/{race['id']}", json={"name": None})
    assert resp.status_code == 400
    assert resp.json()["error"] == "validation_error"


def test_update_missing_race_is_404(client):
    resp = client.patch("/races/321", json={"name": "Ghost"})
    assert resp.status_code == 404


def test_delete_blocked_by_characters(client, make):
    race = make.race("Orc", "orc")
    klass = make.game_class("Shaman", "shaman")
    spec = make.spec(klass["id"], "Enhancement")
    make.character(race["id"], spec["id"])

    resp = client.delete(f"/races/{race['id']}")
    assert resp.status_code == 409
    body = resp.json()
    assert body["error"] == "dependency_conflict"
    assert body["message"] == "Cannot delete race because it has 1 associated character(s)"
    assert body["details"] == {"relation": "character(s)", "count": 1}
    assert client.get(f"/races/{race['id']}").status_code == 200


def test_delete_cascades_race_classes(client, make):
    race = make.race("Orc", "orc")
    warrior = make.game_class("Warrior", "warrior")
    shaman = make.game_class("Shaman", "shaman")
    make.link(race["id"], warrior["id"])
    make.link(race["id"], shaman["id"])

    resp = client.delete(f"/races/{race['id']}")
    assert resp.status_code == 200
    assert resp.json()["data"] == {"id": race["id"], "name": "Orc"}
    assert resp.json()["message"] == "Race deleted successfully"

    listed = client.get(f"/race-classes?raceId={race['id']}").json()
    assert listed["data"] == []
    assert listed["count"] == 0
    assert client.get(f"/races/{race['id']}").status_code == 404


def test_list_filters_orders_and_includes(client, make):
    make.race("Troll", "troll", HORDE)
    human = make.race("Human", "human", ALLIANCE)
    orc = make.race("Orc", "orc", HORDE)
    warrior = make.game_class("Warrior", "warrior")
    make.link(orc["id"], warrior["id"])

    listed = client.get(f"/races?factionId={HORDE}").json()
    assert [r["name"] for r in listed["data"]] == ["Orc", "Troll"]
    assert listed["count"] == 2

    every = client.get("/races").json()["data"]
    assert [r["name"] for r in every] == ["Human", "Orc", "Troll"]
    assert "faction" not in every[0]

    detailed = client.get(f"/races/{orc['id']}?includeFaction=true&includeClasses=true&includeCharacters=true")
    data = detailed.json()["data"]
    assert data["faction"]["name"] == "Horde"
    assert [rc["class"]["name"] for rc in data["classes"]] == ["Warrior"]
    assert data["characters"] == []

    plain = client.get(f"/races/{human['id']}?includeFaction=yes").json()["data"]
    assert "faction" not in plain


def test_bad_query_value_is_validation_error(client):
    resp = client.get("/races?factionId=horde")
    assert resp.status_code == 400
    assert resp.json()["error"] == "validation_error"
    assert resp.json()["details"][0]["field"] == "factionId"


def test_oversized_and_non_ascii_path_ids(client):
    for raw in ("99999999999999999999999", str(2**63), "%C2%B2"):
        resp = client.get(f"/races/{raw}")
        assert resp.status_code == 400, raw
        assert resp.json()["error"] == "invalid_id"
    assert client.delete("/races/99999999999999999999999").status_code == 400


def test_oversized_ids_in_body_and_query(client, make):
    resp = client.post("/races", json={"name": "Orc", "slug": "orc", "factionId": 2**70})
    assert resp.status_code == 400
    assert resp.json()["details"][0]["field"] == "factionId"

    race = make.race("Orc", "orc")
    resp = client.patch(f"/races/{race['id']}", json={"factionId": 2**63})
    assert resp.status_code == 400
    assert client.get(f"/races/{race['id']}").json()["data"]["factionId"] == HORDE

    assert client.get(f"/races?factionId={2**70}").status_code == 400


def test_failed_delete_keeps_cascaded_rows(client, store, make, monkeypatch):
    race = make.race("Orc", "orc")
    klass = make.game_class("Shaman", "shaman")
    make.link(race["id"], klass["id"])
    spec = make.spec(klass["id"], "Enhancement")
    make.character(race["id"], spec["id"])
    # a character lands between the dependent count and the delete
    monkeypatch.setattr(store, "count", lambda *args, **kwargs: 0)

    resp = client.delete(f"/races/{race['id']}")
    assert resp.status_code == 409
    assert resp.json()["error"] == "dependency_conflict"
    assert client.get(f"/races/{race['id']}").status_code == 200
    assert client.get(f"/race-classes?raceId={race['id']}").json()["count"] == 1
