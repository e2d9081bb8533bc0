def test_create_returns_class(client, make):
    warrior = make.game_class("Warrior", "warrior")
    resp = client.post("/specializations", json={"name": "Arms", "slug": "arms", "classId": warrior["id"]})
    assert resp.status_code == 201
    data = resp.json()["data"]
    assert data["classId"] == warrior["id"]
    assert data["class"]["name"] == "Warrior"


def test_name_unique_per_class_only(client, make):
    druid = make.game_class("Druid", "druid")
    shaman = make.game_class("Shaman", "shaman")
    make.spec(druid["id"], "Restoration")
    make.spec(shaman["id"], "Restoration")

    resp = client.post("/specializations", json={"name": "Restoration", "slug": "resto", "classId": druid["id"]})
    assert resp.status_code == 409
    assert resp.json()["message"] == "A specialization with this name already exists for this class"


def test_unknown_class_is_invalid_reference(client):
    resp = client.post("/specializations", json={"name": "Arms", "slug": "arms", "classId": 77})
    assert resp.status_code == 400
    assert resp.json()["error"] == "invalid_reference"
    assert resp.json()["message"] == "The specified class does not exist"
    assert client.get("/specializations").json()["count"] == 0


def test_bulk_create_skips_existing(client, make):
    warrior = make.game_class("Warrior", "warrior")
    first = client.put(
        "/specializations",
        json={
            "classId": warrior["id"],
            "specializations": [
                {"name": "Arms", "slug": "arms"},
                {"name": "Fury", "slug": "fury"},
                {"name": "Arms", "slug": "arms"},
            ],
        },
    )
    assert first.status_code == 201
    body = first.json()
    assert body["data"]["created"] == 2
    assert body["data"]["skipped"] == 0
    assert body["data"]["total"] == 2
    assert body["message"] == "Created 2 specialization(s), skipped 0 existing"

    second = client.put(
        "/specializations",
        json={
            "classId": warrior["id"],
            "specializations": [{"name": "Arms", "slug": "arms"}, {"name": "Protection", "slug": "protection"}],
        },
    )
    data = second.json()["data"]
    assert (data["created"], data["skipped"], data["total"]) == (1, 1, 2)
    assert [s["name"] for s in data["items"]] == ["Protection"]
    assert client.get(f"/specializations?classId={warrior['id']}").json()["count"] == 3


def test_bulk_create_unknown_class(client):
    resp = client.put("/specializations", json={"classId": 5, "specializations": [{"name": "Arms", "slug": "arms"}]})
    assert resp.status_code == 400
    assert resp.json()["error"] == "invalid_reference"


def test_bulk_create_needs_entries(client, make):
    warrior = make.game_class("Warrior", "warrior")
    resp = client.put("/specializations", json={"classId": warrior["id"], "specializations": []})
    assert resp.status_code == 400
    assert resp.json()["error"] == "validation_error"


def test_move_to_class_with_same_name_conflicts(client, make):
    druid = make.game_class("Druid", "druid")
    shaman = make.game_class("Shaman", "shaman")
    make.spec(druid["id"], "Restoration")
    resto = make.spec(shaman["id"], "Restoration", "shaman-resto")

    resp = client.patch(f"/specializations/{resto['id']}", json={"classId": druid["id"]})
    assert resp.status_code == 409
    assert client.get(f"/specializations/{resto['id']}").json()["data"]["classId"] == shaman["id"]


def test_delete_blocked_by_characters(client, make):
    shaman = make.game_class("Shaman", "shaman")
    spec = make.spec(shaman["id"], "Enhancement")
    make.character(make.race("Orc", "orc")["id"], spec["id"])
    make.character(make.race("Troll", "troll")["id"], spec["id"], name="Vol'jin")

    resp = client.delete(f"/specializations/{spec['id']}")
    assert resp.status_code == 409
    assert resp.json()["message"] == "Cannot delete specialization because it has 2 associated character(s)"
    assert client.get(f"/specializations/{spec['id']}").status_code == 200


def test_delete_and_includes(client, make):
    shaman = make.game_class("Shaman", "shaman")
    spec = make.spec(shaman["id"], "Elemental")
    orc = make.race("Orc", "orc")
    make.character(orc["id"], spec["id"])

    data = client.get(f"/specializations/{spec['id']}?includeClass=true&includeCharacters=true").json()["data"]
    assert data["class"]["name"] == "Shaman"
    assert data["characters"][0]["race"]["name"] == "Orc"

    other = make.spec(shaman["id"], "Restoration")
    resp = client.delete(f"/specializations/{other['id']}")
    assert resp.status_code == 200
    assert resp.json()["data"] == {"id": other["id"], "name": "Restoration"}
