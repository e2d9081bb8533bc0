import pytest
from fastapi.testclient import TestClient

from roster.core.config import Settings
from roster.main import create_app

# sqlite:// + StaticPool in make_engine: one private database per app
TEST_DB_URL = "sqlite://"

ALLIANCE = 1
HORDE = 2


@pytest.fixture()
def settings():
    return Settings(database_url=TEST_DB_URL, log_level="WARNING")


@pytest.fixture()
def app(settings):
    return create_app(settings)


@pytest.fixture()
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def store(app):
    return app.state.store


class Builder:
    """Creates rows through the public API and fails loudly if a create is rejected."""

    def __init__(self, client, headers=None):
        self.client = client
        self.headers = headers or {}

    def _post(self, path, body):
        resp = self.client.post(path, json=body, headers=self.headers)
        assert resp.status_code == 201, resp.text
        return resp.json()["data"]

    def race(self, name="Orc", slug=None, faction_id=HORDE):
        return self._post("/races", {"name": name, "slug": slug or name.lower(), "factionId": faction_id})

    def game_class(self, name="Warrior", slug=None, **extra):
        return self._post("/classes", {"name": name, "slug": slug or name.lower(), **extra})

    def spec(self, class_id, name="Arms", slug=None):
        return self._post("/specializations", {"name": name, "slug": slug or name.lower(), "classId": class_id})

    def character(self, race_id, spec_id, name="Thrall", gender="male", **extra):
        body = {"name": name, "gender": gender, "raceId": race_id, "specializationId": spec_id, **extra}
        return self._post("/characters", body)

    def link(self, race_id, class_id):
        return self._post("/race-classes", {"mode": "single", "raceId": race_id, "classId": class_id})


@pytest.fixture()
def make(client):
    return Builder(client)
