import pytest

from roster.core.db import init_db, make_engine
from roster.core.store import ForeignKeyViolation, Store, UniqueViolation
from roster.modules.factions.models import Faction
from roster.modules.races.models import Race


@pytest.fixture()
def mem_store():
    engine = make_engine("sqlite://")
    init_db(engine)
    s = Store(engine)
    s.create(Faction, {"name": "Alliance"})
    s.create(Faction, {"name": "Horde"})
    return s


def test_create_find_update_delete(mem_store):
    race = mem_store.create(Race, {"name": "Orc", "slug": "orc", "faction_id": 2})
    assert race.id is not None

    assert mem_store.find_by_id(Race, race.id).name == "Orc"
    assert mem_store.find_first(Race, {"slug": "orc"}).id == race.id
    assert mem_store.find_first(Race, {"slug": "orc"}, exclude_id=race.id) is None
    assert mem_store.count(Race, {"faction_id": 2}) == 1

    updated = mem_store.update(Race, race.id, {"name": "Orcs"})
    assert updated.name == "Orcs"
    assert mem_store.update(Race, 999, {"name": "x"}) is None

    assert mem_store.delete(Race, race.id) is True
    assert mem_store.delete(Race, race.id) is False


def test_unique_violation(mem_store):
    with pytest.raises(UniqueViolation):
        mem_store.create(Faction, {"name": "Horde"})


def test_foreign_keys_enforced(mem_store):
    with pytest.raises(ForeignKeyViolation):
        mem_store.create(Race, {"name": "Naga", "slug": "naga", "faction_id": 99})


def test_find_many_with_list_filter(mem_store):
    mem_store.create(Race, {"name": "Orc", "slug": "orc", "faction_id": 2})
    mem_store.create(Race, {"name": "Human", "slug": "human", "faction_id": 1})
    mem_store.create(Race, {"name": "Troll", "slug": "troll", "faction_id": 2})

    rows = mem_store.find_many(Race, {"name": ["Orc", "Troll"]}, order_by=[Race.name])
    assert [r.name for r in rows] == ["Orc", "Troll"]
    assert mem_store.delete_many(Race, {"faction_id": 2}) == 2
    assert [r.name for r in mem_store.find_many(Race)] == ["Human"]


def test_create_many_skip_duplicates(mem_store):
    created = mem_store.create_many(
        Race,
        [
            {"name": "Orc", "slug": "orc", "faction_id": 2},
            {"name": "Orc", "slug": "orc", "faction_id": 2},
            {"name": "Troll", "slug": "troll", "faction_id": 2},
        ],
        skip_duplicates=True,
    )
    assert [r.name for r in created] == ["Orc", "Troll"]


def test_create_many_is_all_or_nothing(mem_store):
    with pytest.raises(UniqueViolation):
        mem_store.create_many(
            Race,
            [
                {"name": "Gnome", "slug": "gnome", "faction_id": 1},
                {"name": "Gnome", "slug": "gnome", "faction_id": 1},
            ],
        )
    assert mem_store.find_many(Race) == []
