from __future__ import annotations

from typing import Any, Dict, List, Optional

from roster.core.protocol import Dependent, Include, MutationProtocol, Reference, Resource, UniqueRule
from roster.core.store import Store
from roster.modules.characters.models import Character
from roster.modules.classes.models import GameClass
from roster.modules.factions.models import Faction
from roster.modules.race_classes.models import RaceClass

from .models import Race
from .schemas import RaceCreateIn, RacePatchIn

RACES = Resource(
    name="race",
    label="Race",
    model=Race,
    create_schema=RaceCreateIn,
    update_schema=RacePatchIn,
    unique=(
        UniqueRule(("name",), "A race with this name already exists"),
        UniqueRule(("slug",), "A race with this slug already exists"),
    ),
    references=(Reference("faction_id", Faction, "faction"),),
    dependents=(
        Dependent(Character, "race_id", "character(s)"),
        Dependent(RaceClass, "race_id", "race-class relationship(s)", cascade=True),
    ),
    duplicate_message="Race with this name or slug already exists",
)

INCLUDE_FACTION = Include("faction", Faction, "faction_id")
INCLUDE_CLASSES = Include(
    "classes", RaceClass, "race_id", many=True, nested=(Include("class", GameClass, "class_id"),)
)
INCLUDE_CHARACTERS = Include("characters", Character, "race_id", many=True, order_by=("name",))


def race_includes(*, faction: bool = False, classes: bool = False, characters: bool = False) -> List[Include]:
    out: List[Include] = []
    if faction:
        out.append(INCLUDE_FACTION)
    if classes:
        out.append(INCLUDE_CLASSES)
    if characters:
        out.append(INCLUDE_CHARACTERS)
    return out


def list_races(store: Store, *, faction_id: Optional[int] = None, includes: List[Include] = ()) -> List[Dict[str, Any]]:
    filters = {"faction_id": faction_id} if faction_id is not None else None
    return MutationProtocol(store, RACES).list(filters, order_by=[Race.name], includes=includes)


def get_race(store: Store, race_id: Any, includes: List[Include] = ()) -> Dict[str, Any]:
    return MutationProtocol(store, RACES).read(race_id, includes)


def create_race(store: Store, body: Any) -> Dict[str, Any]:
    return MutationProtocol(store, RACES).create(body, includes=[INCLUDE_FACTION])


def update_race(store: Store, race_id: Any, body: Any) -> Dict[str, Any]:
    return MutationProtocol(store, RACES).update(race_id, body, includes=[INCLUDE_FACTION])


def delete_race(store: Store, race_id: Any) -> Dict[str, Any]:
    return MutationProtocol(store, RACES).delete(race_id)
