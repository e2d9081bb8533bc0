from __future__ import annotations

from typing import Any, Dict, List, Optional

from roster.core.protocol import Include, MutationProtocol, Reference, Resource, UniqueRule
from roster.core.store import Store
from roster.modules.classes.models import GameClass
from roster.modules.factions.models import Faction
from roster.modules.races.models import Race
from roster.modules.specializations.models import Specialization

from .models import Character
from .schemas import CharacterCreateIn, CharacterPatchIn

CHARACTERS = Resource(
    name="character",
    label="Character",
    model=Character,
    create_schema=CharacterCreateIn,
    update_schema=CharacterPatchIn,
    unique=(UniqueRule(("name",), "A character with this name already exists"),),
    references=(
        Reference("race_id", Race, "race"),
        Reference("specialization_id", Specialization, "specialization"),
    ),
    duplicate_message="Character with this name already exists",
)

INCLUDE_RACE = Include("race", Race, "race_id", nested=(Include("faction", Faction, "faction_id"),))
INCLUDE_SPECIALIZATION = Include(
    "specialization", Specialization, "specialization_id", nested=(Include("class", GameClass, "class_id"),)
)
FULL = [INCLUDE_RACE, INCLUDE_SPECIALIZATION]


def character_includes(*, race: bool = False, specialization: bool = False) -> List[Include]:
    out: List[Include] = []
    if race:
        out.append(INCLUDE_RACE)
    if specialization:
        out.append(INCLUDE_SPECIALIZATION)
    return out


def list_characters(
    store: Store,
    *,
    race_id: Optional[int] = None,
    specialization_id: Optional[int] = None,
    includes: List[Include] = (),
) -> List[Dict[str, Any]]:
    filters: Dict[str, Any] = {}
    if race_id is not None:
        filters["race_id"] = race_id
    if specialization_id is not None:
        filters["specialization_id"] = specialization_id
    return MutationProtocol(store, CHARACTERS).list(filters, order_by=[Character.name], includes=includes)


def get_character(store: Store, character_id: Any, includes: List[Include] = ()) -> Dict[str, Any]:
    return MutationProtocol(store, CHARACTERS).read(character_id, includes)


def create_character(store: Store, body: Any) -> Dict[str, Any]:
    return MutationProtocol(store, CHARACTERS).create(body, includes=FULL)


def patch_character(store: Store, character_id: Any, body: Any) -> Dict[str, Any]:
    return MutationProtocol(store, CHARACTERS).update(character_id, body, includes=FULL)


def delete_character(store: Store, character_id: Any) -> Dict[str, Any]:
    return MutationProtocol(store, CHARACTERS).delete(character_id)
