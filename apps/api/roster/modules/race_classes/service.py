from __future__ import annotations

from typing import Any, Dict, List, Optional

from roster.core.errors import NotFoundError
from roster.core.protocol import Include, MutationProtocol, Reference, Resource, UniqueRule, expand, parse_id, validate
from roster.core.store import Store
from roster.modules.classes.models import GameClass
from roster.modules.factions.models import Faction
from roster.modules.races.models import Race

from .models import RaceClass
from .schemas import RaceClassBulkIn, RaceClassCreateIn, RaceClassPatchIn


def _describe(store: Store, row: RaceClass) -> Dict[str, Any]:
    race = store.find_by_id(Race, row.race_id)
    klass = store.find_by_id(GameClass, row.class_id)
    return {
        "id": row.id,
        "raceName": race.name if race else None,
        "className": klass.name if klass else None,
    }


RACE_CLASSES = Resource(
    name="race_class",
    label="Race-class relationship",
    model=RaceClass,
    create_schema=RaceClassCreateIn,
    update_schema=RaceClassPatchIn,
    unique=(UniqueRule(("race_id", "class_id"), "This race-class combination already exists"),),
    references=(
        Reference("race_id", Race, "race"),
        Reference("class_id", GameClass, "class"),
    ),
    duplicate_message="Race-class relationship already exists",
    describe=_describe,
)

INCLUDE_RACE = Include("race", Race, "race_id", nested=(Include("faction", Faction, "faction_id"),))
INCLUDE_CLASS = Include("class", GameClass, "class_id")
FULL = [INCLUDE_RACE, INCLUDE_CLASS]


def race_class_includes(*, race: bool = False, class_: bool = False) -> List[Include]:
    out: List[Include] = []
    if race:
        out.append(INCLUDE_RACE)
    if class_:
        out.append(INCLUDE_CLASS)
    return out


def list_race_classes(
    store: Store,
    *,
    race_id: Optional[int] = None,
    class_id: Optional[int] = None,
    race_name: Optional[str] = None,
    class_name: Optional[str] = None,
    faction_id: Optional[int] = None,
    includes: List[Include] = (),
) -> List[Dict[str, Any]]:
    filters: Dict[str, Any] = {}
    if race_id is not None:
        filters["race_id"] = race_id
    if class_id is not None:
        filters["class_id"] = class_id

    clauses: List[Any] = []
    if race_name:
        clauses.append(Race.name.ilike(f"%{race_name}%"))
    if class_name:
        clauses.append(GameClass.name.ilike(f"%{class_name}%"))
    if faction_id is not None:
        clauses.append(Race.faction_id == faction_id)

    return MutationProtocol(store, RACE_CLASSES).list(
        filters,
        clauses=clauses,
        joins=[Race, GameClass],
        order_by=[Race.name, GameClass.name],
        includes=includes,
    )


def get_race_class(store: Store, rc_id: Any, includes: List[Include] = ()) -> Dict[str, Any]:
    return MutationProtocol(store, RACE_CLASSES).read(rc_id, includes)


def create_race_class(store: Store, body: Any) -> Dict[str, Any]:
    return MutationProtocol(store, RACE_CLASSES).create(body, includes=FULL)


def bulk_create_race_classes(store: Store, body: Any) -> Dict[str, Any]:
    data = validate(RaceClassBulkIn, body)
    return MutationProtocol(store, RACE_CLASSES).bulk_create(
        RACE_CLASSES.reference("race_id"),
        data.race_id,
        [{"class_id": c} for c in data.class_ids],
        child=RACE_CLASSES.reference("class_id"),
        includes=[INCLUDE_CLASS],
    )


def update_race_class(store: Store, rc_id: Any, body: Any) -> Dict[str, Any]:
    return MutationProtocol(store, RACE_CLASSES).update(rc_id, body, includes=FULL)


def delete_race_class(store: Store, rc_id: Any) -> Dict[str, Any]:
    return MutationProtocol(store, RACE_CLASSES).delete(rc_id)


def _find_pair(store: Store, raw_race_id: Any, raw_class_id: Any) -> RaceClass:
    race_id = parse_id(raw_race_id, "Race")
    class_id = parse_id(raw_class_id, "Class")
    row = store.find_first(RaceClass, {"race_id": race_id, "class_id": class_id})
    if row is None:
        raise NotFoundError(
            "Race-class combination not found",
            {"raceId": race_id, "classId": class_id},
        )
    return row


def get_race_class_pair(store: Store, raw_race_id: Any, raw_class_id: Any) -> Dict[str, Any]:
    return expand(store, _find_pair(store, raw_race_id, raw_class_id), FULL)


def delete_race_class_pair(store: Store, raw_race_id: Any, raw_class_id: Any) -> Dict[str, Any]:
    row = _find_pair(store, raw_race_id, raw_class_id)
    return MutationProtocol(store, RACE_CLASSES).delete(row.id)
