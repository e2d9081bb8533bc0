from __future__ import annotations

from typing import Any, Dict, List, Optional

from roster.core.protocol import Dependent, Include, MutationProtocol, Resource, UniqueRule
from roster.core.store import Store
from roster.modules.race_classes.models import RaceClass
from roster.modules.races.models import Race
from roster.modules.specializations.models import Specialization

from .models import GameClass
from .schemas import ClassCreateIn, ClassPatchIn

CLASSES = Resource(
    name="class",
    label="Class",
    model=GameClass,
    create_schema=ClassCreateIn,
    update_schema=ClassPatchIn,
    unique=(
        UniqueRule(("name",), "A class with this name already exists"),
        UniqueRule(("slug",), "A class with this slug already exists"),
    ),
    dependents=(
        Dependent(Specialization, "class_id", "specialization(s)"),
        Dependent(RaceClass, "class_id", "race-class relationship(s)", cascade=True),
    ),
    duplicate_message="Class with this name or slug already exists",
)

INCLUDE_RACES = Include("races", RaceClass, "class_id", many=True, nested=(Include("race", Race, "race_id"),))
INCLUDE_SPECIALIZATIONS = Include("specializations", Specialization, "class_id", many=True, order_by=("name",))


def class_includes(*, races: bool = False, specializations: bool = False) -> List[Include]:
    out: List[Include] = []
    if races:
        out.append(INCLUDE_RACES)
    if specializations:
        out.append(INCLUDE_SPECIALIZATIONS)
    return out


def list_classes(store: Store, *, armor_type: Optional[str] = None, includes: List[Include] = ()) -> List[Dict[str, Any]]:
    filters = {"armor_type": armor_type} if armor_type else None
    return MutationProtocol(store, CLASSES).list(filters, order_by=[GameClass.name], includes=includes)


def get_class(store: Store, class_id: Any, includes: List[Include] = ()) -> Dict[str, Any]:
    return MutationProtocol(store, CLASSES).read(class_id, includes)


def create_class(store: Store, body: Any) -> Dict[str, Any]:
    return MutationProtocol(store, CLASSES).create(body)


def update_class(store: Store, class_id: Any, body: Any) -> Dict[str, Any]:
    return MutationProtocol(store, CLASSES).update(class_id, body)


def delete_class(store: Store, class_id: Any) -> Dict[str, Any]:
    return MutationProtocol(store, CLASSES).delete(class_id)
