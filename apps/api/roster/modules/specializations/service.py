from __future__ import annotations

from typing import Any, Dict, List, Optional

from roster.core.protocol import Dependent, Include, MutationProtocol, Reference, Resource, UniqueRule, validate
from roster.core.store import Store
from roster.modules.characters.models import Character
from roster.modules.classes.models import GameClass
from roster.modules.races.models import Race

from .models import Specialization
from .schemas import SpecializationBulkIn, SpecializationCreateIn, SpecializationPatchIn

SPECIALIZATIONS = Resource(
    name="specialization",
    label="Specialization",
    model=Specialization,
    create_schema=SpecializationCreateIn,
    update_schema=SpecializationPatchIn,
    unique=(
        UniqueRule(("class_id", "name"), "A specialization with this name already exists for this class"),
        UniqueRule(("class_id", "slug"), "A specialization with this slug already exists for this class"),
    ),
    references=(Reference("class_id", GameClass, "class"),),
    dependents=(Dependent(Character, "specialization_id", "character(s)"),),
    duplicate_message="A specialization with this name or slug already exists for this class",
)

INCLUDE_CLASS = Include("class", GameClass, "class_id")
INCLUDE_CHARACTERS = Include(
    "characters", Character, "specialization_id", many=True, nested=(Include("race", Race, "race_id"),), order_by=("name",)
)


def specialization_includes(*, class_: bool = False, characters: bool = False) -> List[Include]:
    out: List[Include] = []
    if class_:
        out.append(INCLUDE_CLASS)
    if characters:
        out.append(INCLUDE_CHARACTERS)
    return out


def list_specializations(
    store: Store, *, class_id: Optional[int] = None, includes: List[Include] = ()
) -> List[Dict[str, Any]]:
    filters = {"class_id": class_id} if class_id is not None else None
    return MutationProtocol(store, SPECIALIZATIONS).list(filters, order_by=[Specialization.name], includes=includes)


def get_specialization(store: Store, spec_id: Any, includes: List[Include] = ()) -> Dict[str, Any]:
    return MutationProtocol(store, SPECIALIZATIONS).read(spec_id, includes)


def create_specialization(store: Store, body: Any) -> Dict[str, Any]:
    return MutationProtocol(store, SPECIALIZATIONS).create(body, includes=[INCLUDE_CLASS])


def bulk_create_specializations(store: Store, body: Any) -> Dict[str, Any]:
    data = validate(SpecializationBulkIn, body)
    rows = [s.model_dump() for s in data.specializations]
    return MutationProtocol(store, SPECIALIZATIONS).bulk_create(
        SPECIALIZATIONS.reference("class_id"),
        data.class_id,
        rows,
    )


def update_specialization(store: Store, spec_id: Any, body: Any) -> Dict[str, Any]:
    return MutationProtocol(store, SPECIALIZATIONS).update(spec_id, body, includes=[INCLUDE_CLASS])


def delete_specialization(store: Store, spec_id: Any) -> Dict[str, Any]:
    return MutationProtocol(store, SPECIALIZATIONS).delete(spec_id)
