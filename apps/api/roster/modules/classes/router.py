from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Query, status

from roster.core.deps import StoreDep, WriterDep, flag
from roster.core.schemas import Envelope, ListEnvelope, ok, ok_list

from .schemas import ClassCreateIn, ClassPatchIn
from .service import class_includes, create_class, delete_class, get_class, list_classes, update_class

router = APIRouter(tags=["classes"])


@router.get("/classes", response_model=ListEnvelope)
def api_list_classes(
    store: StoreDep,
    armor_type: Optional[str] = Query(None, alias="armorType"),
    include_races: Optional[str] = Query(None, alias="includeRaces"),
    include_specializations: Optional[str] = Query(None, alias="includeSpecializations"),
):
    includes = class_includes(races=flag(include_races), specializations=flag(include_specializations))
    return ok_list(list_classes(store, armor_type=armor_type, includes=includes))


@router.post("/classes", response_model=Envelope, status_code=status.HTTP_201_CREATED, dependencies=[WriterDep])
def api_create_class(body: ClassCreateIn, store: StoreDep):
    return ok(create_class(store, body), "Class created successfully")


@router.get("/classes/{class_id}", response_model=Envelope)
def api_get_class(
    class_id: str,
    store: StoreDep,
    include_races: Optional[str] = Query(None, alias="includeRaces"),
    include_specializations: Optional[str] = Query(None, alias="includeSpecializations"),
):
    includes = class_includes(races=flag(include_races), specializations=flag(include_specializations))
    return ok(get_class(store, class_id, includes))


@router.put("/classes/{class_id}", response_model=Envelope, dependencies=[WriterDep])
@router.patch("/classes/{class_id}", response_model=Envelope, dependencies=[WriterDep])
def api_update_class(class_id: str, body: ClassPatchIn, store: StoreDep):
    return ok(update_class(store, class_id, body), "Class updated successfully")


@router.delete("/classes/{class_id}", response_model=Envelope, dependencies=[WriterDep])
def api_delete_class(class_id: str, store: StoreDep):
    return ok(delete_class(store, class_id), "Class deleted successfully")
