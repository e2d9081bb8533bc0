from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Query, status

from roster.core.deps import StoreDep, WriterDep, flag
from roster.core.schemas import MAX_ID, Envelope, ListEnvelope, ok, ok_list

from .schemas import SpecializationBulkIn, SpecializationCreateIn, SpecializationPatchIn
from .service import (
    bulk_create_specializations,
    create_specialization,
    delete_specialization,
    get_specialization,
    list_specializations,
    specialization_includes,
    update_specialization,
)

router = APIRouter(tags=["specializations"])


@router.get("/specializations", response_model=ListEnvelope)
def api_list_specializations(
    store: StoreDep,
    class_id: Optional[int] = Query(None, alias="classId", gt=0, le=MAX_ID),
    include_class: Optional[str] = Query(None, alias="includeClass"),
    include_characters: Optional[str] = Query(None, alias="includeCharacters"),
):
    includes = specialization_includes(class_=flag(include_class), characters=flag(include_characters))
    return ok_list(list_specializations(store, class_id=class_id, includes=includes))


@router.post(
    "/specializations", response_model=Envelope, status_code=status.HTTP_201_CREATED, dependencies=[WriterDep]
)
def api_create_specialization(body: SpecializationCreateIn, store: StoreDep):
    return ok(create_specialization(store, body), "Specialization created successfully")


@router.put(
    "/specializations", response_model=Envelope, status_code=status.HTTP_201_CREATED, dependencies=[WriterDep]
)
def api_bulk_create_specializations(body: SpecializationBulkIn, store: StoreDep):
    out = bulk_create_specializations(store, body)
    return ok(out, f"Created {out['created']} specialization(s), skipped {out['skipped']} existing")


@router.get("/specializations/{spec_id}", response_model=Envelope)
def api_get_specialization(
    spec_id: str,
    store: StoreDep,
    include_class: Optional[str] = Query(None, alias="includeClass"),
    include_characters: Optional[str] = Query(None, alias="includeCharacters"),
):
    includes = specialization_includes(class_=flag(include_class), characters=flag(include_characters))
    return ok(get_specialization(store, spec_id, includes))


@router.put("/specializations/{spec_id}", response_model=Envelope, dependencies=[WriterDep])
@router.patch("/specializations/{spec_id}", response_model=Envelope, dependencies=[WriterDep])
def api_update_specialization(spec_id: str, body: SpecializationPatchIn, store: StoreDep):
    return ok(update_specialization(store, spec_id, body), "Specialization updated successfully")


@router.delete("/specializations/{spec_id}", response_model=Envelope, dependencies=[WriterDep])
def api_delete_specialization(spec_id: str, store: StoreDep):
    return ok(delete_specialization(store, spec_id), "Specialization deleted successfully")
