from __future__ import annotations

from typing import Annotated, Optional

from fastapi import APIRouter, Body, Query, status

from roster.core.deps import StoreDep, WriterDep, flag
from roster.core.schemas import MAX_ID, Envelope, ListEnvelope, ok, ok_list

from .schemas import RaceClassPatchIn, RaceClassPostIn, RaceClassSingleIn
from .service import (
    bulk_create_race_classes,
    create_race_class,
    delete_race_class,
    delete_race_class_pair,
    get_race_class,
    get_race_class_pair,
    list_race_classes,
    race_class_includes,
    update_race_class,
)

router = APIRouter(tags=["race_classes"])


@router.get("/race-classes", response_model=ListEnvelope)
def api_list_race_classes(
    store: StoreDep,
    race_id: Optional[int] = Query(None, alias="raceId", gt=0, le=MAX_ID),
    class_id: Optional[int] = Query(None, alias="classId", gt=0, le=MAX_ID),
    race_name: Optional[str] = Query(None, alias="raceName"),
    class_name: Optional[str] = Query(None, alias="className"),
    faction_id: Optional[int] = Query(None, alias="factionId", gt=0, le=MAX_ID),
    include_race: Optional[str] = Query(None, alias="includeRace"),
    include_class: Optional[str] = Query(None, alias="includeClass"),
):
    includes = race_class_includes(race=flag(include_race), class_=flag(include_class))
    items = list_race_classes(
        store,
        race_id=race_id,
        class_id=class_id,
        race_name=race_name,
        class_name=class_name,
        faction_id=faction_id,
        includes=includes,
    )
    return ok_list(items)


@router.post("/race-classes", response_model=Envelope, status_code=status.HTTP_201_CREATED, dependencies=[WriterDep])
def api_create_race_classes(store: StoreDep, body: Annotated[RaceClassPostIn, Body(discriminator="mode")]):
    if isinstance(body, RaceClassSingleIn):
        data = create_race_class(store, body.model_dump(exclude={"mode"}))
        return ok(data, "Race-class relationship created successfully")
    out = bulk_create_race_classes(store, body)
    return ok(out, f"Created {out['created']} race-class relationship(s), skipped {out['skipped']} existing")


@router.get("/race-classes/{race_id}/{class_id}", response_model=Envelope)
def api_get_race_class_pair(race_id: str, class_id: str, store: StoreDep):
    return ok(get_race_class_pair(store, race_id, class_id))


@router.delete("/race-classes/{race_id}/{class_id}", response_model=Envelope, dependencies=[WriterDep])
def api_delete_race_class_pair(race_id: str, class_id: str, store: StoreDep):
    return ok(delete_race_class_pair(store, race_id, class_id), "Race-class relationship deleted successfully")


@router.get("/race-classes/{rc_id}", response_model=Envelope)
def api_get_race_class(
    rc_id: str,
    store: StoreDep,
    include_race: Optional[str] = Query(None, alias="includeRace"),
    include_class: Optional[str] = Query(None, alias="includeClass"),
):
    includes = race_class_includes(race=flag(include_race), class_=flag(include_class))
    return ok(get_race_class(store, rc_id, includes))


@router.put("/race-classes/{rc_id}", response_model=Envelope, dependencies=[WriterDep])
@router.patch("/race-classes/{rc_id}", response_model=Envelope, dependencies=[WriterDep])
def api_update_race_class(rc_id: str, body: RaceClassPatchIn, store: StoreDep):
    return ok(update_race_class(store, rc_id, body), "Race-class relationship updated successfully")


@router.delete("/race-classes/{rc_id}", response_model=Envelope, dependencies=[WriterDep])
def api_delete_race_class(rc_id: str, store: StoreDep):
    return ok(delete_race_class(store, rc_id), "Race-class relationship deleted successfully")
