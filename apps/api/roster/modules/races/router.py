from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Query, status

from roster.core.deps import StoreDep, WriterDep, flag
from roster.core.schemas import MAX_ID, Envelope, ListEnvelope, ok, ok_list

from .schemas import RaceCreateIn, RacePatchIn
from .service import create_race, delete_race, get_race, list_races, race_includes, update_race

router = APIRouter(tags=["races"])


@router.get("/races", response_model=ListEnvelope)
def api_list_races(
    store: StoreDep,
    faction_id: Optional[int] = Query(None, alias="factionId", gt=0, le=MAX_ID),
    include_faction: Optional[str] = Query(None, alias="includeFaction"),
    include_classes: Optional[str] = Query(None, alias="includeClasses"),
    include_characters: Optional[str] = Query(None, alias="includeCharacters"),
):
    includes = race_includes(
        faction=flag(include_faction),
        classes=flag(include_classes),
        characters=flag(include_characters),
    )
    return ok_list(list_races(store, faction_id=faction_id, includes=includes))


@router.post("/races", response_model=Envelope, status_code=status.HTTP_201_CREATED, dependencies=[WriterDep])
def api_create_race(body: RaceCreateIn, store: StoreDep):
    return ok(create_race(store, body), "Race created successfully")


@router.get("/races/{race_id}", response_model=Envelope)
def api_get_race(
    race_id: str,
    store: StoreDep,
    include_faction: Optional[str] = Query(None, alias="includeFaction"),
    include_classes: Optional[str] = Query(None, alias="includeClasses"),
    include_characters: Optional[str] = Query(None, alias="includeCharacters"),
):
    includes = race_includes(
        faction=flag(include_faction),
        classes=flag(include_classes),
        characters=flag(include_characters),
    )
    return ok(get_race(store, race_id, includes))


@router.put("/races/{race_id}", response_model=Envelope, dependencies=[WriterDep])
@router.patch("/races/{race_id}", response_model=Envelope, dependencies=[WriterDep])
def api_update_race(race_id: str, body: RacePatchIn, store: StoreDep):
    return ok(update_race(store, race_id, body), "Race updated successfully")


@router.delete("/races/{race_id}", response_model=Envelope, dependencies=[WriterDep])
def api_delete_race(race_id: str, store: StoreDep):
    return ok(delete_race(store, race_id), "Race deleted successfully")
