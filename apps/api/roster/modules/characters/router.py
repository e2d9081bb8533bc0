from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Query, status

from roster.core.deps import StoreDep, WriterDep, flag
from roster.core.schemas import MAX_ID, Envelope, ListEnvelope, ok, ok_list

from .schemas import CharacterCreateIn, CharacterPatchIn
from .service import (
    character_includes,
    create_character,
    delete_character,
    get_character,
    list_characters,
    patch_character,
)

router = APIRouter(tags=["characters"])


@router.get("/characters", response_model=ListEnvelope)
def api_list_characters(
    store: StoreDep,
    race_id: Optional[int] = Query(None, alias="raceId", gt=0, le=MAX_ID),
    specialization_id: Optional[int] = Query(None, alias="specializationId", gt=0, le=MAX_ID),
    include_race: Optional[str] = Query(None, alias="includeRace"),
    include_specialization: Optional[str] = Query(None, alias="includeSpecialization"),
):
    includes = character_includes(race=flag(include_race), specialization=flag(include_specialization))
    items = list_characters(store, race_id=race_id, specialization_id=specialization_id, includes=includes)
    return ok_list(items)


@router.post("/characters", response_model=Envelope, status_code=status.HTTP_201_CREATED, dependencies=[WriterDep])
def api_create_character(body: CharacterCreateIn, store: StoreDep):
    return ok(create_character(store, body), "Character created successfully")


@router.get("/characters/{character_id}", response_model=Envelope)
def api_get_character(
    character_id: str,
    store: StoreDep,
    include_race: Optional[str] = Query(None, alias="includeRace"),
    include_specialization: Optional[str] = Query(None, alias="includeSpecialization"),
):
    includes = character_includes(race=flag(include_race), specialization=flag(include_specialization))
    return ok(get_character(store, character_id, includes))


@router.put("/characters/{character_id}", response_model=Envelope, dependencies=[WriterDep])
@router.patch("/characters/{character_id}", response_model=Envelope, dependencies=[WriterDep])
def api_patch_character(character_id: str, body: CharacterPatchIn, store: StoreDep):
    return ok(patch_character(store, character_id, body), "Character updated successfully")


@router.delete("/characters/{character_id}", response_model=Envelope, dependencies=[WriterDep])
def api_delete_character(character_id: str, store: StoreDep):
    return ok(delete_character(store, character_id), "Character deleted successfully")
