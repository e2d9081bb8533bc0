from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Query

from roster.core.deps import StoreDep, flag
from roster.core.schemas import Envelope, ListEnvelope, ok, ok_list

from .service import faction_includes, get_faction, list_factions

router = APIRouter(tags=["factions"])


@router.get("/factions", response_model=ListEnvelope)
def api_list_factions(store: StoreDep, include_races: Optional[str] = Query(None, alias="includeRaces")):
    return ok_list(list_factions(store, faction_includes(races=flag(include_races))))


@router.get("/factions/{faction_id}", response_model=Envelope)
def api_get_faction(
    faction_id: str,
    store: StoreDep,
    include_races: Optional[str] = Query(None, alias="includeRaces"),
):
    return ok(get_faction(store, faction_id, faction_includes(races=flag(include_races))))
