from __future__ import annotations

from typing import Any, Dict, List

from roster.core.logging import emit
from roster.core.protocol import Include, MutationProtocol, Resource, UniqueRule
from roster.core.store import Store
from roster.modules.races.models import Race

from .models import Faction
from .schemas import FactionIn

DEFAULT_FACTIONS = ("Alliance", "Horde")

FACTIONS = Resource(
    name="faction",
    label="Faction",
    model=Faction,
    create_schema=FactionIn,
    update_schema=FactionIn,
    unique=(UniqueRule(("name",), "A faction with this name already exists"),),
)

INCLUDE_RACES = Include("races", Race, "faction_id", many=True, order_by=("name",))


def faction_includes(*, races: bool = False) -> List[Include]:
    return [INCLUDE_RACES] if races else []


def list_factions(store: Store, includes: List[Include] = ()) -> List[Dict[str, Any]]:
    return MutationProtocol(store, FACTIONS).list(order_by=[Faction.name], includes=includes)


def get_faction(store: Store, faction_id: Any, includes: List[Include] = ()) -> Dict[str, Any]:
    return MutationProtocol(store, FACTIONS).read(faction_id, includes)


def seed_factions(store: Store) -> int:
    """Insert the default factions into an empty table. Returns how many rows were added."""
    if store.count(Faction, {}) > 0:
        return 0
    created = store.create_many(Faction, [{"name": n} for n in DEFAULT_FACTIONS], skip_duplicates=True)
    emit("info", "faction.seeded", f"seeded {len(created)} faction(s)", module=__name__, count=len(created))
    return len(created)
