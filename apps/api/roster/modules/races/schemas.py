from __future__ import annotations

from typing import Optional

from pydantic import Field

from roster.core.schemas import PatchModel, PositiveId, WireModel

# kebab-case: lowercase letters, digits, single hyphens between groups
RACE_SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


class RaceCreateIn(WireModel):
    name: str = Field(min_length=1, max_length=255)
    slug: str = Field(min_length=1, max_length=255, pattern=RACE_SLUG_PATTERN)
    faction_id: PositiveId


class RacePatchIn(PatchModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    slug: Optional[str] = Field(default=None, min_length=1, max_length=255, pattern=RACE_SLUG_PATTERN)
    faction_id: Optional[PositiveId] = None
