from __future__ import annotations

from pydantic import Field

from roster.core.schemas import WireModel


class FactionIn(WireModel):
    name: str = Field(min_length=1, max_length=255)
