from __future__ import annotations

from typing import Optional

from sqlmodel import Field, SQLModel


# reference data: seeded, never mutated through the API
class Faction(SQLModel, table=True):
    __tablename__ = "factions"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=255, unique=True)
