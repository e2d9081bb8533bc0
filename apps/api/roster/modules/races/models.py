from __future__ import annotations

from typing import Optional

from sqlmodel import Field, SQLModel


class Race(SQLModel, table=True):
    __tablename__ = "races"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=255, unique=True)
    slug: str = Field(max_length=255, unique=True)  # kebab-case
    faction_id: int = Field(foreign_key="factions.id", index=True)
