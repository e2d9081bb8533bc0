from __future__ import annotations

from typing import Optional

from sqlmodel import Field, SQLModel


class Character(SQLModel, table=True):
    __tablename__ = "characters"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=255, unique=True)
    level: int = Field(default=1)  # 1..100
    gender: str = Field(max_length=16)  # male|female
    note: str = Field(default="", max_length=1000)
    race_id: int = Field(foreign_key="races.id", index=True)
    specialization_id: int = Field(foreign_key="specializations.id", index=True)
