from __future__ import annotations

from typing import Optional

from sqlmodel import Field, SQLModel


class GameClass(SQLModel, table=True):
    __tablename__ = "classes"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=255, unique=True)
    slug: str = Field(max_length=255, unique=True)  # camelCase
    armor_type: str = Field(default="", max_length=255)
    color_code: str = Field(default="", max_length=255)  # "#RRGGBB" or ""
