from __future__ import annotations

from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel


# join table: "this race may play this class"
class RaceClass(SQLModel, table=True):
    __tablename__ = "race_classes"
    __table_args__ = (UniqueConstraint("race_id", "class_id", name="uq_race_classes_race_class"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    race_id: int = Field(foreign_key="races.id", index=True)
    class_id: int = Field(foreign_key="classes.id", index=True)
