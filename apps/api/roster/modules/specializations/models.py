from __future__ import annotations

from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel


# names repeat across classes (e.g. Restoration), so uniqueness is per class
class Specialization(SQLModel, table=True):
    __tablename__ = "specializations"
    __table_args__ = (
        UniqueConstraint("class_id", "name", name="uq_specializations_class_name"),
        UniqueConstraint("class_id", "slug", name="uq_specializations_class_slug"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=255)
    slug: str = Field(max_length=255)
    class_id: int = Field(foreign_key="classes.id", index=True)
