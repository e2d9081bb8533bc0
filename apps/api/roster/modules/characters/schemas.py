from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import Field, field_validator

from roster.core.schemas import PatchModel, PositiveId, WireModel

Gender = Literal["male", "female"]


def _lower(v: Any) -> Any:
    return v.strip().lower() if isinstance(v, str) else v


class CharacterCreateIn(WireModel):
    name: str = Field(min_length=1, max_length=255)
    level: int = Field(default=1, ge=1, le=100)
    gender: Gender
    note: str = Field(default="", max_length=1000)
    race_id: PositiveId
    specialization_id: PositiveId

    @field_validator("gender", mode="before")
    @classmethod
    def normalize_gender(cls, v: Any) -> Any:
        return _lower(v)


class CharacterPatchIn(PatchModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    level: Optional[int] = Field(default=None, ge=1, le=100)
    gender: Optional[Gender] = None
    note: Optional[str] = Field(default=None, max_length=1000)
    race_id: Optional[PositiveId] = None
    specialization_id: Optional[PositiveId] = None

    @field_validator("gender", mode="before")
    @classmethod
    def normalize_gender(cls, v: Any) -> Any:
        return _lower(v)
