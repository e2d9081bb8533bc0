from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from roster.core.schemas import PatchModel, PositiveId, WireModel


class SpecializationCreateIn(WireModel):
    name: str = Field(min_length=1, max_length=255)
    slug: str = Field(min_length=1, max_length=255)
    class_id: PositiveId


class SpecializationPatchIn(PatchModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    slug: Optional[str] = Field(default=None, min_length=1, max_length=255)
    class_id: Optional[PositiveId] = None


class SpecializationSpecIn(WireModel):
    name: str = Field(min_length=1, max_length=255)
    slug: str = Field(min_length=1, max_length=255)


# several specializations for one class in one call
class SpecializationBulkIn(WireModel):
    class_id: PositiveId
    specializations: List[SpecializationSpecIn] = Field(min_length=1)
