from __future__ import annotations

from typing import Optional

from pydantic import Field

from roster.core.schemas import PatchModel, WireModel

CLASS_SLUG_PATTERN = r"^[a-z][a-zA-Z0-9]*$"  # camelCase
COLOR_CODE_PATTERN = r"^#[0-9A-Fa-f]{6}$|^$"


class ClassCreateIn(WireModel):
    name: str = Field(min_length=1, max_length=255)
    slug: str = Field(min_length=1, max_length=255, pattern=CLASS_SLUG_PATTERN)
    armor_type: str = Field(default="", max_length=255)
    color_code: str = Field(default="", max_length=255, pattern=COLOR_CODE_PATTERN)


class ClassPatchIn(PatchModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    slug: Optional[str] = Field(default=None, min_length=1, max_length=255, pattern=CLASS_SLUG_PATTERN)
    armor_type: Optional[str] = Field(default=None, max_length=255)
    color_code: Optional[str] = Field(default=None, max_length=255, pattern=COLOR_CODE_PATTERN)
