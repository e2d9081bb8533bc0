from __future__ import annotations

from typing import Annotated, Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

# largest value a 64-bit INTEGER primary key can hold
MAX_ID = 2**63 - 1

PositiveId = Annotated[int, Field(gt=0, le=MAX_ID)]


class WireModel(BaseModel):
    """camelCase on the wire, snake_case in Python; strings are trimmed before constraints apply."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )


class PatchModel(WireModel):
    """Update body: every field optional, but an explicit null is rejected (absent means untouched)."""

    @model_validator(mode="before")
    @classmethod
    def _no_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            nulls = [k for k, v in data.items() if v is None]
            if nulls:
                raise ValueError(f"null is not allowed for: {', '.join(sorted(nulls))}")
        return data


class Envelope(BaseModel):
    success: bool = True
    data: Any = None
    message: Optional[str] = None


class ListEnvelope(Envelope):
    count: int = 0


def ok(data: Any = None, message: Optional[str] = None) -> Dict[str, Any]:
    return {"success": True, "data": data, "message": message}


def ok_list(items: list, message: Optional[str] = None) -> Dict[str, Any]:
    return {"success": True, "data": items, "message": message, "count": len(items)}
