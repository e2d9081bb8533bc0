from __future__ import annotations

from typing import List, Literal, Optional, Union

from pydantic import Field

from roster.core.schemas import PatchModel, PositiveId, WireModel


class RaceClassCreateIn(WireModel):
    race_id: PositiveId
    class_id: PositiveId


class RaceClassPatchIn(PatchModel):
    race_id: Optional[PositiveId] = None
    class_id: Optional[PositiveId] = None


class RaceClassSingleIn(WireModel):
    mode: Literal["single"]
    race_id: PositiveId
    class_id: PositiveId


class RaceClassBulkIn(WireModel):
    mode: Literal["bulk"]
    race_id: PositiveId
    class_ids: List[PositiveId] = Field(min_length=1)


# POST /race-classes body; the router tags it on "mode"
RaceClassPostIn = Union[RaceClassSingleIn, RaceClassBulkIn]
