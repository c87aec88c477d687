from typing import List

from pydantic import BaseModel, Field

from ..enums import ComponentType, Sector


class SchematicPlacement(BaseModel):
    component_id: str | None = None
    component_name: str | None = None
    component_type: ComponentType | None = None


class SchematicSubmitRequest(BaseModel):
    team_id: str = Field(..., min_length=1)
    schematic: List[SchematicPlacement | None]
    time_taken: float = Field(..., ge=0, allow_inf_nan=False)


class SchematicResult(BaseModel):
    correct_placements: int
    filled_slots: int
    total_slots: int
    time_taken: float
    time_bonus: int
    placement_score: int
    final_score: int
    is_all_correct: bool
    can_proceed: bool
    message: str


class CorrectFlowResponse(BaseModel):
    flow: List[ComponentType]


class SectorBrief(BaseModel):
    title: str
    failure: str
    universe_flaw: str
    icon: str
    components: dict[ComponentType, str]


class SectorInfoResponse(SectorBrief):
    sector: Sector
