from datetime import datetime

from pydantic import BaseModel, Field

from ..enums import ComponentType


class PurchasedComponent(BaseModel):
    component_id: str
    name: str
    type: ComponentType
    price: int
    icon: str = "📦"
    purchased_at: datetime | None = None


class Round1State(BaseModel):
    quiz_score: int = 0
    earned_amount: int = 0
    total_balance: int = 0
    quiz_submitted: bool = False
    purchased_components: list[PurchasedComponent] = Field(default_factory=list)
    submitted: bool = False
    submitted_at: datetime | None = None
    final_score: int = 0


class SchematicSlot(BaseModel):
    slot_index: int
    component_id: str | None = None
    component_name: str | None = None
    component_type: ComponentType | None = None


class Round2State(BaseModel):
    schematic: list[SchematicSlot] = Field(default_factory=list)
    correct_placements: int = 0
    time_taken: float = 0
    submitted: bool = False
    submitted_at: datetime | None = None
    final_score: int = 0


class Round3State(BaseModel):
    challenge_link: str | None = None
    test_cases_passed: int = 0
    time_taken: int = 0
    submitted: bool = False
    submitted_at: datetime | None = None
    final_score: int = 0
    admin_verified: bool = False
