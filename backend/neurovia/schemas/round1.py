from typing import Annotated, List

from pydantic import BaseModel, Field

from .catalog import ComponentPublic, QuestionPublic
from .state import PurchasedComponent

SelectedAnswer = Annotated[int, Field(ge=-1, le=3)]


class QuizSetResponse(BaseModel):
    count: int
    questions: List[QuestionPublic]


class AnswerCheckRequest(BaseModel):
    question_index: int
    selected_answer: int = Field(..., ge=0, le=3)


class AnswerCheckResponse(BaseModel):
    is_correct: bool
    correct_answer: int | None = None
    earned_amount: int


class QuizSubmitRequest(BaseModel):
    team_id: str = Field(..., min_length=1)
    answers: List[SelectedAnswer | None]


class QuizSubmitResponse(BaseModel):
    correct_answers: int
    total_questions: int
    earned_amount: int
    bonus_amount: int
    total_balance: int
    message: str = "Quiz submitted successfully"


class ComponentListResponse(BaseModel):
    count: int
    components: List[ComponentPublic]


class PurchaseRequest(BaseModel):
    team_id: str = Field(..., min_length=1)
    component_ids: List[str] = Field(..., min_length=1)


class PurchaseResponse(BaseModel):
    purchased_components: List[PurchasedComponent]
    total_cost: int
    remaining_balance: int
    round1_score: int
    message: str = "Components purchased successfully. Proceed to Round 2 to arrange them!"
