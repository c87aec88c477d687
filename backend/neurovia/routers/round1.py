from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_session
from ..dependencies import get_rules
from ..events.manager import manager
from ..game.rules import GameRules
from ..schemas.catalog import ComponentPublic, QuestionPublic
from ..schemas.round1 import (
    AnswerCheckRequest,
    AnswerCheckResponse,
    ComponentListResponse,
    PurchaseRequest,
    PurchaseResponse,
    QuizSetResponse,
    QuizSubmitRequest,
    QuizSubmitResponse,
)
from ..schemas.state import Round1State
from ..services.round1_service import Round1Service
from ..services.team_service import TeamStore

router = APIRouter(prefix="/round1", tags=["round1"])


@router.get("/quiz", response_model=QuizSetResponse)
async def get_quiz(
    session: AsyncSession = Depends(get_session),
    rules: GameRules = Depends(get_rules),
):
    questions = await Round1Service(session, rules).quiz_questions()
    return QuizSetResponse(
        count=len(questions),
        questions=[QuestionPublic.model_validate(question) for question in questions],
    )


@router.post("/quiz/validate", response_model=AnswerCheckResponse)
async def validate_answer(
    payload: AnswerCheckRequest,
    session: AsyncSession = Depends(get_session),
    rules: GameRules = Depends(get_rules),
):
    check = await Round1Service(session, rules).check_answer(
        question_index=payload.question_index,
        selected_answer=payload.selected_answer,
    )
    return AnswerCheckResponse(
        is_correct=check.is_correct,
        correct_answer=check.correct_answer,
        earned_amount=check.earned_amount,
    )


@router.post("/quiz/submit", response_model=QuizSubmitResponse)
async def submit_quiz(
    payload: QuizSubmitRequest,
    session: AsyncSession = Depends(get_session),
    rules: GameRules = Depends(get_rules),
):
    score = await Round1Service(session, rules).submit_quiz(team_id=payload.team_id, answers=payload.answers)
    return QuizSubmitResponse(
        correct_answers=score.correct_answers,
        total_questions=score.total_questions,
        earned_amount=score.earned_amount,
        bonus_amount=score.bonus_amount,
        total_balance=score.total_balance,
    )


@router.get("/components", response_model=ComponentListResponse)
async def get_components(
    session: AsyncSession = Depends(get_session),
    rules: GameRules = Depends(get_rules),
):
    components = await Round1Service(session, rules).components()
    return ComponentListResponse(
        count=len(components),
        components=[ComponentPublic.model_validate(component) for component in components],
    )


@router.post("/purchase", response_model=PurchaseResponse)
async def purchase_components(
    payload: PurchaseRequest,
    session: AsyncSession = Depends(get_session),
    rules: GameRules = Depends(get_rules),
):
    receipt = await Round1Service(session, rules).purchase(
        team_id=payload.team_id,
        component_ids=payload.component_ids,
    )
    round1 = receipt.team.round1_state
    await manager.score_updated(receipt.team.id, receipt.team.total_score, reason="round1_purchase")
    return PurchaseResponse(
        purchased_components=round1.purchased_components,
        total_cost=receipt.total_cost,
        remaining_balance=round1.total_balance,
        round1_score=round1.final_score,
    )


@router.get("/team/{team_id}", response_model=Round1State)
async def get_round1_data(team_id: str, session: AsyncSession = Depends(get_session)):
    team = await TeamStore(session).get(team_id)
    return team.round1_state
