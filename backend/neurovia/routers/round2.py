from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_session
from ..dependencies import get_rules
from ..events.manager import manager
from ..game.rules import GameRules
from ..schemas.round2 import (
    CorrectFlowResponse,
    SchematicResult,
    SchematicSubmitRequest,
    SectorInfoResponse,
)
from ..schemas.state import Round2State
from ..services.round2_service import Round2Service
from ..services.team_service import TeamStore

router = APIRouter(prefix="/round2", tags=["round2"])


@router.get("/correct-flow", response_model=CorrectFlowResponse)
async def get_correct_flow(
    session: AsyncSession = Depends(get_session),
    rules: GameRules = Depends(get_rules),
):
    return CorrectFlowResponse(flow=Round2Service(session, rules).correct_flow())


@router.get("/sector-info/{team_id}", response_model=SectorInfoResponse)
async def get_sector_info(
    team_id: str,
    session: AsyncSession = Depends(get_session),
    rules: GameRules = Depends(get_rules),
):
    team, brief = await Round2Service(session, rules).sector_info(team_id)
    return SectorInfoResponse(sector=team.sector, **brief)


@router.post("/submit", response_model=SchematicResult)
async def submit_schematic(
    payload: SchematicSubmitRequest,
    session: AsyncSession = Depends(get_session),
    rules: GameRules = Depends(get_rules),
):
    receipt = await Round2Service(session, rules).submit_schematic(
        team_id=payload.team_id,
        placements=payload.schematic,
        time_taken=payload.time_taken,
    )
    score = receipt.score
    await manager.score_updated(receipt.team.id, receipt.team.total_score, reason="round2_submit")

    if score.is_all_correct:
        message = "Perfect! All components are correctly placed!"
    else:
        message = (
            f"Schematic submitted! {score.correct_placements} out of "
            f"{score.filled_slots} placed components are correct."
        )
    return SchematicResult(
        correct_placements=score.correct_placements,
        filled_slots=score.filled_slots,
        total_slots=score.total_slots,
        time_taken=score.time_taken,
        time_bonus=score.time_bonus,
        placement_score=score.placement_score,
        final_score=score.final_score,
        is_all_correct=score.is_all_correct,
        can_proceed=score.can_proceed,
        message=message,
    )


@router.get("/team/{team_id}", response_model=Round2State)
async def get_round2_data(team_id: str, session: AsyncSession = Depends(get_session)):
    team = await TeamStore(session).get(team_id)
    return team.round2_state
