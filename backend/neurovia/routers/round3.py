from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_session
from ..dependencies import get_admin_user, get_rules
from ..events.manager import manager
from ..game.rules import GameRules
from ..schemas.round3 import (
    ChallengeResponse,
    Round3SubmitRequest,
    Round3SubmitResponse,
    VerifyRequest,
    VerifyResponse,
)
from ..schemas.state import Round3State
from ..services.round3_service import Round3Service
from ..services.team_service import TeamStore

router = APIRouter(prefix="/round3", tags=["round3"])


@router.get("/challenge/{team_id}", response_model=ChallengeResponse)
async def get_challenge_link(
    team_id: str,
    session: AsyncSession = Depends(get_session),
    rules: GameRules = Depends(get_rules),
):
    handoff = await Round3Service(session, rules).challenge(team_id)
    return ChallengeResponse(
        sector=handoff.team.sector,
        challenge_link=handoff.link,
        time_limit=handoff.time_limit,
    )


@router.post("/submit", response_model=Round3SubmitResponse)
async def submit_round3(
    payload: Round3SubmitRequest,
    session: AsyncSession = Depends(get_session),
    rules: GameRules = Depends(get_rules),
):
    receipt = await Round3Service(session, rules).submit(
        team_id=payload.team_id,
        test_cases_passed=payload.test_cases_passed,
        time_taken=payload.time_taken,
    )
    await manager.score_updated(receipt.team.id, receipt.team.total_score, reason="round3_submit")
    return Round3SubmitResponse(
        test_cases_passed=receipt.score.test_cases_passed,
        time_taken=receipt.score.time_taken,
        time_bonus=receipt.score.time_bonus,
        final_score=receipt.score.final_score,
        total_score=receipt.team.total_score,
    )


@router.get("/team/{team_id}", response_model=Round3State)
async def get_round3_data(team_id: str, session: AsyncSession = Depends(get_session)):
    team = await TeamStore(session).get(team_id)
    return team.round3_state


@router.put("/verify/{team_id}", response_model=VerifyResponse, dependencies=[Depends(get_admin_user)])
async def verify_round3(
    team_id: str,
    payload: VerifyRequest,
    session: AsyncSession = Depends(get_session),
    rules: GameRules = Depends(get_rules),
):
    team = await Round3Service(session, rules).verify(
        team_id=team_id,
        verified=payload.verified,
        adjusted_score=payload.adjusted_score,
    )
    await manager.score_updated(team.id, team.total_score, reason="round3_verify")
    round3 = team.round3_state
    return VerifyResponse(
        team_name=team.team_name,
        verified=round3.admin_verified,
        final_score=round3.final_score,
        total_score=team.total_score,
        message=f"Round 3 {'verified' if payload.verified else 'unverified'} successfully",
    )
