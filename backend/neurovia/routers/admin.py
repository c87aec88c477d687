from typing import Sequence

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_session
from ..dependencies import get_admin_user, get_rules, get_super_admin
from ..events.manager import manager
from ..game.rules import GameRules
from ..schemas.admin import (
    AdminTeamsResponse,
    DeleteSummary,
    EventStats,
    LeaderboardResponse,
    Round3OverrideRequest,
    Round3OverrideResponse,
)
from ..schemas.catalog import (
    ComponentCreate,
    ComponentPublic,
    ComponentUpdate,
    QuestionAdminPublic,
    QuestionCreate,
    QuestionUpdate,
)
from ..schemas.team import TeamPublic
from ..services.admin_service import AdminService
from ..services.catalog_service import CatalogService
from ..services.round3_service import Round3Service

router = APIRouter(
    prefix="/admin",
    tags=["admin"],
    dependencies=[Depends(get_admin_user)],
)


@router.get("/teams", response_model=AdminTeamsResponse)
async def list_teams(session: AsyncSession = Depends(get_session)) -> AdminTeamsResponse:
    stats, teams = await AdminService(session).teams_overview()
    return AdminTeamsResponse(
        stats=stats,
        count=len(teams),
        teams=[TeamPublic.model_validate(team) for team in teams],
    )


@router.get("/leaderboard", response_model=LeaderboardResponse)
async def get_leaderboard(session: AsyncSession = Depends(get_session)) -> LeaderboardResponse:
    return await AdminService(session).leaderboard()


@router.get("/stats", response_model=EventStats)
async def get_event_stats(session: AsyncSession = Depends(get_session)) -> EventStats:
    return await AdminService(session).stats()


@router.put("/round3/time/{team_id}", response_model=Round3OverrideResponse)
async def update_round3_time(
    team_id: str,
    payload: Round3OverrideRequest,
    session: AsyncSession = Depends(get_session),
    rules: GameRules = Depends(get_rules),
) -> Round3OverrideResponse:
    team = await Round3Service(session, rules).override(
        team_id=team_id,
        time_taken=payload.time_taken,
        test_cases_passed=payload.test_cases_passed,
    )
    await manager.score_updated(team.id, team.total_score, reason="round3_override")
    return Round3OverrideResponse(
        team_name=team.team_name,
        round3=team.round3_state,
        total_score=team.total_score,
    )


@router.delete("/teams/{team_id}", response_model=DeleteSummary, dependencies=[Depends(get_super_admin)])
async def delete_team(team_id: str, session: AsyncSession = Depends(get_session)) -> DeleteSummary:
    await AdminService(session).delete_team(team_id)
    await manager.team_removed(team_id)
    return DeleteSummary(team_id=team_id)


@router.get("/components", response_model=list[ComponentPublic])
async def list_components(session: AsyncSession = Depends(get_session)) -> Sequence[ComponentPublic]:
    components = await CatalogService(session).list_components()
    return [ComponentPublic.model_validate(component) for component in components]


@router.post("/components", response_model=ComponentPublic, status_code=status.HTTP_201_CREATED)
async def create_component(
    payload: ComponentCreate,
    session: AsyncSession = Depends(get_session),
) -> ComponentPublic:
    component = await CatalogService(session).create_component(payload)
    return ComponentPublic.model_validate(component)


@router.put("/components/{component_id}", response_model=ComponentPublic)
async def update_component(
    component_id: str,
    payload: ComponentUpdate,
    session: AsyncSession = Depends(get_session),
) -> ComponentPublic:
    component = await CatalogService(session).update_component(component_id, payload)
    return ComponentPublic.model_validate(component)


@router.delete("/components/{component_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_component(component_id: str, session: AsyncSession = Depends(get_session)) -> None:
    await CatalogService(session).delete_component(component_id)


@router.get("/questions", response_model=list[QuestionAdminPublic])
async def list_questions(session: AsyncSession = Depends(get_session)) -> Sequence[QuestionAdminPublic]:
    questions = await CatalogService(session).list_questions()
    return [QuestionAdminPublic.model_validate(question) for question in questions]


@router.post("/questions", response_model=QuestionAdminPublic, status_code=status.HTTP_201_CREATED)
async def create_question(
    payload: QuestionCreate,
    session: AsyncSession = Depends(get_session),
) -> QuestionAdminPublic:
    question = await CatalogService(session).create_question(payload)
    return QuestionAdminPublic.model_validate(question)


@router.put("/questions/{question_id}", response_model=QuestionAdminPublic)
async def update_question(
    question_id: str,
    payload: QuestionUpdate,
    session: AsyncSession = Depends(get_session),
) -> QuestionAdminPublic:
    question = await CatalogService(session).update_question(question_id, payload)
    return QuestionAdminPublic.model_validate(question)


@router.delete("/questions/{question_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_question(question_id: str, session: AsyncSession = Depends(get_session)) -> None:
    await CatalogService(session).delete_question(question_id)
