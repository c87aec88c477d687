from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import get_settings
from ..database import get_session
from ..schemas.team import TeamPublic, TeamRegisterRequest, TeamRegisterResponse
from ..services.team_service import TeamStore

router = APIRouter(prefix="/teams", tags=["teams"])


@router.post("/register", response_model=TeamRegisterResponse, status_code=status.HTTP_201_CREATED)
async def register_team(payload: TeamRegisterRequest, session: AsyncSession = Depends(get_session)):
    store = TeamStore(session)
    team = await store.register(payload, sectors=get_settings().registration_sectors)
    return TeamRegisterResponse(
        team_id=team.id,
        team_name=team.team_name,
        sector=team.sector,
        member_count=len(team.members),
    )


@router.get("", response_model=list[TeamPublic])
async def list_teams(session: AsyncSession = Depends(get_session)):
    teams = await TeamStore(session).list_by_total()
    return [TeamPublic.model_validate(team) for team in teams]


@router.get("/name/{team_name}", response_model=TeamPublic)
async def get_team_by_name(team_name: str, session: AsyncSession = Depends(get_session)):
    team = await TeamStore(session).get_by_name(team_name)
    return TeamPublic.model_validate(team)


@router.get("/{team_id}", response_model=TeamPublic)
async def get_team(team_id: str, session: AsyncSession = Depends(get_session)):
    team = await TeamStore(session).get(team_id)
    return TeamPublic.model_validate(team)
