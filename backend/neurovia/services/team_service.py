import logging
import random
from datetime import datetime, timezone
from typing import Optional, Sequence

from sqlalchemy import update as sa_update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..enums import Sector
from ..errors import ConflictError, InvalidInputError, NotFoundError
from ..game.scoring import compute_total_score
from ..models import Team
from ..schemas.state import Round1State, Round2State, Round3State
from ..schemas.team import TeamRegisterRequest

logger = logging.getLogger(__name__)


class TeamStore:
    """Team records keyed by id. Every round write goes through save_rounds."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, team_id: str) -> Team:
        team = await self.session.get(Team, team_id)
        if not team:
            raise NotFoundError("Team not found", team_id=team_id)
        return team

    async def get_by_name(self, team_name: str) -> Team:
        statement = select(Team).where(Team.team_name == team_name)
        team = (await self.session.execute(statement)).scalar_one_or_none()
        if not team:
            raise NotFoundError("Team not found", team_name=team_name)
        return team

    async def list_by_total(self) -> Sequence[Team]:
        statement = select(Team).order_by(Team.total_score.desc(), Team.created_at)
        return (await self.session.execute(statement)).scalars().all()

    async def list_in_store_order(self) -> Sequence[Team]:
        statement = select(Team).order_by(Team.created_at, Team.id)
        return (await self.session.execute(statement)).scalars().all()

    async def register(self, payload: TeamRegisterRequest, *, sectors: Sequence[str]) -> Team:
        if not sectors:
            raise InvalidInputError("No sectors are open for registration")

        existing = select(Team).where(Team.team_name == payload.team_name)
        if (await self.session.execute(existing)).scalar_one_or_none():
            raise ConflictError("Team name already exists", team_name=payload.team_name)

        team = Team(
            team_name=payload.team_name,
            members=[member.model_dump() for member in payload.members],
            sector=Sector(random.choice(list(sectors))),
        )
        self.session.add(team)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise ConflictError("Team name already exists", team_name=payload.team_name) from None
        await self.session.refresh(team)
        logger.info("Registered team %s (%s) in sector %s", team.team_name, team.id, team.sector.value)
        return team

    async def save_rounds(
        self,
        team: Team,
        *,
        round1: Optional[Round1State] = None,
        round2: Optional[Round2State] = None,
        round3: Optional[Round3State] = None,
    ) -> Team:
        """
        Persist new round states in one conditional UPDATE guarded by the
        version the caller read. total_score is recomputed from the resulting
        round states; a concurrent writer makes the update match no rows and
        the call fails with ConflictError, leaving the record untouched.
        """
        values: dict = {}
        for name, state in (("round1", round1), ("round2", round2), ("round3", round3)):
            if state is not None:
                values[name] = state.model_dump(mode="json")

        r1 = round1 or team.round1_state
        r2 = round2 or team.round2_state
        r3 = round3 or team.round3_state
        values["total_score"] = compute_total_score(r1.final_score, r2.final_score, r3.final_score)
        values["version"] = team.version + 1
        values["updated_at"] = datetime.now(timezone.utc)

        statement = (
            sa_update(Team)
            .where(Team.id == team.id)
            .where(Team.version == team.version)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(statement)
        if result.rowcount != 1:
            await self.session.rollback()
            logger.warning("Lost update race on team %s at version %s", team.id, team.version)
            raise ConflictError("Team record changed while processing the request; please retry.")

        await self.session.commit()
        await self.session.refresh(team)
        return team

    async def delete(self, team: Team) -> None:
        await self.session.delete(team)
        await self.session.commit()
        logger.info("Deleted team %s (%s)", team.team_name, team.id)
