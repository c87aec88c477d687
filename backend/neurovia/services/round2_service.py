import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from ..enums import ComponentType
from ..errors import NotFoundError
from ..game.engine import Placement, RoundEngine
from ..game.rules import GameRules
from ..game.scoring import SchematicScore
from ..game.sectors import SECTOR_BRIEFS
from ..models import Team
from .team_service import TeamStore

logger = logging.getLogger(__name__)


@dataclass
class SchematicReceipt:
    team: Team
    score: SchematicScore


class Round2Service:
    def __init__(
        self,
        session: AsyncSession,
        rules: GameRules,
        briefs: dict | None = None,
    ) -> None:
        self.session = session
        self.engine = RoundEngine(rules)
        self.briefs = SECTOR_BRIEFS if briefs is None else briefs
        self.teams = TeamStore(session)

    def correct_flow(self) -> list[ComponentType]:
        return list(self.engine.rules.correct_flow)

    async def sector_info(self, team_id: str) -> tuple[Team, dict]:
        team = await self.teams.get(team_id)
        brief = self.briefs.get(team.sector)
        if not brief:
            raise NotFoundError("Sector information not found", sector=team.sector.value)
        return team, brief

    async def submit_schematic(
        self,
        *,
        team_id: str,
        placements: Sequence[Optional[Placement]],
        time_taken: float,
    ) -> SchematicReceipt:
        team = await self.teams.get(team_id)
        outcome = self.engine.submit_schematic(
            team.round1_state,
            team.round2_state,
            placements=placements,
            time_taken=time_taken,
        )
        team = await self.teams.save_rounds(team, round2=outcome.round2)
        logger.info(
            "Team %s placed %s/%s components correctly in %.1f min, score %s",
            team.id,
            outcome.score.correct_placements,
            outcome.score.total_slots,
            time_taken,
            outcome.score.final_score,
        )
        return SchematicReceipt(team=team, score=outcome.score)
