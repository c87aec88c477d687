import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..game.engine import RoundEngine
from ..game.rules import GameRules
from ..game.scoring import ChallengeScore
from ..models import Team
from .team_service import TeamStore

logger = logging.getLogger(__name__)


@dataclass
class ChallengeHandoff:
    team: Team
    link: str
    time_limit: int


@dataclass
class ChallengeReceipt:
    team: Team
    score: ChallengeScore


class Round3Service:
    def __init__(self, session: AsyncSession, rules: GameRules) -> None:
        self.session = session
        self.engine = RoundEngine(rules)
        self.teams = TeamStore(session)

    async def challenge(self, team_id: str) -> ChallengeHandoff:
        team = await self.teams.get(team_id)
        link = self.engine.challenge_link(team.sector.value, team.round2_state)
        return ChallengeHandoff(
            team=team,
            link=link,
            time_limit=self.engine.rules.challenge_time_limit_minutes,
        )

    async def submit(self, *, team_id: str, test_cases_passed: int, time_taken: int) -> ChallengeReceipt:
        team = await self.teams.get(team_id)
        outcome = self.engine.submit_challenge(
            team.sector.value,
            team.round2_state,
            team.round3_state,
            test_cases_passed=test_cases_passed,
            time_taken=time_taken,
        )
        team = await self.teams.save_rounds(team, round3=outcome.round3)
        logger.info(
            "Team %s reported %s tests in %s min, score %s pending verification",
            team.id,
            test_cases_passed,
            time_taken,
            outcome.score.final_score,
        )
        return ChallengeReceipt(team=team, score=outcome.score)

    async def verify(self, *, team_id: str, verified: bool, adjusted_score: Optional[int] = None) -> Team:
        team = await self.teams.get(team_id)
        round3 = self.engine.verify_challenge(
            team.round3_state,
            verified=verified,
            adjusted_score=adjusted_score,
        )
        team = await self.teams.save_rounds(team, round3=round3)
        logger.info(
            "Round 3 of team %s marked verified=%s, score %s",
            team.id,
            verified,
            round3.final_score,
        )
        return team

    async def override(
        self,
        *,
        team_id: str,
        time_taken: Optional[int] = None,
        test_cases_passed: Optional[int] = None,
    ) -> Team:
        team = await self.teams.get(team_id)
        round3 = self.engine.override_challenge(
            team.round3_state,
            time_taken=time_taken,
            test_cases_passed=test_cases_passed,
        )
        team = await self.teams.save_rounds(team, round3=round3)
        logger.info("Admin override of round 3 for team %s, score %s", team.id, round3.final_score)
        return team
