import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from ..game.engine import AnswerCheck, RoundEngine
from ..game.rules import GameRules
from ..game.scoring import QuizScore
from ..models import Component, QuizQuestion, Team
from .catalog_service import CatalogService
from .team_service import TeamStore

logger = logging.getLogger(__name__)


@dataclass
class PurchaseReceipt:
    team: Team
    total_cost: int


class Round1Service:
    def __init__(self, session: AsyncSession, rules: GameRules) -> None:
        self.session = session
        self.engine = RoundEngine(rules)
        self.catalog = CatalogService(session)
        self.teams = TeamStore(session)

    async def quiz_questions(self) -> Sequence[QuizQuestion]:
        return await self.catalog.active_questions(self.engine.rules.quiz_question_limit)

    async def _answer_key(self) -> list[int]:
        return [question.correct_answer for question in await self.quiz_questions()]

    async def check_answer(self, *, question_index: int, selected_answer: int) -> AnswerCheck:
        return self.engine.check_answer(
            await self._answer_key(),
            question_index=question_index,
            selected=selected_answer,
        )

    async def submit_quiz(self, *, team_id: str, answers: Sequence[Optional[int]]) -> QuizScore:
        team = await self.teams.get(team_id)
        outcome = self.engine.submit_quiz(
            team.round1_state,
            correct_answers=await self._answer_key(),
            selected=answers,
        )
        await self.teams.save_rounds(team, round1=outcome.round1)
        logger.info(
            "Team %s answered %s/%s quiz questions, balance %s",
            team.id,
            outcome.score.correct_answers,
            outcome.score.total_questions,
            outcome.score.total_balance,
        )
        return outcome.score

    async def components(self) -> Sequence[Component]:
        return await self.catalog.available_components()

    async def purchase(self, *, team_id: str, component_ids: Sequence[str]) -> PurchaseReceipt:
        team = await self.teams.get(team_id)
        self.engine.ensure_can_purchase(team.round1_state)

        resolved = await self.catalog.resolve_components(component_ids)
        outcome = self.engine.purchase(
            team.round1_state,
            requested_ids=component_ids,
            resolved=resolved,
        )
        team = await self.teams.save_rounds(team, round1=outcome.round1)
        logger.info(
            "Team %s purchased %s components for %s, remaining %s",
            team.id,
            len(outcome.round1.purchased_components),
            outcome.total_cost,
            outcome.round1.total_balance,
        )
        return PurchaseReceipt(team=team, total_cost=outcome.total_cost)
