from collections import defaultdict
from datetime import datetime, timezone
from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from ..models import Team
from ..schemas.admin import (
    CompletionStats,
    EventStats,
    LeaderboardEntry,
    LeaderboardResponse,
    RoundScores,
    ScoreStats,
    SectorStats,
)
from .team_service import TeamStore


def _average(values: Sequence[int]) -> float:
    return round(sum(values) / len(values), 2) if values else 0.0


def completion_stats(teams: Sequence[Team]) -> CompletionStats:
    return CompletionStats(
        total=len(teams),
        round1_completed=sum(1 for team in teams if team.round1_state.submitted),
        round2_completed=sum(1 for team in teams if team.round2_state.submitted),
        round3_completed=sum(1 for team in teams if team.round3_state.submitted),
        round3_verified=sum(1 for team in teams if team.round3_state.admin_verified),
    )


def build_leaderboard(teams: Sequence[Team]) -> list[LeaderboardEntry]:
    """Rank teams that finished round 1; sorted() is stable so ties keep store order."""
    eligible = [team for team in teams if team.round1_state.submitted]
    ranked = sorted(eligible, key=lambda team: team.total_score, reverse=True)
    entries: list[LeaderboardEntry] = []
    for rank, team in enumerate(ranked, start=1):
        round3 = team.round3_state
        entries.append(
            LeaderboardEntry(
                rank=rank,
                team_id=team.id,
                team_name=team.team_name,
                sector=team.sector,
                scores=RoundScores(
                    round1=team.round1_state.final_score,
                    round2=team.round2_state.final_score,
                    round3=round3.final_score,
                    total=team.total_score,
                ),
                verified=round3.admin_verified,
            )
        )
    return entries


def build_event_stats(teams: Sequence[Team]) -> EventStats:
    by_sector: dict = defaultdict(list)
    for team in teams:
        by_sector[team.sector].append(team.total_score)
    sectors = [
        SectorStats(sector=sector, count=len(totals), avg_score=_average(totals))
        for sector, totals in by_sector.items()
    ]

    scored = [team for team in teams if team.round1_state.submitted]
    scores = None
    if scored:
        totals = [team.total_score for team in scored]
        scores = ScoreStats(
            avg_round1=_average([team.round1_state.final_score for team in scored]),
            avg_round2=_average([team.round2_state.final_score for team in scored]),
            avg_round3=_average([team.round3_state.final_score for team in scored]),
            avg_total=_average(totals),
            max_total=max(totals),
            min_total=min(totals),
        )

    return EventStats(teams=completion_stats(teams), sectors=sectors, scores=scores)


class AdminService:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.teams = TeamStore(session)

    async def teams_overview(self) -> tuple[CompletionStats, Sequence[Team]]:
        teams = await self.teams.list_by_total()
        return completion_stats(teams), teams

    async def leaderboard(self) -> LeaderboardResponse:
        entries = build_leaderboard(await self.teams.list_in_store_order())
        return LeaderboardResponse(
            count=len(entries),
            entries=entries,
            calculated_at=datetime.now(timezone.utc),
        )

    async def stats(self) -> EventStats:
        return build_event_stats(await self.teams.list_in_store_order())

    async def delete_team(self, team_id: str) -> None:
        team = await self.teams.get(team_id)
        await self.teams.delete(team)
