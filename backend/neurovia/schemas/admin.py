from datetime import datetime
from typing import List

from pydantic import BaseModel

from ..enums import Sector
from .state import Round3State
from .team import TeamPublic


class Round3OverrideRequest(BaseModel):
    time_taken: int | None = None
    test_cases_passed: int | None = None


class Round3OverrideResponse(BaseModel):
    team_name: str
    round3: Round3State
    total_score: int
    message: str = "Round 3 time updated successfully"


class RoundScores(BaseModel):
    round1: int
    round2: int
    round3: int
    total: int


class LeaderboardEntry(BaseModel):
    rank: int
    team_id: str
    team_name: str
    sector: Sector
    scores: RoundScores
    verified: bool


class LeaderboardResponse(BaseModel):
    count: int
    entries: List[LeaderboardEntry]
    calculated_at: datetime


class CompletionStats(BaseModel):
    total: int
    round1_completed: int
    round2_completed: int
    round3_completed: int
    round3_verified: int


class SectorStats(BaseModel):
    sector: Sector
    count: int
    avg_score: float


class ScoreStats(BaseModel):
    avg_round1: float
    avg_round2: float
    avg_round3: float
    avg_total: float
    max_total: int
    min_total: int


class EventStats(BaseModel):
    teams: CompletionStats
    sectors: List[SectorStats]
    scores: ScoreStats | None = None


class AdminTeamsResponse(BaseModel):
    stats: CompletionStats
    count: int
    teams: List[TeamPublic]


class DeleteSummary(BaseModel):
    team_id: str
    message: str = "Team deleted successfully"
