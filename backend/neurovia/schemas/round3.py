from pydantic import BaseModel, Field

from ..enums import Sector


class ChallengeResponse(BaseModel):
    sector: Sector
    challenge_link: str
    time_limit: int


class Round3SubmitRequest(BaseModel):
    team_id: str = Field(..., min_length=1)
    test_cases_passed: int
    time_taken: int


class Round3SubmitResponse(BaseModel):
    test_cases_passed: int
    time_taken: int
    time_bonus: int
    final_score: int
    total_score: int
    awaiting_verification: bool = True
    message: str = "Round 3 results submitted successfully"


class VerifyRequest(BaseModel):
    verified: bool
    adjusted_score: int | None = Field(default=None, ge=0)


class VerifyResponse(BaseModel):
    team_name: str
    verified: bool
    final_score: int
    total_score: int
    message: str
