import re
from datetime import datetime
from typing import List

from pydantic import BaseModel, EmailStr, Field, field_validator

from ..enums import Sector
from .state import Round1State, Round2State, Round3State

MEMBER_NAME_PATTERN = re.compile(r"^[A-Za-z\s]+$")


class MemberIn(BaseModel):
    name: str
    email: EmailStr

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 3:
            raise ValueError("Each member name must be at least 3 characters long")
        if not MEMBER_NAME_PATTERN.match(value):
            raise ValueError("Member names can only contain letters and spaces")
        return value

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: str) -> str:
        return value.strip().lower()


class TeamRegisterRequest(BaseModel):
    team_name: str = Field(..., min_length=3, max_length=50)
    members: List[MemberIn] = Field(..., min_length=1)

    @field_validator("team_name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 3:
            raise ValueError("Team name must be at least 3 characters")
        return value


class TeamRegisterResponse(BaseModel):
    team_id: str
    team_name: str
    sector: Sector
    member_count: int
    message: str = "Team registered successfully"


class MemberPublic(BaseModel):
    name: str
    email: str


class TeamPublic(BaseModel):
    id: str
    team_name: str
    members: List[MemberPublic]
    sector: Sector
    round1: Round1State
    round2: Round2State
    round3: Round3State
    total_score: int
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True
