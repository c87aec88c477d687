from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import Column, JSON
from sqlmodel import Field, SQLModel

from ..enums import Sector
from ..schemas.state import Round1State, Round2State, Round3State


class Team(SQLModel, table=True):
    """
    One record per registered team. The round sub-states live in JSON columns
    and are only rewritten through TeamStore.save_rounds, which also keeps
    total_score and version in step.
    """

    __tablename__ = "teams"

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    team_name: str = Field(index=True, unique=True, max_length=50)
    members: list[dict] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    sector: Sector = Field(index=True)
    round1: dict = Field(
        default_factory=lambda: Round1State().model_dump(mode="json"),
        sa_column=Column(JSON, nullable=False),
    )
    round2: dict = Field(
        default_factory=lambda: Round2State().model_dump(mode="json"),
        sa_column=Column(JSON, nullable=False),
    )
    round3: dict = Field(
        default_factory=lambda: Round3State().model_dump(mode="json"),
        sa_column=Column(JSON, nullable=False),
    )
    total_score: int = Field(default=0, index=True)
    is_active: bool = Field(default=True)
    version: int = Field(default=1)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def round1_state(self) -> Round1State:
        return Round1State.model_validate(self.round1 or {})

    @property
    def round2_state(self) -> Round2State:
        return Round2State.model_validate(self.round2 or {})

    @property
    def round3_state(self) -> Round3State:
        return Round3State.model_validate(self.round3 or {})
