from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import Column, JSON
from sqlmodel import Field, SQLModel

from ..enums import Difficulty, QuestionCategory


class QuizQuestion(SQLModel, table=True):
    """
    Catalog question. Quiz delivery and scoring both walk the active set in
    (sort_order, created_at, id) order, so answers are matched by position.
    """

    __tablename__ = "quiz_questions"

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    question: str
    options: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    correct_answer: int = Field(ge=0, le=3)
    points: int = Field(default=100)
    category: QuestionCategory = Field(default=QuestionCategory.GENERAL, index=True)
    difficulty: Difficulty = Field(default=Difficulty.MEDIUM, index=True)
    is_active: bool = Field(default=True, index=True)
    sort_order: int = Field(default=0, index=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
