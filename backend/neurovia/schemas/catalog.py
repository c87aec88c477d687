from datetime import datetime
from typing import List

from pydantic import BaseModel, Field

from ..enums import ComponentCategory, ComponentType, Difficulty, QuestionCategory


class ComponentBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    type: ComponentType
    icon: str = "📦"
    description: str = Field(..., min_length=1)
    price: int = Field(..., ge=0)
    specifications: dict[str, str] = Field(default_factory=dict)
    is_available: bool = True
    category: ComponentCategory = ComponentCategory.OPTIONAL


class ComponentCreate(ComponentBase):
    pass


class ComponentUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=120)
    type: ComponentType | None = None
    icon: str | None = None
    description: str | None = None
    price: int | None = Field(default=None, ge=0)
    specifications: dict[str, str] | None = None
    is_available: bool | None = None
    category: ComponentCategory | None = None


class ComponentPublic(ComponentBase):
    id: str
    created_at: datetime

    class Config:
        from_attributes = True


class QuestionBase(BaseModel):
    question: str = Field(..., min_length=1)
    options: List[str] = Field(..., min_length=4, max_length=4)
    category: QuestionCategory = QuestionCategory.GENERAL
    difficulty: Difficulty = Difficulty.MEDIUM
    is_active: bool = True


class QuestionCreate(QuestionBase):
    correct_answer: int = Field(..., ge=0, le=3)
    points: int = Field(default=100, ge=0)
    sort_order: int = 0


class QuestionUpdate(BaseModel):
    question: str | None = Field(default=None, min_length=1)
    options: List[str] | None = Field(default=None, min_length=4, max_length=4)
    correct_answer: int | None = Field(default=None, ge=0, le=3)
    points: int | None = Field(default=None, ge=0)
    category: QuestionCategory | None = None
    difficulty: Difficulty | None = None
    is_active: bool | None = None
    sort_order: int | None = None


class QuestionPublic(QuestionBase):
    """Team-facing view; the correct answer is never part of it."""

    id: str

    class Config:
        from_attributes = True


class QuestionAdminPublic(QuestionCreate):
    id: str
    created_at: datetime

    class Config:
        from_attributes = True
