from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import Column, JSON
from sqlmodel import Field, SQLModel

from ..enums import ComponentCategory, ComponentType


class Component(SQLModel, table=True):
    __tablename__ = "components"

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    name: str = Field(max_length=120)
    type: ComponentType = Field(index=True)
    icon: str = Field(default="📦")
    description: str
    price: int = Field(default=0, ge=0, index=True)
    specifications: dict = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    is_available: bool = Field(default=True, index=True)
    category: ComponentCategory = Field(default=ComponentCategory.OPTIONAL)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
