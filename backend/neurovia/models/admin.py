from datetime import datetime, timezone
from uuid import uuid4

from sqlmodel import Field, SQLModel

from ..enums import AdminRole


class Admin(SQLModel, table=True):
    __tablename__ = "admins"

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    username: str = Field(index=True, unique=True)
    hashed_password: str
    name: str = Field(default="")
    email: str | None = Field(default=None)
    role: AdminRole = Field(default=AdminRole.ADMIN)
    is_active: bool = Field(default=True)
    last_login: datetime | None = Field(default=None)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
