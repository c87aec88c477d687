from datetime import datetime

from pydantic import BaseModel

from ..enums import AdminRole


class AdminLoginRequest(BaseModel):
    username: str
    password: str


class AdminPublic(BaseModel):
    id: str
    username: str
    name: str
    email: str | None = None
    role: AdminRole

    class Config:
        from_attributes = True


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_at: datetime
    admin: AdminPublic
