from datetime import datetime, timedelta, timezone

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..config import get_settings
from ..database import get_session
from ..models import Admin
from ..schemas.auth import AdminLoginRequest, AdminPublic, Token
from ..security import create_access_token, verify_password

router = APIRouter(prefix="/admin", tags=["auth"])


@router.post("/login", response_model=Token)
async def admin_login(payload: AdminLoginRequest, session: AsyncSession = Depends(get_session)):
    statement = select(Admin).where(Admin.username == payload.username.strip().lower())
    admin = (await session.execute(statement)).scalar_one_or_none()
    if not admin or not verify_password(payload.password, admin.hashed_password):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    if not admin.is_active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Account is inactive")

    admin.last_login = datetime.now(timezone.utc)
    session.add(admin)
    await session.commit()
    await session.refresh(admin)

    expires_delta = timedelta(minutes=get_settings().access_token_expire_minutes)
    token_value = create_access_token(admin.id, expires_delta, role=admin.role.value)
    return Token(
        access_token=token_value,
        expires_at=datetime.now(timezone.utc) + expires_delta,
        admin=AdminPublic.model_validate(admin),
    )
