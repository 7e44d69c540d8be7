from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from marketplace.db.session import get_db
from marketplace.db.models import UserAccount
from marketplace.core import decode_access_token
from marketplace.utils import is_uuid

security = HTTPBearer(auto_error=False)


async def _account_from_token(db: AsyncSession, token: str) -> UserAccount | None:
    user_id = decode_access_token(token)
    if not user_id or not is_uuid(user_id):
        return None
    result = await db.execute(select(UserAccount).where(UserAccount.id == user_id))
    return result.scalar_one_or_none()


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> UserAccount:
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    account = await _account_from_token(db, credentials.credentials)
    if not account:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return account


__all__ = ["get_db", "get_current_user"]
