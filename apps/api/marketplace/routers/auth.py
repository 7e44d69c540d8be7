from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.core import get_settings, limiter
from marketplace.db.models import UserAccount
from marketplace.dependencies import get_current_user, get_db
from marketplace.schemas import SignupRequest, LoginRequest, TokenResponse, LogoutResponse
from marketplace.services.auth import auth_service

router = APIRouter(prefix="/auth", tags=["auth"])

_settings = get_settings()


@router.post("/signup", response_model=TokenResponse)
@limiter.limit(_settings.auth_signup_rate_limit)
async def signup(
    request: Request,
    body: SignupRequest,
    db: AsyncSession = Depends(get_db),
):
    return await auth_service.signup(db, body)


@router.post("/login", response_model=TokenResponse)
@limiter.limit(_settings.auth_login_rate_limit)
async def login(
    request: Request,
    body: LoginRequest,
    db: AsyncSession = Depends(get_db),
):
    return await auth_service.login(db, body)


@router.post("/logout", response_model=LogoutResponse)
async def logout(
    current_user: UserAccount = Depends(get_current_user),
):
    return await auth_service.logout(current_user)
