"""Auth (signup, login, current account) business logic."""

import logging
from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError

from marketplace.core import hash_password, verify_password, create_access_token
from marketplace.db.models import UserAccount
from marketplace.schemas import (
    SignupRequest,
    LoginRequest,
    TokenResponse,
    LogoutResponse,
    MeResponse,
)
from marketplace.serializers import account_to_response
from marketplace.services.session_view import resolve_view

logger = logging.getLogger(__name__)


def _normalize_email(email: str) -> str:
    return (email or "").strip().lower()


async def signup(db: AsyncSession, body: SignupRequest) -> TokenResponse:
    """Create a consumer or provider account. The role cannot be changed later."""
    email = _normalize_email(body.email)

    existing = await db.execute(select(UserAccount.id).where(func.lower(UserAccount.email) == email))
    if existing.scalar_one_or_none():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already registered")

    account = UserAccount(
        email=email,
        hashed_password=hash_password(body.password),
        role=body.role,
        full_name=body.full_name,
        phone=body.phone,
    )
    db.add(account)
    try:
        await db.flush()
    except IntegrityError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already registered")

    logger.info("Created %s account %s", account.role, account.id)
    token = create_access_token(subject=str(account.id))
    return TokenResponse(access_token=token)


async def login(db: AsyncSession, body: LoginRequest) -> TokenResponse:
    """Authenticate and return a token. Raises HTTPException if invalid credentials."""
    email = _normalize_email(body.email)
    result = await db.execute(select(UserAccount).where(func.lower(UserAccount.email) == email))
    account = result.scalar_one_or_none()
    if not account or not verify_password(body.password, account.hashed_password):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")
    token = create_access_token(subject=str(account.id))
    return TokenResponse(access_token=token)


async def logout(account: UserAccount) -> LogoutResponse:
    # Tokens are stateless; the client drops its copy.
    logger.info("Account %s signed out", account.id)
    return LogoutResponse(signed_out=True)


def me(account: UserAccount) -> MeResponse:
    return MeResponse(account=account_to_response(account), view=resolve_view(account).value)


class AuthService:
    """Facade for auth operations."""

    @staticmethod
    async def signup(db: AsyncSession, body: SignupRequest) -> TokenResponse:
        return await signup(db, body)

    @staticmethod
    async def login(db: AsyncSession, body: LoginRequest) -> TokenResponse:
        return await login(db, body)

    @staticmethod
    async def logout(account: UserAccount) -> LogoutResponse:
        return await logout(account)

    @staticmethod
    def me(account: UserAccount) -> MeResponse:
        return me(account)


auth_service = AuthService()
