from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.core import get_settings, limiter
from marketplace.core.constants import MAX_REVIEW_PAGE_SIZE
from marketplace.db.models import UserAccount
from marketplace.dependencies import get_current_user, get_db
from marketplace.schemas import (
    ProviderDashboardResponse,
    ProviderProfileResponse,
    ProviderProfileUpdate,
    ReviewCreate,
    ReviewResponse,
)
from marketplace.services.provider_profile import provider_profile_service
from marketplace.services.review import review_service

router = APIRouter(prefix="/providers", tags=["providers"])


@router.get("/me", response_model=ProviderDashboardResponse)
async def get_my_dashboard(
    current_user: UserAccount = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await provider_profile_service.get_dashboard(db, current_user)


@router.put("/me", response_model=ProviderProfileResponse)
async def save_my_profile(
    body: ProviderProfileUpdate,
    current_user: UserAccount = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Create or update the caller's provider profile; service_category_ids replaces the offered services."""
    return await provider_profile_service.save(db, current_user, body)


@router.get("/{provider_id}/reviews", response_model=list[ReviewResponse])
async def list_provider_reviews(
    provider_id: str,
    limit: Optional[int] = Query(default=None, ge=1, le=MAX_REVIEW_PAGE_SIZE),
    db: AsyncSession = Depends(get_db),
):
    return await review_service.list_for_provider(db, provider_id, limit)


@router.post("/{provider_id}/reviews", response_model=ReviewResponse, status_code=201)
@limiter.limit(get_settings().review_rate_limit)
async def submit_provider_review(
    request: Request,
    provider_id: str,
    body: ReviewCreate,
    current_user: UserAccount = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await review_service.submit(db, current_user, provider_id, body)
