from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.core import get_settings, limiter
from marketplace.db.models import UserAccount
from marketplace.dependencies import get_current_user, get_db
from marketplace.schemas import SearchRequest, ProviderProfileResponse
from marketplace.services.search import search_service

router = APIRouter(tags=["search"])


@router.post("/search", response_model=list[ProviderProfileResponse])
@limiter.limit(get_settings().search_rate_limit)
async def search(
    request: Request,
    body: SearchRequest,
    current_user: UserAccount = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Verified providers at the pincode, optionally offering one category, best rated first."""
    return await search_service.search(db, body)
