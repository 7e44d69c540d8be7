from fastapi import APIRouter, Depends

from marketplace.db.models import UserAccount
from marketplace.dependencies import get_current_user
from marketplace.schemas import MeResponse
from marketplace.services.auth import auth_service

router = APIRouter(prefix="/me", tags=["me"])


@router.get("", response_model=MeResponse)
async def get_me(
    current_user: UserAccount = Depends(get_current_user),
):
    """Signed-in account and the view (consumer search or provider dashboard) to render for it."""
    return auth_service.me(current_user)
