from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.dependencies import get_db
from marketplace.schemas import ServiceCategoryResponse
from marketplace.services.catalog import catalog_service

router = APIRouter(prefix="/categories", tags=["catalog"])


@router.get("", response_model=list[ServiceCategoryResponse])
async def list_categories(
    db: AsyncSession = Depends(get_db),
):
    return await catalog_service.list_categories(db)


@router.get("/{category_id}", response_model=ServiceCategoryResponse)
async def get_category(
    category_id: str,
    db: AsyncSession = Depends(get_db),
):
    return await catalog_service.get_category(db, category_id)
