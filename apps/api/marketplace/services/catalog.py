"""Service category reference data."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.db.models import ServiceCategory
from marketplace.errors import NotFoundError
from marketplace.schemas import ServiceCategoryResponse
from marketplace.serializers import category_to_response
from marketplace.utils import canonical_uuid


async def list_categories(db: AsyncSession) -> list[ServiceCategoryResponse]:
    result = await db.execute(select(ServiceCategory).order_by(ServiceCategory.name))
    return [category_to_response(c) for c in result.scalars().all()]


async def get_category(db: AsyncSession, category_id: str) -> ServiceCategoryResponse:
    category_id = canonical_uuid(category_id)
    if category_id is None:
        raise NotFoundError("Service category not found")
    result = await db.execute(select(ServiceCategory).where(ServiceCategory.id == category_id))
    category = result.scalar_one_or_none()
    if not category:
        raise NotFoundError("Service category not found")
    return category_to_response(category)


class CatalogService:
    """Facade for category lookups."""

    list_categories = staticmethod(list_categories)
    get_category = staticmethod(get_category)


catalog_service = CatalogService()
