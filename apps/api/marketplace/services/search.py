"""Provider search: verified providers at a pincode, optionally narrowed to one service category, best rated first."""

import logging
from typing import Iterable, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from marketplace.db.models import ProviderProfile, ProviderServiceLink
from marketplace.errors import SearchFailed, ValidationError
from marketplace.schemas import ProviderProfileResponse, SearchRequest
from marketplace.serializers import provider_to_response
from marketplace.utils import canonical_uuid

logger = logging.getLogger(__name__)


def _normalize_category_id(category_id: Optional[str]) -> Optional[str]:
    cleaned = (category_id or "").strip()
    if not cleaned:
        return None
    # Anything that is not a UUID is kept as-is and simply matches no link.
    return canonical_uuid(cleaned) or cleaned


def _rank_key(provider) -> tuple:
    # Highest rating first; equal ratings fall back to provider id so the order is deterministic.
    return (-float(provider.average_rating or 0), str(provider.id))


def rank_providers(providers: Iterable, category_id: Optional[str] = None) -> list:
    """Filter raw provider rows by category membership and order them by rating.

    Works on anything shaped like ProviderProfile (``id``, ``average_rating`` and
    ``services`` with ``category_id``), so it can be exercised without a database.
    """
    wanted = _normalize_category_id(category_id)
    rows = list(providers)
    if wanted is not None:
        rows = [
            p for p in rows
            if any(link.category_id == wanted for link in (p.services or []))
        ]
    return sorted(rows, key=_rank_key)


async def fetch_verified_providers(db: AsyncSession, pincode: str) -> list[ProviderProfile]:
    """Verified providers at exactly this pincode, with owner and service links (plus categories) loaded."""
    result = await db.execute(
        select(ProviderProfile)
        .where(ProviderProfile.is_verified.is_(True), ProviderProfile.pincode == pincode)
        .options(
            selectinload(ProviderProfile.user),
            selectinload(ProviderProfile.services).selectinload(ProviderServiceLink.category),
        )
        .execution_options(populate_existing=True)
    )
    return list(result.scalars().all())


async def search_providers(
    db: AsyncSession,
    pincode: str,
    category_id: Optional[str] = None,
) -> list[ProviderProfileResponse]:
    location_key = (pincode or "").strip()
    if not location_key:
        raise ValidationError("Please enter a pincode")

    try:
        rows = await fetch_verified_providers(db, location_key)
    except SQLAlchemyError as e:
        logger.warning("Provider search failed for pincode %s: %s", location_key, e)
        raise SearchFailed("Failed to search providers", cause=e) from e

    ranked = rank_providers(rows, category_id)
    logger.info(
        "Provider search pincode=%s category=%s matched=%d of %d",
        location_key,
        _normalize_category_id(category_id),
        len(ranked),
        len(rows),
    )
    return [provider_to_response(p) for p in ranked]


class SearchService:
    """Facade for provider search."""

    rank_providers = staticmethod(rank_providers)

    @staticmethod
    async def search(db: AsyncSession, body: SearchRequest) -> list[ProviderProfileResponse]:
        return await search_providers(db, body.pincode, body.category_id)


search_service = SearchService()
