"""Provider profile business logic: dashboard read and the profile + offered-services save."""

import logging
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional

from sqlalchemy import select, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from marketplace.core import ROLE_PROVIDER
from marketplace.db.models import ProviderProfile, ProviderServiceLink, ServiceCategory, UserAccount
from marketplace.errors import PermissionDenied, SaveFailed, ValidationError
from marketplace.schemas import (
    ProviderDashboardResponse,
    ProviderProfileResponse,
    ProviderProfileUpdate,
)
from marketplace.serializers import provider_to_response
from marketplace.services.review import list_reviews
from marketplace.utils import blank_to_none, canonical_uuid

logger = logging.getLogger(__name__)


def _require_provider(owner: UserAccount) -> None:
    if owner.role != ROLE_PROVIDER:
        raise PermissionDenied("Only provider accounts have a provider profile")


def unique_category_ids(category_ids: Iterable[str]) -> list[str]:
    """Canonical, de-duplicated ids in first-seen order; malformed ids are rejected."""
    seen: list[str] = []
    for raw in category_ids:
        if not (raw or "").strip():
            continue
        cid = canonical_uuid(raw)
        if cid is None:
            raise ValidationError(f"Invalid service category id: {raw!r}")
        if cid not in seen:
            seen.append(cid)
    return seen


def _validated_attributes(body: ProviderProfileUpdate) -> dict:
    if body.experience_years is None or body.experience_years < 0:
        raise ValidationError("Experience years cannot be negative")
    try:
        hourly_rate = Decimal(body.hourly_rate)
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError("Hourly rate must be a number")
    if not hourly_rate.is_finite() or hourly_rate < 0:
        raise ValidationError("Hourly rate cannot be negative")
    return {
        "bio": blank_to_none(body.bio),
        "experience_years": body.experience_years,
        "hourly_rate": hourly_rate,
        "pincode": (body.pincode or "").strip(),
        "address": blank_to_none(body.address),
    }


async def load_provider_profile(
    db: AsyncSession,
    user_id: str,
    refresh: bool = False,
) -> Optional[ProviderProfile]:
    """Provider profile for an account with owner and service links (and their categories) loaded."""
    stmt = (
        select(ProviderProfile)
        .where(ProviderProfile.user_id == user_id)
        .options(
            selectinload(ProviderProfile.user),
            selectinload(ProviderProfile.services).selectinload(ProviderServiceLink.category),
        )
    )
    if refresh:
        stmt = stmt.execution_options(populate_existing=True)
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def _upsert_profile(db: AsyncSession, owner_id: str, attrs: dict) -> ProviderProfile:
    result = await db.execute(select(ProviderProfile).where(ProviderProfile.user_id == owner_id))
    profile = result.scalar_one_or_none()
    if profile is None:
        profile = ProviderProfile(
            user_id=owner_id,
            is_verified=False,
            average_rating=Decimal("0"),
            total_reviews=0,
            **attrs,
        )
        db.add(profile)
        await db.flush()
        logger.info("Created provider profile %s for account %s", profile.id, owner_id)
        return profile
    for key, value in attrs.items():
        setattr(profile, key, value)
    profile.updated_at = datetime.now(timezone.utc)
    await db.flush()
    return profile


async def _replace_service_links(db: AsyncSession, provider_id: str, category_ids: list[str]) -> None:
    """Make the provider's links exactly category_ids (delete all, then insert)."""
    if category_ids:
        result = await db.execute(select(ServiceCategory.id).where(ServiceCategory.id.in_(category_ids)))
        known = set(result.scalars().all())
        missing = [cid for cid in category_ids if cid not in known]
        if missing:
            raise SaveFailed(f"Unknown service categories: {', '.join(missing)}")

    await db.execute(
        delete(ProviderServiceLink)
        .where(ProviderServiceLink.provider_id == provider_id)
        .execution_options(synchronize_session=False)
    )
    for category_id in category_ids:
        db.add(ProviderServiceLink(provider_id=provider_id, category_id=category_id))
    await db.flush()


async def save_provider_profile(
    db: AsyncSession,
    owner: UserAccount,
    body: ProviderProfileUpdate,
) -> ProviderProfileResponse:
    """Upsert the owner's provider profile and replace its offered services in one transaction.

    Nothing is committed unless every step succeeds; on failure the transaction is rolled
    back and SaveFailed is raised.
    """
    _require_provider(owner)
    attrs = _validated_attributes(body)
    category_ids = unique_category_ids(body.service_category_ids)
    owner_id = owner.id

    try:
        profile = await _upsert_profile(db, owner_id, attrs)
        provider_id = profile.id
        await _replace_service_links(db, provider_id, category_ids)
        await db.commit()
    except SaveFailed:
        await db.rollback()
        raise
    except SQLAlchemyError as e:
        await db.rollback()
        logger.warning("Provider profile save failed for account %s: %s", owner_id, e)
        raise SaveFailed("Failed to save profile", cause=e) from e

    logger.info(
        "Saved provider profile %s for account %s with %d services",
        provider_id,
        owner_id,
        len(category_ids),
    )
    try:
        saved = await load_provider_profile(db, owner_id, refresh=True)
    except SQLAlchemyError as e:
        raise SaveFailed("Profile saved but could not be reloaded", cause=e) from e
    if saved is None:
        raise SaveFailed("Profile saved but could not be reloaded")
    return provider_to_response(saved)


async def get_dashboard(db: AsyncSession, owner: UserAccount) -> ProviderDashboardResponse:
    """The provider's own profile (None before the first save), selected categories and reviews."""
    _require_provider(owner)
    profile = await load_provider_profile(db, owner.id, refresh=True)
    if profile is None:
        return ProviderDashboardResponse()
    reviews = await list_reviews(db, profile.id)
    return ProviderDashboardResponse(
        profile=provider_to_response(profile),
        selected_category_ids=[s.category_id for s in profile.services],
        reviews=reviews,
    )


class ProviderProfileService:
    """Facade for provider profile operations."""

    @staticmethod
    async def save(
        db: AsyncSession,
        owner: UserAccount,
        body: ProviderProfileUpdate,
    ) -> ProviderProfileResponse:
        return await save_provider_profile(db, owner, body)

    @staticmethod
    async def get_dashboard(db: AsyncSession, owner: UserAccount) -> ProviderDashboardResponse:
        return await get_dashboard(db, owner)


provider_profile_service = ProviderProfileService()
