"""Shared model-to-response serializers."""

from sqlalchemy import inspect

from marketplace.db.models import (
    UserAccount,
    ServiceCategory,
    ProviderProfile,
    ProviderServiceLink,
    Review,
)
from marketplace.schemas import (
    AccountResponse,
    ServiceCategoryResponse,
    ProviderOwnerResponse,
    ProviderServiceResponse,
    ProviderProfileResponse,
    ReviewResponse,
)


def _loaded(obj, attr: str) -> bool:
    """True when a relationship is already loaded (avoids implicit IO under asyncio)."""
    return attr not in inspect(obj).unloaded


def account_to_response(account: UserAccount) -> AccountResponse:
    return AccountResponse(
        id=account.id,
        email=account.email,
        role=account.role,
        full_name=account.full_name,
        phone=account.phone,
        created_at=account.created_at,
    )


def category_to_response(category: ServiceCategory) -> ServiceCategoryResponse:
    return ServiceCategoryResponse(
        id=category.id,
        name=category.name,
        description=category.description,
        created_at=category.created_at,
    )


def service_link_to_response(link: ProviderServiceLink) -> ProviderServiceResponse:
    category = link.category if _loaded(link, "category") else None
    return ProviderServiceResponse(
        id=link.id,
        category_id=link.category_id,
        category=category_to_response(category) if category is not None else None,
    )


def provider_to_response(profile: ProviderProfile) -> ProviderProfileResponse:
    """Map ProviderProfile (with owner and service links when eagerly loaded) to its response."""
    owner = profile.user if _loaded(profile, "user") else None
    services = profile.services if _loaded(profile, "services") else []
    return ProviderProfileResponse(
        id=profile.id,
        user_id=profile.user_id,
        bio=profile.bio,
        experience_years=profile.experience_years,
        hourly_rate=profile.hourly_rate,
        pincode=profile.pincode,
        address=profile.address,
        is_verified=profile.is_verified,
        average_rating=profile.average_rating,
        total_reviews=profile.total_reviews,
        owner=ProviderOwnerResponse(full_name=owner.full_name, phone=owner.phone) if owner else None,
        services=[service_link_to_response(s) for s in services],
        created_at=profile.created_at,
        updated_at=profile.updated_at,
    )


def review_to_response(review: Review) -> ReviewResponse:
    consumer = review.consumer if _loaded(review, "consumer") else None
    return ReviewResponse(
        id=review.id,
        provider_id=review.provider_id,
        consumer_id=review.consumer_id,
        reviewer_name=consumer.full_name if consumer else None,
        rating=review.rating,
        comment=review.comment,
        created_at=review.created_at,
    )
