"""Consumer reviews of providers: submission (one per consumer and provider) and listing."""

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from marketplace.core import get_settings, ROLE_CONSUMER, MIN_RATING, MAX_RATING
from marketplace.core.constants import MAX_REVIEW_PAGE_SIZE
from marketplace.db.models import ProviderProfile, Review, UserAccount
from marketplace.errors import (
    DuplicateReviewError,
    NotFoundError,
    PermissionDenied,
    ReviewFailed,
    ValidationError,
)
from marketplace.schemas import ReviewCreate, ReviewResponse
from marketplace.serializers import review_to_response
from marketplace.utils import blank_to_none, canonical_uuid

logger = logging.getLogger(__name__)

_RATING_QUANTUM = Decimal("0.01")


def validate_rating(rating) -> int:
    # bool is an int subclass; True must not pass as a rating of 1
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise ValidationError("Rating must be a whole number between 1 and 5")
    if rating < MIN_RATING or rating > MAX_RATING:
        raise ValidationError("Rating must be a whole number between 1 and 5")
    return rating


async def _find_review(db: AsyncSession, provider_id: str, consumer_id: str) -> Optional[Review]:
    result = await db.execute(
        select(Review).where(Review.provider_id == provider_id, Review.consumer_id == consumer_id)
    )
    return result.scalar_one_or_none()


async def refresh_review_aggregates(db: AsyncSession, provider: ProviderProfile) -> None:
    """Recompute average_rating and total_reviews from the provider's reviews (pending rows must be flushed)."""
    result = await db.execute(
        select(func.avg(Review.rating), func.count(Review.id)).where(Review.provider_id == provider.id)
    )
    avg, count = result.one()
    average = Decimal(str(avg)) if avg is not None else Decimal("0")
    provider.average_rating = average.quantize(_RATING_QUANTUM, rounding=ROUND_HALF_UP)
    provider.total_reviews = int(count or 0)


async def submit_review(
    db: AsyncSession,
    consumer: UserAccount,
    provider_id: str,
    body: ReviewCreate,
) -> ReviewResponse:
    rating = validate_rating(body.rating)
    comment = blank_to_none(body.comment)
    if consumer.role != ROLE_CONSUMER:
        raise PermissionDenied("Only consumers can review providers")
    provider_id = canonical_uuid(provider_id)
    if provider_id is None:
        raise NotFoundError("Provider not found")
    consumer_id = consumer.id

    try:
        result = await db.execute(select(ProviderProfile).where(ProviderProfile.id == provider_id))
        provider = result.scalar_one_or_none()
        if provider is None:
            raise NotFoundError("Provider not found")
        if await _find_review(db, provider_id, consumer_id) is not None:
            raise DuplicateReviewError("You have already reviewed this provider")

        review = Review(provider_id=provider_id, consumer_id=consumer_id, rating=rating, comment=comment)
        db.add(review)
        try:
            await db.flush()
        except IntegrityError as e:
            # A concurrent submission from the same consumer may have won the unique constraint.
            await db.rollback()
            if await _find_review(db, provider_id, consumer_id) is not None:
                raise DuplicateReviewError("You have already reviewed this provider", cause=e) from e
            raise
        await refresh_review_aggregates(db, provider)
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.warning("Review submission failed for provider %s: %s", provider_id, e)
        raise ReviewFailed("Failed to submit review", cause=e) from e

    logger.info("Review %s recorded for provider %s (rating %d)", review.id, provider_id, rating)
    result = await db.execute(
        select(Review)
        .where(Review.id == review.id)
        .options(selectinload(Review.consumer))
        .execution_options(populate_existing=True)
    )
    return review_to_response(result.scalar_one())


async def list_reviews(
    db: AsyncSession,
    provider_id: str,
    limit: Optional[int] = None,
) -> list[ReviewResponse]:
    """Newest-first reviews about a provider, with reviewer names."""
    page_size = limit if limit is not None else get_settings().review_page_size
    if page_size < 1 or page_size > MAX_REVIEW_PAGE_SIZE:
        raise ValidationError(f"limit must be between 1 and {MAX_REVIEW_PAGE_SIZE}")
    provider_id = canonical_uuid(provider_id)
    if provider_id is None:
        return []
    result = await db.execute(
        select(Review)
        .where(Review.provider_id == provider_id)
        .options(selectinload(Review.consumer))
        .order_by(Review.created_at.desc(), Review.id.desc())
        .limit(page_size)
        .execution_options(populate_existing=True)
    )
    return [review_to_response(r) for r in result.scalars().all()]


class ReviewService:
    """Facade for review operations."""

    @staticmethod
    async def submit(
        db: AsyncSession,
        consumer: UserAccount,
        provider_id: str,
        body: ReviewCreate,
    ) -> ReviewResponse:
        return await submit_review(db, consumer, provider_id, body)

    @staticmethod
    async def list_for_provider(
        db: AsyncSession,
        provider_id: str,
        limit: Optional[int] = None,
    ) -> list[ReviewResponse]:
        return await list_reviews(db, provider_id, limit)


review_service = ReviewService()
