"""
Tests for saving provider profiles and their offered services
"""

import uuid
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest
from sqlalchemy import select, func
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.core import ROLE_CONSUMER, ROLE_PROVIDER
from marketplace.db.models import ProviderProfile, ProviderServiceLink, Review
from marketplace.errors import PermissionDenied, SaveFailed, ValidationError
from marketplace.schemas import ProviderProfileUpdate
from marketplace.services.provider_profile import (
    get_dashboard,
    save_provider_profile,
    unique_category_ids,
)


def _update(**overrides) -> ProviderProfileUpdate:
    data = {
        "bio": "Licensed plumber",
        "experience_years": 7,
        "hourly_rate": Decimal("450.00"),
        "pincode": "110001",
        "address": "12 Main Road",
        "service_category_ids": [],
    }
    data.update(overrides)
    return ProviderProfileUpdate(**data)


async def _link_category_ids(session_factory, provider_id: str) -> set[str]:
    async with session_factory() as fresh:
        result = await fresh.execute(
            select(ProviderServiceLink.category_id).where(ProviderServiceLink.provider_id == provider_id)
        )
        return set(result.scalars().all())


class TestSaveProviderProfile:
    """Test save_provider_profile"""

    @pytest.mark.asyncio
    async def test_first_save_creates_unverified_profile(self, db, session_factory, make_account, make_category):
        owner = await make_account(ROLE_PROVIDER, full_name="Ravi Kumar")
        plumbing = await make_category("Plumbing")

        saved = await save_provider_profile(
            db, owner, _update(service_category_ids=[plumbing.id])
        )

        assert saved.user_id == owner.id
        assert saved.is_verified is False
        assert saved.total_reviews == 0
        assert saved.average_rating == Decimal("0")
        assert saved.hourly_rate == Decimal("450.00")
        assert saved.owner.full_name == "Ravi Kumar"
        assert [s.category_id for s in saved.services] == [plumbing.id]

        async with session_factory() as fresh:
            count = await fresh.scalar(select(func.count(ProviderProfile.id)).where(ProviderProfile.user_id == owner.id))
        assert count == 1

    @pytest.mark.asyncio
    async def test_second_save_updates_in_place_and_replaces_services(
        self, db, session_factory, make_account, make_category
    ):
        owner = await make_account(ROLE_PROVIDER)
        plumbing = await make_category("Plumbing")
        electrical = await make_category("Electrical")
        carpentry = await make_category("Carpentry")

        first = await save_provider_profile(db, owner, _update(service_category_ids=[plumbing.id, electrical.id]))
        second = await save_provider_profile(
            db,
            owner,
            _update(bio="Now also carpentry", pincode="110002", service_category_ids=[electrical.id, carpentry.id]),
        )

        assert second.id == first.id
        assert second.bio == "Now also carpentry"
        assert second.pincode == "110002"
        assert second.updated_at is not None
        assert {s.category_id for s in second.services} == {electrical.id, carpentry.id}
        assert await _link_category_ids(session_factory, first.id) == {electrical.id, carpentry.id}

    @pytest.mark.asyncio
    async def test_empty_selection_removes_all_services(self, db, session_factory, make_account, make_category):
        owner = await make_account(ROLE_PROVIDER)
        plumbing = await make_category("Plumbing")

        first = await save_provider_profile(db, owner, _update(service_category_ids=[plumbing.id]))
        second = await save_provider_profile(db, owner, _update(service_category_ids=[]))

        assert second.services == []
        assert await _link_category_ids(session_factory, first.id) == set()

    @pytest.mark.asyncio
    async def test_duplicate_category_ids_collapse(self, db, session_factory, make_account, make_category):
        owner = await make_account(ROLE_PROVIDER)
        plumbing = await make_category("Plumbing")

        saved = await save_provider_profile(
            db, owner, _update(service_category_ids=[plumbing.id, plumbing.id, f" {plumbing.id} "])
        )

        assert len(saved.services) == 1
        assert await _link_category_ids(session_factory, saved.id) == {plumbing.id}

    @pytest.mark.asyncio
    async def test_verification_and_rating_survive_updates(self, db, make_account):
        owner = await make_account(ROLE_PROVIDER)
        first = await save_provider_profile(db, owner, _update())

        result = await db.execute(select(ProviderProfile).where(ProviderProfile.id == first.id))
        profile = result.scalar_one()
        profile.is_verified = True
        profile.average_rating = Decimal("4.20")
        profile.total_reviews = 5
        await db.commit()

        second = await save_provider_profile(db, owner, _update(hourly_rate=Decimal("500")))

        assert second.is_verified is True
        assert second.average_rating == Decimal("4.20")
        assert second.total_reviews == 5
        assert second.hourly_rate == Decimal("500")

    @pytest.mark.asyncio
    async def test_blank_optional_text_stored_as_null(self, db, make_account):
        owner = await make_account(ROLE_PROVIDER)
        saved = await save_provider_profile(db, owner, _update(bio="   ", address="", pincode=" 560001 "))
        assert saved.bio is None
        assert saved.address is None
        assert saved.pincode == "560001"

    @pytest.mark.asyncio
    async def test_unknown_category_fails_and_leaves_previous_state(
        self, db, session_factory, make_account, make_category
    ):
        owner = await make_account(ROLE_PROVIDER)
        plumbing = await make_category("Plumbing")
        first = await save_provider_profile(db, owner, _update(service_category_ids=[plumbing.id]))
        # The failed save rolls back the session, which expires loaded instances.
        plumbing_id = plumbing.id

        with pytest.raises(SaveFailed):
            await save_provider_profile(
                db,
                owner,
                _update(bio="Should not stick", service_category_ids=[str(uuid.uuid4())]),
            )

        async with session_factory() as fresh:
            result = await fresh.execute(select(ProviderProfile).where(ProviderProfile.id == first.id))
            profile = result.scalar_one()
            assert profile.bio == "Licensed plumber"
        assert await _link_category_ids(session_factory, first.id) == {plumbing_id}

    @pytest.mark.asyncio
    async def test_category_ids_in_any_uuid_spelling(self, db, session_factory, make_account, make_category):
        owner = await make_account(ROLE_PROVIDER)
        plumbing = await make_category("Plumbing")
        electrical = await make_category("Electrical")
        plumbing_id, electrical_id = plumbing.id, electrical.id

        saved = await save_provider_profile(
            db,
            owner,
            _update(
                service_category_ids=[
                    plumbing_id.upper(),
                    plumbing_id,
                    "{" + electrical_id + "}",
                    electrical_id.replace("-", ""),
                ]
            ),
        )

        assert sorted(s.category_id for s in saved.services) == sorted([plumbing_id, electrical_id])
        assert await _link_category_ids(session_factory, saved.id) == {plumbing_id, electrical_id}

    @pytest.mark.asyncio
    async def test_unknown_category_on_first_save_creates_nothing(self, db, session_factory, make_account):
        owner = await make_account(ROLE_PROVIDER)

        with pytest.raises(SaveFailed):
            await save_provider_profile(db, owner, _update(service_category_ids=[str(uuid.uuid4())]))

        async with session_factory() as fresh:
            count = await fresh.scalar(select(func.count(ProviderProfile.id)))
        assert count == 0

    @pytest.mark.asyncio
    async def test_store_failure_rolls_back_and_raises_save_failed(self, make_account):
        owner = await make_account(ROLE_PROVIDER)
        db = AsyncMock(spec=AsyncSession)
        db.execute.side_effect = OperationalError("SELECT", {}, Exception("connection reset"))

        with pytest.raises(SaveFailed) as exc_info:
            await save_provider_profile(db, owner, _update())

        assert isinstance(exc_info.value.cause, OperationalError)
        db.rollback.assert_awaited()
        db.commit.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "overrides",
        [
            {"experience_years": -1},
            {"hourly_rate": Decimal("-0.01")},
            {"service_category_ids": ["not-a-uuid"]},
        ],
    )
    async def test_invalid_attributes_rejected_without_query(self, make_account, overrides):
        owner = await make_account(ROLE_PROVIDER)
        db = AsyncMock(spec=AsyncSession)

        with pytest.raises(ValidationError):
            await save_provider_profile(db, owner, _update(**overrides))

        db.execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_consumer_cannot_save_provider_profile(self, make_account):
        consumer = await make_account(ROLE_CONSUMER)
        db = AsyncMock(spec=AsyncSession)

        with pytest.raises(PermissionDenied):
            await save_provider_profile(db, consumer, _update())

        db.execute.assert_not_called()


class TestUniqueCategoryIds:
    """Test unique_category_ids"""

    def test_keeps_first_seen_order_and_skips_blanks(self):
        a, b = str(uuid.uuid4()), str(uuid.uuid4())
        assert unique_category_ids([b, "", a, b, "  "]) == [b, a]

    def test_collapses_case_variants_to_stored_form(self):
        a = str(uuid.uuid4())
        assert unique_category_ids([a.upper(), f" {a} ", a.replace("-", "")]) == [a]

    def test_rejects_malformed_ids(self):
        with pytest.raises(ValidationError):
            unique_category_ids(["plumbing"])


class TestProviderDashboard:
    """Test get_dashboard"""

    @pytest.mark.asyncio
    async def test_before_first_save(self, db, make_account):
        owner = await make_account(ROLE_PROVIDER)
        dashboard = await get_dashboard(db, owner)
        assert dashboard.profile is None
        assert dashboard.selected_category_ids == []
        assert dashboard.reviews == []

    @pytest.mark.asyncio
    async def test_after_save_with_reviews(self, db, make_account, make_category):
        owner = await make_account(ROLE_PROVIDER)
        reviewer = await make_account(ROLE_CONSUMER, full_name="Asha Rao")
        plumbing = await make_category("Plumbing")
        saved = await save_provider_profile(db, owner, _update(service_category_ids=[plumbing.id]))
        db.add(Review(provider_id=saved.id, consumer_id=reviewer.id, rating=4, comment="Quick fix"))
        await db.commit()

        dashboard = await get_dashboard(db, owner)

        assert dashboard.profile.id == saved.id
        assert dashboard.selected_category_ids == [plumbing.id]
        assert [(r.reviewer_name, r.rating, r.comment) for r in dashboard.reviews] == [("Asha Rao", 4, "Quick fix")]

    @pytest.mark.asyncio
    async def test_consumers_have_no_dashboard(self, db, make_account):
        consumer = await make_account(ROLE_CONSUMER)
        with pytest.raises(PermissionDenied):
            await get_dashboard(db, consumer)
