"""
Tests for provider search against the database
"""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.errors import SearchFailed, ValidationError
from marketplace.schemas import SearchRequest
from marketplace.services.search import search_providers, search_service


class TestSearchProviders:
    """Test search_providers"""

    @pytest.mark.asyncio
    async def test_all_services_at_pincode_best_rated_first(self, db, scenario):
        results = await search_providers(db, "110001", "")
        assert [r.id for r in results] == [scenario["p2"].id, scenario["p1"].id]

    @pytest.mark.asyncio
    async def test_category_filter(self, db, scenario):
        results = await search_providers(db, "110001", scenario["plumbing"].id)
        assert [r.id for r in results] == [scenario["p1"].id]

    @pytest.mark.asyncio
    async def test_category_filter_accepts_uppercase_id(self, db, scenario):
        results = await search_providers(db, "110001", scenario["plumbing"].id.upper())
        assert [r.id for r in results] == [scenario["p1"].id]

    @pytest.mark.asyncio
    async def test_other_pincode(self, db, scenario):
        results = await search_providers(db, "110002", "")
        assert [r.id for r in results] == [scenario["p3"].id]

    @pytest.mark.asyncio
    async def test_only_verified_providers_at_exact_pincode(self, db, scenario):
        results = await search_providers(db, "110001")
        assert scenario["unverified"].id not in {r.id for r in results}
        assert all(r.is_verified and r.pincode == "110001" for r in results)

    @pytest.mark.asyncio
    async def test_pincode_is_trimmed_but_not_partially_matched(self, db, scenario):
        trimmed = await search_providers(db, "  110002 ")
        assert [r.id for r in trimmed] == [scenario["p3"].id]
        assert await search_providers(db, "11000") == []

    @pytest.mark.asyncio
    async def test_no_matches_is_empty_list(self, db, scenario):
        assert await search_providers(db, "999999") == []
        assert await search_providers(db, "110002", scenario["electrical"].id) == []

    @pytest.mark.asyncio
    async def test_results_carry_owner_and_services(self, db, scenario):
        results = await search_providers(db, "110002")
        provider = results[0]
        assert provider.owner.full_name == "P3"
        assert provider.owner.phone == "+91 9800000000"
        assert [s.category_id for s in provider.services] == [scenario["plumbing"].id]
        assert provider.services[0].category.name == "Plumbing"
        assert float(provider.average_rating) == 5.0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("pincode", ["", "   ", None])
    async def test_blank_pincode_rejected_without_query(self, pincode):
        db = AsyncMock(spec=AsyncSession)
        with pytest.raises(ValidationError):
            await search_providers(db, pincode)
        db.execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_store_failure_raises_search_failed(self):
        db = AsyncMock(spec=AsyncSession)
        db.execute.side_effect = OperationalError("SELECT", {}, Exception("connection refused"))
        with pytest.raises(SearchFailed) as exc_info:
            await search_providers(db, "110001")
        assert isinstance(exc_info.value.cause, OperationalError)

    @pytest.mark.asyncio
    async def test_facade_takes_search_request(self, db, scenario):
        body = SearchRequest(pincode="110001", category_id=scenario["electrical"].id)
        results = await search_service.search(db, body)
        assert [r.id for r in results] == [scenario["p2"].id]
