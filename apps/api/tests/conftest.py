"""
Pytest configuration for marketplace API tests.

Each test gets its own on-disk SQLite database (aiosqlite) with the full schema.
"""

from decimal import Decimal
from typing import Iterable

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from marketplace.core import hash_password, ROLE_CONSUMER, ROLE_PROVIDER
from marketplace.db.models import (
    ProviderProfile,
    ProviderServiceLink,
    ServiceCategory,
    UserAccount,
)
from marketplace.db.session import Base

TEST_PASSWORD = "Password123"
_TEST_PASSWORD_HASH = hash_password(TEST_PASSWORD)


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'marketplace.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def make_account(db):
    counter = {"n": 0}

    async def _make(role: str = ROLE_CONSUMER, full_name: str = "Test User", phone: str | None = None):
        counter["n"] += 1
        account = UserAccount(
            email=f"{role}{counter['n']}@example.com",
            hashed_password=_TEST_PASSWORD_HASH,
            role=role,
            full_name=full_name,
            phone=phone,
        )
        db.add(account)
        await db.commit()
        return account

    return _make


@pytest.fixture
def make_category(db):
    async def _make(name: str, description: str | None = None) -> ServiceCategory:
        category = ServiceCategory(name=name, description=description)
        db.add(category)
        await db.commit()
        return category

    return _make


@pytest.fixture
def make_provider(db, make_account):
    async def _make(
        pincode: str,
        rating: str = "0",
        verified: bool = True,
        categories: Iterable[ServiceCategory] = (),
        full_name: str = "Provider",
    ) -> ProviderProfile:
        account = await make_account(ROLE_PROVIDER, full_name=full_name, phone="+91 9800000000")
        profile = ProviderProfile(
            user_id=account.id,
            experience_years=5,
            hourly_rate=Decimal("400"),
            pincode=pincode,
            is_verified=verified,
            average_rating=Decimal(rating),
        )
        db.add(profile)
        await db.flush()
        for category in categories:
            db.add(ProviderServiceLink(provider_id=profile.id, category_id=category.id))
        await db.commit()
        return profile

    return _make


@pytest_asyncio.fixture
async def scenario(make_category, make_provider):
    """Plumbing/Electrical providers: P1 and P2 at 110001, P3 at 110002, plus an unverified one at 110001."""
    plumbing = await make_category("Plumbing")
    electrical = await make_category("Electrical")
    p1 = await make_provider("110001", "4.5", categories=[plumbing], full_name="P1")
    p2 = await make_provider("110001", "4.8", categories=[electrical], full_name="P2")
    p3 = await make_provider("110002", "5.0", categories=[plumbing], full_name="P3")
    hidden = await make_provider("110001", "5.0", verified=False, categories=[plumbing], full_name="Unverified")
    return {
        "plumbing": plumbing,
        "electrical": electrical,
        "p1": p1,
        "p2": p2,
        "p3": p3,
        "unverified": hidden,
    }
