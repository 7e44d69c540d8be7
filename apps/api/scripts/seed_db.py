"""
Seed the database with demo consumers and providers across a few pincodes, with services and reviews.
Run from apps/api (after `alembic upgrade head`): uv run python scripts/seed_db.py
"""
import asyncio
import logging
import random
import sys
from decimal import Decimal
from pathlib import Path

# Ensure marketplace is importable when run from repo root or apps/api
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

logger = logging.getLogger(__name__)

from sqlalchemy import select

from marketplace.core import hash_password, ROLE_CONSUMER, ROLE_PROVIDER
from marketplace.core.constants import DEFAULT_SERVICE_CATEGORIES
from marketplace.db.session import async_session
from marketplace.db.models import (
    UserAccount,
    ServiceCategory,
    ProviderProfile,
    ProviderServiceLink,
    Review,
)
from marketplace.services.review import refresh_review_aggregates

SEED_PASSWORD = "SeedPassword123!"
NUM_CONSUMERS = 20
NUM_PROVIDERS = 40
VERIFIED_SHARE = 0.8
PINCODES = ["110001", "110002", "400001", "560001", "600001"]

FIRST_NAMES = [
    "Aarav", "Vivaan", "Aditya", "Vihaan", "Arjun", "Sai", "Reyansh", "Krishna",
    "Ishaan", "Rohan", "Ananya", "Diya", "Priya", "Kavya", "Meera", "Saanvi",
    "Isha", "Neha", "Pooja", "Riya", "Farah", "Karthik", "Tanmay", "Zoya",
]
LAST_NAMES = [
    "Sharma", "Verma", "Gupta", "Singh", "Kumar", "Patel", "Reddy", "Iyer",
    "Nair", "Khan", "Das", "Mehta", "Joshi", "Rao", "Bose", "Kapoor",
]
BIOS = [
    "Reliable and punctual, available on weekends.",
    "Family business, serving the neighbourhood for years.",
    "Certified technician, all work guaranteed for 30 days.",
    None,
]
COMMENTS = ["Great work!", "On time and tidy.", "Fair price.", "Would hire again.", "   ", None]


async def _ensure_categories(session) -> list[ServiceCategory]:
    result = await session.execute(select(ServiceCategory).order_by(ServiceCategory.name))
    categories = list(result.scalars().all())
    if categories:
        return categories
    for name, description in DEFAULT_SERVICE_CATEGORIES:
        session.add(ServiceCategory(name=name, description=description))
    await session.flush()
    result = await session.execute(select(ServiceCategory).order_by(ServiceCategory.name))
    return list(result.scalars().all())


def _account(i: int, role: str, hashed: str) -> UserAccount:
    name = f"{random.choice(FIRST_NAMES)} {random.choice(LAST_NAMES)}"
    return UserAccount(
        email=f"seed.{role}{i + 1}@example.com",
        hashed_password=hashed,
        role=role,
        full_name=name,
        phone=f"+91 98{random.randint(10000000, 99999999)}",
    )


async def run_seed():
    hashed = hash_password(SEED_PASSWORD)
    async with async_session() as session:
        categories = await _ensure_categories(session)

        consumers = [_account(i, ROLE_CONSUMER, hashed) for i in range(NUM_CONSUMERS)]
        session.add_all(consumers)
        await session.flush()

        for i in range(NUM_PROVIDERS):
            account = _account(i, ROLE_PROVIDER, hashed)
            session.add(account)
            await session.flush()

            profile = ProviderProfile(
                user_id=account.id,
                bio=random.choice(BIOS),
                experience_years=random.randint(0, 25),
                hourly_rate=Decimal(random.choice([250, 300, 400, 500, 750, 1000])),
                pincode=random.choice(PINCODES),
                address=f"{random.randint(1, 200)}, Sector {random.randint(1, 40)}",
                is_verified=random.random() < VERIFIED_SHARE,
            )
            session.add(profile)
            await session.flush()

            for category in random.sample(categories, k=random.randint(1, 3)):
                session.add(ProviderServiceLink(provider_id=profile.id, category_id=category.id))

            for consumer in random.sample(consumers, k=random.randint(0, 6)):
                comment = random.choice(COMMENTS)
                session.add(
                    Review(
                        provider_id=profile.id,
                        consumer_id=consumer.id,
                        rating=random.randint(2, 5),
                        comment=comment.strip() if comment and comment.strip() else None,
                    )
                )
            await session.flush()
            await refresh_review_aggregates(session, profile)

            if (i + 1) % 10 == 0:
                logger.info("Progress: seeded %s/%s providers", i + 1, NUM_PROVIDERS)
                await session.commit()

        await session.commit()

    logger.info("Done. Seeded %s consumers and %s providers", NUM_CONSUMERS, NUM_PROVIDERS)
    logger.info("  Pincodes: %s", ", ".join(PINCODES))
    logger.info("  Password for all seed users: %s", SEED_PASSWORD)
    logger.info("  Example logins: seed.consumer1@example.com, seed.provider1@example.com")


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )
    logger.info("Starting seed: %s consumers, %s providers", NUM_CONSUMERS, NUM_PROVIDERS)
    asyncio.run(run_seed())
