"""
Acceptance checks for provider search against a seeded database.

For every seeded pincode, with and without each category filter, checks that results are
verified providers at that exact pincode, offer the requested category, and are ordered by
rating (best first).

Run from apps/api (with migrations applied and scripts/seed_db.py run):
  cd apps/api && uv run python scripts/search_acceptance.py
"""
import asyncio
import logging
import sys
from pathlib import Path

_app_api = Path(__file__).resolve().parent.parent
if str(_app_api) not in sys.path:
    sys.path.insert(0, str(_app_api))

from sqlalchemy import select
from marketplace.db.session import async_session
from marketplace.db.models import ProviderProfile
from marketplace.errors import ValidationError
from marketplace.services.catalog import list_categories
from marketplace.services.search import search_providers

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def _problems(results, pincode: str, category_id: str | None) -> list[str]:
    problems = []
    for p in results:
        if not p.is_verified:
            problems.append(f"{p.id} is not verified")
        if p.pincode != pincode:
            problems.append(f"{p.id} has pincode {p.pincode}")
        if category_id and not any(s.category_id == category_id for s in p.services):
            problems.append(f"{p.id} does not offer {category_id}")
    for a, b in zip(results, results[1:]):
        if a.average_rating < b.average_rating:
            problems.append(f"{a.id} ({a.average_rating}) ranked above {b.id} ({b.average_rating})")
    return problems


async def run_acceptance():
    async with async_session() as db:
        r = await db.execute(select(ProviderProfile.pincode).distinct())
        pincodes = sorted(p for p in r.scalars().all() if p)
        if not pincodes:
            logger.warning("No provider profiles; run scripts/seed_db.py first. Skipping.")
            return
        categories = await list_categories(db)

        passed = 0
        failed = 0
        for pincode in pincodes:
            for category_id in [None] + [c.id for c in categories]:
                results = await search_providers(db, pincode, category_id)
                problems = _problems(results, pincode, category_id)
                if problems:
                    logger.warning("FAIL: pincode=%s category=%s: %s", pincode, category_id, problems[:5])
                    failed += 1
                else:
                    passed += 1

        # Whitespace pincode must be rejected before touching the database
        try:
            await search_providers(db, "   ")
            logger.warning("FAIL: blank pincode was accepted")
            failed += 1
        except ValidationError as e:
            logger.info("PASS: blank pincode rejected (%s)", e.message)
            passed += 1

        logger.info("--- Acceptance: %s passed, %s failed ---", passed, failed)
        if failed:
            sys.exit(1)


if __name__ == "__main__":
    asyncio.run(run_acceptance())
