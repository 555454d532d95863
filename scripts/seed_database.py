#!/usr/bin/env python
"""
Database seeding script for the ingredient catalog.

It will:

1. Wait for the database to accept connections
2. Create missing tables
3. Insert catalog ingredients that are not present yet

Run with: python scripts/seed_database.py

Environment Variables:
    DATABASE_URL: Database connection string
    INGREDIENT_SEED_FILE: JSON file with the catalog (defaults to the bundled one)
    LOG_LEVEL: Log level (default: INFO)
"""

import asyncio
import os
import sys

from sqlalchemy import text

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from mealplanner.config import settings
from mealplanner.database import AsyncSessionLocal, Base, async_engine
from mealplanner.logging_config import configure_logging, get_logger
from mealplanner.seed import seed_ingredients

configure_logging(log_level=os.getenv("LOG_LEVEL", "INFO"))
logger = get_logger(__name__)


async def wait_for_database(max_retries: int = 30, retry_delay: int = 2) -> bool:
    """Wait for the database to be available."""
    logger.info("Waiting for database to be ready...")

    for attempt in range(max_retries):
        try:
            async with async_engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            logger.info("Database is ready")
            return True
        except Exception as e:
            logger.debug(f"Database not ready (attempt {attempt + 1}/{max_retries}): {e}")
            await asyncio.sleep(retry_delay)

    logger.error("Database did not become ready in time")
    return False


async def seed_database() -> dict:
    """
    Main seeding function.

    Returns:
        Dictionary with seeding results.
    """
    results = {"status": "unknown", "ingredients_inserted": 0}

    if not await wait_for_database():
        results["status"] = "failed"
        results["error"] = "Database not available"
        return results

    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables initialized")

    async with AsyncSessionLocal() as session:
        results["ingredients_inserted"] = await seed_ingredients(
            session, settings.ingredient_seed_file
        )

    await async_engine.dispose()

    results["status"] = "completed"
    logger.info(f"Seeding completed: {results}")
    return results


def main():
    """Entry point for the seed script."""
    logger.info(f"Seeding ingredient catalog from {settings.ingredient_seed_file}")

    try:
        results = asyncio.run(seed_database())
        sys.exit(0 if results["status"] == "completed" else 1)
    except KeyboardInterrupt:
        logger.info("Seeding interrupted by user")
        sys.exit(130)
    except Exception as e:
        logger.exception(f"Seeding failed with error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
