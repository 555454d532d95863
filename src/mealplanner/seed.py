"""Ingredient catalog seeding."""

import json
from pathlib import Path

from sqlalchemy import select, text
from sqlalchemy.ext.asyncio import AsyncSession

from mealplanner.config import DEFAULT_SEED_FILE
from mealplanner.logging_config import get_logger
from mealplanner.models import Ingredient

logger = get_logger(__name__)


def load_seed_ingredients(path: Path = DEFAULT_SEED_FILE) -> list[dict]:
    """Read catalog entries (id, name, category) from a JSON file."""
    with open(path, encoding="utf-8") as f:
        return json.load(f)


async def seed_ingredients(session: AsyncSession, path: Path = DEFAULT_SEED_FILE) -> int:
    """
    Insert catalog ingredients that are not in the database yet.

    Entries are matched by id, so re-running the seed is a no-op and edits made
    to seeded ingredients through the API are kept.

    Returns:
        Number of ingredients inserted.
    """
    entries = load_seed_ingredients(path)

    result = await session.execute(select(Ingredient.id))
    existing_ids = set(result.scalars().all())

    missing = [entry for entry in entries if entry["id"] not in existing_ids]
    for entry in missing:
        session.add(Ingredient(id=entry["id"], name=entry["name"], category=entry.get("category")))

    if missing:
        await session.flush()
        if session.bind.dialect.name == "postgresql":
            # explicit ids do not advance the serial sequence
            await session.execute(
                text(
                    "SELECT setval(pg_get_serial_sequence('ingredients', 'id'), "
                    "(SELECT MAX(id) FROM ingredients))"
                )
            )

    await session.commit()
    logger.info(f"Seeded {len(missing)} of {len(entries)} catalog ingredients")
    return len(missing)
