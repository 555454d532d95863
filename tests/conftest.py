"""Pytest configuration and shared fixtures."""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from factories import GARLIC, PASTA, SALT, TOMATOES, make_recipe
from mealplanner.database import Base
from mealplanner.models import Recipe
from mealplanner.units import MeasurementUnit

# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (require external services)"
    )


# =============================================================================
# Domain Fixtures
# =============================================================================


@pytest.fixture
def pasta_recipe() -> Recipe:
    """Pasta for two: 200g pasta, 100g tomatoes, 2 cloves of garlic."""
    return make_recipe(
        1,
        2,
        [
            (PASTA, "200", MeasurementUnit.GRAM),
            (TOMATOES, "100", MeasurementUnit.GRAM),
            (GARLIC, "2", MeasurementUnit.CLOVE),
        ],
        name="Pasta Pomodoro",
    )


@pytest.fixture
def salad_recipe() -> Recipe:
    """Tomato salad for two: 50g tomatoes, salt to taste."""
    return make_recipe(
        2,
        2,
        [
            (TOMATOES, "50", MeasurementUnit.GRAM),
            (SALT, "1", MeasurementUnit.TO_TASTE),
        ],
        name="Tomato Salad",
    )


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest_asyncio.fixture
async def db_session():
    """In-memory SQLite session with all tables created."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    await engine.dispose()
