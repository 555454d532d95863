"""FastAPI dependency providers wiring sessions, repositories and services."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from mealplanner.database import get_db
from mealplanner.logging_config import set_context
from mealplanner.repository import (
    HouseholdRepository,
    IngredientRepository,
    MealPlanRepository,
    PantryRepository,
    RecipeRepository,
    ShoppingListRepository,
)
from mealplanner.services import (
    HouseholdService,
    IngredientService,
    MealPlanService,
    PantryService,
    RecipeService,
    ShoppingListService,
)


async def bind_household(household_id: int) -> int:
    """Tag log records of the current request with the household path parameter."""
    set_context(household_id=household_id)
    return household_id


async def get_household_service(db: AsyncSession = Depends(get_db)) -> HouseholdService:
    return HouseholdService(HouseholdRepository(db))


async def get_ingredient_service(db: AsyncSession = Depends(get_db)) -> IngredientService:
    return IngredientService(IngredientRepository(db))


async def get_recipe_service(db: AsyncSession = Depends(get_db)) -> RecipeService:
    return RecipeService(RecipeRepository(db))


async def get_meal_plan_service(db: AsyncSession = Depends(get_db)) -> MealPlanService:
    return MealPlanService(MealPlanRepository(db))


async def get_pantry_service(db: AsyncSession = Depends(get_db)) -> PantryService:
    return PantryService(PantryRepository(db))


async def get_shopping_list_service(db: AsyncSession = Depends(get_db)) -> ShoppingListService:
    return ShoppingListService(ShoppingListRepository(db), MealPlanRepository(db))
