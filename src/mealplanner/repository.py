"""Repositories for relational persistence of the household aggregates."""

from datetime import date
from typing import Generic, TypeVar

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from mealplanner.database import Base
from mealplanner.logging_config import get_logger
from mealplanner.models import (
    Household,
    Ingredient,
    MealPlan,
    Pantry,
    PantryItem,
    PlannedMeal,
    Recipe,
    RecipeIngredient,
    ShoppingList,
    ShoppingListItem,
    UserHousehold,
)

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class SqlRepository(Generic[ModelT]):
    """Common persistence operations for one aggregate root."""

    model: type[ModelT]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _first(self, query: Select) -> ModelT | None:
        result = await self.session.execute(query.execution_options(populate_existing=True))
        return result.scalars().first()

    async def _all(self, query: Select) -> list[ModelT]:
        result = await self.session.execute(query.execution_options(populate_existing=True))
        return list(result.scalars().unique().all())

    async def get_by_id(self, entity_id: int) -> ModelT | None:
        return await self.session.get(self.model, entity_id)

    async def add(self, entity: ModelT) -> ModelT:
        """Insert an entity and commit; the entity carries its generated id afterwards."""
        self.session.add(entity)
        await self.session.commit()
        logger.debug(f"Added {self.model.__name__} {getattr(entity, 'id', None)}")
        return entity

    async def update(self, entity: ModelT) -> ModelT:
        """Persist changes made to an entity loaded through this repository."""
        self.session.add(entity)
        await self.session.commit()
        logger.debug(f"Updated {self.model.__name__} {getattr(entity, 'id', None)}")
        return entity

    async def delete(self, entity: ModelT) -> None:
        await self.session.delete(entity)
        await self.session.commit()
        logger.debug(f"Deleted {self.model.__name__} {getattr(entity, 'id', None)}")


# =============================================================================
# Households
# =============================================================================


class HouseholdRepository(SqlRepository[Household]):
    model = Household

    async def get_by_id_with_members(self, household_id: int) -> Household | None:
        query = (
            select(Household)
            .options(selectinload(Household.members))
            .where(Household.id == household_id)
        )
        return await self._first(query)

    async def get_by_user_id(self, user_id: str) -> list[Household]:
        query = (
            select(Household)
            .join(UserHousehold, UserHousehold.household_id == Household.id)
            .options(selectinload(Household.members))
            .where(UserHousehold.user_id == user_id)
            .order_by(Household.name)
        )
        return await self._all(query)


# =============================================================================
# Ingredients
# =============================================================================


class IngredientRepository(SqlRepository[Ingredient]):
    model = Ingredient

    async def get_all(self) -> list[Ingredient]:
        return await self._all(select(Ingredient).order_by(Ingredient.name))

    async def search_by_name(self, search_term: str) -> list[Ingredient]:
        query = (
            select(Ingredient)
            .where(Ingredient.name.ilike(f"%{search_term}%"))
            .order_by(Ingredient.name)
        )
        return await self._all(query)


# =============================================================================
# Recipes
# =============================================================================


def _recipe_with_ingredients() -> Select:
    return select(Recipe).options(
        selectinload(Recipe.recipe_ingredients).selectinload(RecipeIngredient.ingredient)
    )


class RecipeRepository(SqlRepository[Recipe]):
    model = Recipe

    async def get_by_id_with_ingredients(self, recipe_id: int) -> Recipe | None:
        return await self._first(_recipe_with_ingredients().where(Recipe.id == recipe_id))

    async def get_by_household_id(self, household_id: int) -> list[Recipe]:
        query = (
            _recipe_with_ingredients()
            .where(Recipe.household_id == household_id)
            .order_by(Recipe.name)
        )
        return await self._all(query)

    async def search_by_name(self, household_id: int, search_term: str) -> list[Recipe]:
        query = (
            _recipe_with_ingredients()
            .where(Recipe.household_id == household_id)
            .where(Recipe.name.ilike(f"%{search_term}%"))
            .order_by(Recipe.name)
        )
        return await self._all(query)

    async def is_planned(self, recipe_id: int) -> bool:
        """Whether any meal plan still references the recipe."""
        query = select(PlannedMeal.id).where(PlannedMeal.recipe_id == recipe_id).limit(1)
        result = await self.session.execute(query)
        return result.first() is not None


# =============================================================================
# Meal Plans
# =============================================================================


class MealPlanRepository(SqlRepository[MealPlan]):
    model = MealPlan

    async def get_by_id_with_meals(self, meal_plan_id: int) -> MealPlan | None:
        query = (
            select(MealPlan)
            .options(selectinload(MealPlan.planned_meals).selectinload(PlannedMeal.recipe))
            .where(MealPlan.id == meal_plan_id)
        )
        return await self._first(query)

    async def get_by_id_with_ingredients(self, meal_plan_id: int) -> MealPlan | None:
        """Meal plan with planned meals, their recipes and recipe ingredients loaded."""
        query = (
            select(MealPlan)
            .options(
                selectinload(MealPlan.planned_meals)
                .selectinload(PlannedMeal.recipe)
                .selectinload(Recipe.recipe_ingredients)
                .selectinload(RecipeIngredient.ingredient)
            )
            .where(MealPlan.id == meal_plan_id)
        )
        return await self._first(query)

    async def get_by_household_id(self, household_id: int) -> list[MealPlan]:
        query = (
            select(MealPlan)
            .options(selectinload(MealPlan.planned_meals).selectinload(PlannedMeal.recipe))
            .where(MealPlan.household_id == household_id)
            .order_by(MealPlan.week_start_date.desc())
        )
        return await self._all(query)

    async def get_id_for_week(self, household_id: int, week_start_date: date) -> int | None:
        """Id of the household's plan for the given week, if it has one."""
        query = select(MealPlan.id).where(
            MealPlan.household_id == household_id,
            MealPlan.week_start_date == week_start_date,
        )
        result = await self.session.execute(query)
        return result.scalar_one_or_none()


# =============================================================================
# Pantries
# =============================================================================


def _pantry_with_items() -> Select:
    return select(Pantry).options(
        selectinload(Pantry.items).selectinload(PantryItem.ingredient)
    )


class PantryRepository(SqlRepository[Pantry]):
    model = Pantry

    async def get_by_household_id(self, household_id: int) -> Pantry | None:
        return await self._first(_pantry_with_items().where(Pantry.household_id == household_id))

    async def get_by_id_with_items(self, pantry_id: int) -> Pantry | None:
        return await self._first(_pantry_with_items().where(Pantry.id == pantry_id))


# =============================================================================
# Shopping Lists
# =============================================================================


def _shopping_list_with_items() -> Select:
    return select(ShoppingList).options(
        selectinload(ShoppingList.items).selectinload(ShoppingListItem.ingredient)
    )


class ShoppingListRepository(SqlRepository[ShoppingList]):
    model = ShoppingList

    async def get_by_id_with_items(self, shopping_list_id: int) -> ShoppingList | None:
        return await self._first(
            _shopping_list_with_items().where(ShoppingList.id == shopping_list_id)
        )

    async def get_by_household_id(self, household_id: int) -> list[ShoppingList]:
        query = (
            _shopping_list_with_items()
            .where(ShoppingList.household_id == household_id)
            .order_by(ShoppingList.created_at.desc(), ShoppingList.id.desc())
        )
        return await self._all(query)
