"""Builders for unsaved ORM entities used across tests."""

from datetime import date, datetime, timezone
from decimal import Decimal

from mealplanner.models import (
    DayOfWeek,
    Ingredient,
    MealPlan,
    MealType,
    PlannedMeal,
    Recipe,
    RecipeIngredient,
    ShoppingList,
    ShoppingListItem,
)
from mealplanner.units import MeasurementUnit


PASTA = 10
TOMATOES = 22
GARLIC = 21
SALT = 41


def make_recipe(
    recipe_id: int,
    serving_size: int,
    lines: list[tuple[int, str, MeasurementUnit]],
    name: str = "Recipe",
    household_id: int = 1,
) -> Recipe:
    """Build an unsaved recipe from (ingredient_id, quantity, unit) lines."""
    return Recipe(
        id=recipe_id,
        household_id=household_id,
        name=name,
        serving_size=serving_size,
        prep_time_minutes=0,
        cook_time_minutes=0,
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        updated_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        recipe_ingredients=[
            RecipeIngredient(
                recipe_id=recipe_id,
                ingredient_id=ingredient_id,
                quantity=Decimal(quantity),
                unit=unit,
                ingredient=Ingredient(id=ingredient_id, name=f"Ingredient {ingredient_id}"),
            )
            for ingredient_id, quantity, unit in lines
        ],
    )


def make_planned_meal(planned_meal_id: int, recipe: Recipe | None, servings: int) -> PlannedMeal:
    planned_meal = PlannedMeal(
        id=planned_meal_id,
        meal_plan_id=1,
        recipe_id=recipe.id if recipe else 999,
        day_of_week=DayOfWeek.MONDAY,
        meal_type=MealType.DINNER,
        servings=servings,
    )
    planned_meal.recipe = recipe
    return planned_meal


def make_meal_plan(planned_meals: list[PlannedMeal], meal_plan_id: int = 1) -> MealPlan:
    return MealPlan(
        id=meal_plan_id,
        household_id=1,
        week_start_date=date(2024, 1, 15),
        planned_meals=planned_meals,
    )


def make_shopping_list(items: list[tuple[int, int, str, bool]], shopping_list_id: int = 1) -> ShoppingList:
    """Build an unsaved shopping list from (item_id, ingredient_id, quantity, is_checked)."""
    return ShoppingList(
        id=shopping_list_id,
        household_id=1,
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        items=[
            ShoppingListItem(
                id=item_id,
                shopping_list_id=shopping_list_id,
                ingredient_id=ingredient_id,
                quantity=Decimal(quantity),
                unit=MeasurementUnit.GRAM,
                is_checked=is_checked,
            )
            for item_id, ingredient_id, quantity, is_checked in items
        ],
    )
