"""Shopping list generation from meal plans."""

from collections import defaultdict
from collections.abc import Iterable
from datetime import date
from decimal import Decimal

from mealplanner.logging_config import get_logger
from mealplanner.models import MealPlan, PlannedMeal, ShoppingList, ShoppingListItem, utcnow
from mealplanner.plan.scaling import compute_scale_factor
from mealplanner.units import MeasurementUnit

logger = get_logger(__name__)

AggregationKey = tuple[int, MeasurementUnit]


def generated_note(week_start_date: date) -> str:
    """Note stamped on lists generated from a meal plan."""
    return f"Generated from meal plan for week of {week_start_date:%Y-%m-%d}"


def aggregate_planned_meals(
    planned_meals: Iterable[PlannedMeal],
) -> dict[AggregationKey, Decimal]:
    """
    Sum scaled ingredient demand across planned meals.

    Each recipe ingredient is scaled by planned servings / recipe serving size
    and accumulated under (ingredient_id, unit). The same ingredient in two
    units stays in two entries; no unit conversion is attempted.

    Planned meals without a loaded recipe or ingredient list contribute nothing.
    """
    totals: dict[AggregationKey, Decimal] = defaultdict(Decimal)

    for planned_meal in planned_meals:
        recipe = planned_meal.recipe
        if recipe is None or not recipe.recipe_ingredients:
            logger.debug(f"Planned meal {planned_meal.id} has no recipe ingredients, skipping")
            continue

        scale_factor = compute_scale_factor(planned_meal.servings, recipe.serving_size)

        for recipe_ingredient in recipe.recipe_ingredients:
            key = (recipe_ingredient.ingredient_id, recipe_ingredient.unit)
            totals[key] += recipe_ingredient.quantity * scale_factor

    return dict(totals)


def build_shopping_list(meal_plan: MealPlan, household_id: int) -> ShoppingList:
    """
    Build a new, unsaved shopping list covering a meal plan.

    Args:
        meal_plan: Meal plan with planned meals, recipes and recipe
            ingredients loaded.
        household_id: Household the list will belong to.

    Returns:
        A fresh ShoppingList with one unchecked item per (ingredient, unit).
    """
    totals = aggregate_planned_meals(meal_plan.planned_meals)

    items = [
        ShoppingListItem(
            ingredient_id=ingredient_id,
            quantity=quantity,
            unit=unit,
            is_checked=False,
        )
        for (ingredient_id, unit), quantity in totals.items()
    ]

    logger.info(
        f"Aggregated {len(meal_plan.planned_meals)} planned meals "
        f"into {len(items)} shopping list items for plan {meal_plan.id}"
    )

    return ShoppingList(
        household_id=household_id,
        meal_plan_id=meal_plan.id,
        created_at=utcnow(),
        notes=generated_note(meal_plan.week_start_date),
        items=items,
    )
