"""Recipe serving-size scaling."""

from decimal import Decimal

from mealplanner.schemas import RecipeResponse
from mealplanner.units import format_with_unit


def compute_scale_factor(target_servings: int, base_servings: int) -> Decimal:
    """Ratio of target to base servings in decimal arithmetic."""
    return Decimal(target_servings) / Decimal(base_servings)


def scale_quantity(quantity: Decimal, base_servings: int, target_servings: int) -> Decimal:
    """Scale a quantity calibrated for base_servings to target_servings."""
    return quantity * compute_scale_factor(target_servings, base_servings)


def scale_recipe(recipe: RecipeResponse, new_servings: int) -> RecipeResponse:
    """
    Derive a copy of a recipe scaled to new_servings.

    Every ingredient quantity is multiplied by new_servings / serving_size;
    units and notes are kept. The input recipe is left untouched.
    """
    scale_factor = compute_scale_factor(new_servings, recipe.serving_size)

    ingredients = []
    for ingredient in recipe.ingredients:
        quantity = ingredient.quantity * scale_factor
        ingredients.append(
            ingredient.model_copy(
                update={
                    "quantity": quantity,
                    "display_quantity": format_with_unit(quantity, ingredient.unit),
                }
            )
        )

    return recipe.model_copy(update={"serving_size": new_servings, "ingredients": ingredients})
