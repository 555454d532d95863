"""Recipe scaling and shopping list aggregation."""

from mealplanner.plan.scaling import compute_scale_factor, scale_quantity, scale_recipe
from mealplanner.plan.shopping_list import (
    aggregate_planned_meals,
    build_shopping_list,
    generated_note,
)

__all__ = [
    "aggregate_planned_meals",
    "build_shopping_list",
    "compute_scale_factor",
    "generated_note",
    "scale_quantity",
    "scale_recipe",
]
