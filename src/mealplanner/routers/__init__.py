"""API routers for the mealplanner application."""

from mealplanner.routers.households import router as households_router
from mealplanner.routers.ingredients import router as ingredients_router
from mealplanner.routers.meal_plans import router as meal_plans_router
from mealplanner.routers.pantries import router as pantries_router
from mealplanner.routers.recipes import router as recipes_router
from mealplanner.routers.shopping_lists import router as shopping_lists_router

__all__ = [
    "households_router",
    "ingredients_router",
    "meal_plans_router",
    "pantries_router",
    "recipes_router",
    "shopping_lists_router",
]
