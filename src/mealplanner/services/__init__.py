"""CRUD services orchestrating repositories, mappers and the planning functions."""

from mealplanner.services.households import HouseholdService
from mealplanner.services.ingredients import IngredientService
from mealplanner.services.meal_plans import MealPlanService
from mealplanner.services.pantries import PantryService
from mealplanner.services.recipes import RecipeService
from mealplanner.services.shopping_lists import ShoppingListService

__all__ = [
    "HouseholdService",
    "IngredientService",
    "MealPlanService",
    "PantryService",
    "RecipeService",
    "ShoppingListService",
]
