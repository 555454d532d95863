"""Ingredient catalog management."""

from mealplanner.exceptions import NotFoundError
from mealplanner.logging_config import get_logger
from mealplanner.mappers import ingredient_from_request, ingredient_to_response
from mealplanner.models import Ingredient
from mealplanner.repository import IngredientRepository
from mealplanner.schemas import IngredientResponse, SaveIngredientRequest

logger = get_logger(__name__)


class IngredientService:
    def __init__(self, ingredients: IngredientRepository):
        self.ingredients = ingredients

    async def get_ingredient(self, ingredient_id: int) -> IngredientResponse | None:
        ingredient = await self.ingredients.get_by_id(ingredient_id)
        return ingredient_to_response(ingredient) if ingredient else None

    async def list_ingredients(self) -> list[IngredientResponse]:
        return [ingredient_to_response(i) for i in await self.ingredients.get_all()]

    async def search_ingredients(self, search_term: str) -> list[IngredientResponse]:
        return [ingredient_to_response(i) for i in await self.ingredients.search_by_name(search_term)]

    async def create_ingredient(self, payload: SaveIngredientRequest) -> IngredientResponse:
        created = await self.ingredients.add(ingredient_from_request(payload))
        logger.info(f"Created ingredient {created.id} '{created.name}'")
        return ingredient_to_response(created)

    async def update_ingredient(self, ingredient_id: int, payload: SaveIngredientRequest) -> None:
        ingredient = await self._require(ingredient_id)
        ingredient.name = payload.name
        ingredient.category = payload.category
        await self.ingredients.update(ingredient)

    async def delete_ingredient(self, ingredient_id: int) -> None:
        ingredient = await self._require(ingredient_id)
        await self.ingredients.delete(ingredient)

    async def _require(self, ingredient_id: int) -> Ingredient:
        ingredient = await self.ingredients.get_by_id(ingredient_id)
        if ingredient is None:
            raise NotFoundError("Ingredient", ingredient_id)
        return ingredient
