"""Recipe management and serving-size scaling."""

from collections.abc import Sequence

from mealplanner.exceptions import ConflictError, InvalidArgumentError, NotFoundError
from mealplanner.logging_config import get_logger
from mealplanner.mappers import recipe_from_request, recipe_ingredient_from_request, recipe_to_response
from mealplanner.models import Recipe, RecipeIngredient, utcnow
from mealplanner.plan.scaling import scale_recipe
from mealplanner.repository import RecipeRepository
from mealplanner.schemas import RecipeResponse, SaveRecipeIngredientRequest, SaveRecipeRequest

logger = get_logger(__name__)


def reconcile_recipe_ingredients(
    recipe: Recipe, ingredients: Sequence[SaveRecipeIngredientRequest]
) -> list[RecipeIngredient]:
    """
    Bring a recipe's ingredient lines in line with an incoming payload.

    Lines whose ingredient is absent from the payload are dropped, lines whose
    ingredient is present are updated in place, and unknown ingredients are
    appended as new lines. Existing line objects keep their identity.

    Returns:
        The reconciled list, also assigned to recipe.recipe_ingredients.
    """
    incoming = {line.ingredient_id: line for line in ingredients}

    reconciled = [ri for ri in recipe.recipe_ingredients if ri.ingredient_id in incoming]
    existing = {ri.ingredient_id: ri for ri in reconciled}

    for ingredient_id, line in incoming.items():
        current = existing.get(ingredient_id)
        if current is None:
            new_line = recipe_ingredient_from_request(line)
            new_line.recipe_id = recipe.id
            reconciled.append(new_line)
        else:
            current.quantity = line.quantity
            current.unit = line.unit
            current.notes = line.notes

    recipe.recipe_ingredients = reconciled
    return reconciled


class RecipeService:
    """Service layer for household recipes."""

    def __init__(self, recipes: RecipeRepository):
        self.recipes = recipes

    async def get_recipe(self, recipe_id: int) -> RecipeResponse | None:
        recipe = await self.recipes.get_by_id_with_ingredients(recipe_id)
        return recipe_to_response(recipe) if recipe else None

    async def get_recipes_for_household(self, household_id: int) -> list[RecipeResponse]:
        return [recipe_to_response(r) for r in await self.recipes.get_by_household_id(household_id)]

    async def search_recipes(self, household_id: int, search_term: str) -> list[RecipeResponse]:
        recipes = await self.recipes.search_by_name(household_id, search_term)
        return [recipe_to_response(r) for r in recipes]

    async def create_recipe(self, household_id: int, payload: SaveRecipeRequest) -> RecipeResponse:
        recipe = await self.recipes.add(recipe_from_request(payload, household_id))
        logger.info(
            f"Created recipe {recipe.id} '{recipe.name}' with "
            f"{len(payload.ingredients)} ingredients for household {household_id}"
        )
        return recipe_to_response(await self._require_with_ingredients(recipe.id))

    async def update_recipe(self, recipe_id: int, payload: SaveRecipeRequest) -> None:
        recipe = await self._require_with_ingredients(recipe_id)

        recipe.name = payload.name
        recipe.description = payload.description
        recipe.instructions = payload.instructions
        recipe.prep_time_minutes = payload.prep_time_minutes
        recipe.cook_time_minutes = payload.cook_time_minutes
        recipe.serving_size = payload.serving_size
        recipe.updated_at = utcnow()
        reconcile_recipe_ingredients(recipe, payload.ingredients)

        await self.recipes.update(recipe)

    async def delete_recipe(self, recipe_id: int) -> None:
        recipe = await self.recipes.get_by_id(recipe_id)
        if recipe is None:
            raise NotFoundError("Recipe", recipe_id)
        if await self.recipes.is_planned(recipe_id):
            raise ConflictError(f"Recipe {recipe_id} is used by a meal plan and cannot be deleted")
        await self.recipes.delete(recipe)

    async def scale_recipe(self, recipe_id: int, servings: int) -> RecipeResponse:
        """
        Return the recipe with every ingredient quantity scaled to servings.

        The stored recipe is left unchanged.

        Raises:
            InvalidArgumentError: servings is zero or negative.
            NotFoundError: No recipe with recipe_id exists.
        """
        if servings <= 0:
            raise InvalidArgumentError("servings must be greater than zero", argument="servings")

        recipe = await self._require_with_ingredients(recipe_id)
        logger.debug(f"Scaling recipe {recipe_id} from {recipe.serving_size} to {servings} servings")
        return scale_recipe(recipe_to_response(recipe), servings)

    async def _require_with_ingredients(self, recipe_id: int) -> Recipe:
        recipe = await self.recipes.get_by_id_with_ingredients(recipe_id)
        if recipe is None:
            raise NotFoundError("Recipe", recipe_id)
        return recipe
