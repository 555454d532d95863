"""API routes for household recipes."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status

from mealplanner.dependencies import bind_household, get_recipe_service
from mealplanner.exceptions import ConflictError, InvalidArgumentError, NotFoundError
from mealplanner.logging_config import get_logger
from mealplanner.schemas import RecipeResponse, SaveRecipeRequest
from mealplanner.services import RecipeService

logger = get_logger(__name__)

router = APIRouter(prefix="/api/recipes", tags=["recipes"])

MAX_SERVINGS = 10_000


# =============================================================================
# Household Recipe Endpoints
# =============================================================================


@router.get("/household/{household_id}", response_model=list[RecipeResponse])
async def get_recipes_for_household(
    household_id: Annotated[int, Depends(bind_household)],
    service: RecipeService = Depends(get_recipe_service),
) -> list[RecipeResponse]:
    """List a household's recipes ordered by name."""
    return await service.get_recipes_for_household(household_id)


@router.get("/household/{household_id}/search", response_model=list[RecipeResponse])
async def search_recipes(
    household_id: Annotated[int, Depends(bind_household)],
    search_term: Annotated[str, Query(min_length=1, description="Part of the recipe name")],
    service: RecipeService = Depends(get_recipe_service),
) -> list[RecipeResponse]:
    """Find a household's recipes whose name contains the search term."""
    logger.info(f"Searching recipes: household={household_id}, term={search_term}")
    return await service.search_recipes(household_id, search_term)


@router.post(
    "/household/{household_id}",
    response_model=RecipeResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_recipe(
    household_id: Annotated[int, Depends(bind_household)],
    payload: SaveRecipeRequest,
    request: Request,
    response: Response,
    service: RecipeService = Depends(get_recipe_service),
) -> RecipeResponse:
    """Create a recipe together with its ingredient lines."""
    recipe = await service.create_recipe(household_id, payload)
    response.headers["Location"] = str(request.url_for("get_recipe", recipe_id=recipe.id))
    return recipe


# =============================================================================
# Recipe Endpoints
# =============================================================================


@router.get("/{recipe_id}", response_model=RecipeResponse)
async def get_recipe(
    recipe_id: int,
    service: RecipeService = Depends(get_recipe_service),
) -> RecipeResponse:
    """Get a recipe with all its ingredients."""
    recipe = await service.get_recipe(recipe_id)
    if not recipe:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Recipe {recipe_id} not found",
        )
    return recipe


@router.get("/{recipe_id}/scale", response_model=RecipeResponse)
async def scale_recipe(
    recipe_id: int,
    servings: Annotated[int, Query(le=MAX_SERVINGS, description="Number of servings to scale to")],
    service: RecipeService = Depends(get_recipe_service),
) -> RecipeResponse:
    """
    Get a recipe with ingredient quantities scaled to a number of servings.

    The stored recipe is not modified.
    """
    logger.info(f"Scaling recipe {recipe_id} to {servings} servings")

    try:
        return await service.scale_recipe(recipe_id, servings)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)


@router.put("/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_recipe(
    recipe_id: int,
    payload: SaveRecipeRequest,
    service: RecipeService = Depends(get_recipe_service),
) -> None:
    """Replace a recipe's fields and reconcile its ingredient lines with the payload."""
    try:
        await service.update_recipe(recipe_id, payload)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)


@router.delete("/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_recipe(
    recipe_id: int,
    service: RecipeService = Depends(get_recipe_service),
) -> None:
    try:
        await service.delete_recipe(recipe_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)
