"""API routes for the shared ingredient catalog."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status

from mealplanner.dependencies import get_ingredient_service
from mealplanner.exceptions import NotFoundError
from mealplanner.logging_config import get_logger
from mealplanner.schemas import IngredientResponse, SaveIngredientRequest
from mealplanner.services import IngredientService

logger = get_logger(__name__)

router = APIRouter(prefix="/api/ingredients", tags=["ingredients"])


@router.get("", response_model=list[IngredientResponse])
async def list_ingredients(
    service: IngredientService = Depends(get_ingredient_service),
) -> list[IngredientResponse]:
    """List every catalog ingredient ordered by name."""
    return await service.list_ingredients()


@router.get("/search", response_model=list[IngredientResponse])
async def search_ingredients(
    search_term: Annotated[str, Query(min_length=1, description="Part of the ingredient name")],
    service: IngredientService = Depends(get_ingredient_service),
) -> list[IngredientResponse]:
    """Find ingredients whose name contains the search term."""
    logger.info(f"Searching ingredients: term={search_term}")
    return await service.search_ingredients(search_term)


@router.get("/{ingredient_id}", response_model=IngredientResponse)
async def get_ingredient(
    ingredient_id: int,
    service: IngredientService = Depends(get_ingredient_service),
) -> IngredientResponse:
    ingredient = await service.get_ingredient(ingredient_id)
    if not ingredient:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Ingredient {ingredient_id} not found",
        )
    return ingredient


@router.post("", response_model=IngredientResponse, status_code=status.HTTP_201_CREATED)
async def create_ingredient(
    payload: SaveIngredientRequest,
    request: Request,
    response: Response,
    service: IngredientService = Depends(get_ingredient_service),
) -> IngredientResponse:
    ingredient = await service.create_ingredient(payload)
    response.headers["Location"] = str(
        request.url_for("get_ingredient", ingredient_id=ingredient.id)
    )
    return ingredient


@router.put("/{ingredient_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_ingredient(
    ingredient_id: int,
    payload: SaveIngredientRequest,
    service: IngredientService = Depends(get_ingredient_service),
) -> None:
    try:
        await service.update_ingredient(ingredient_id, payload)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)


@router.delete("/{ingredient_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_ingredient(
    ingredient_id: int,
    service: IngredientService = Depends(get_ingredient_service),
) -> None:
    try:
        await service.delete_ingredient(ingredient_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
