"""API routes for shopping lists."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from mealplanner.dependencies import bind_household, get_shopping_list_service
from mealplanner.exceptions import NotFoundError
from mealplanner.logging_config import get_logger
from mealplanner.schemas import SaveShoppingListRequest, ShoppingListResponse
from mealplanner.services import ShoppingListService

logger = get_logger(__name__)

router = APIRouter(prefix="/api/shopping-lists", tags=["shopping-lists"])


@router.get("/household/{household_id}", response_model=list[ShoppingListResponse])
async def get_shopping_lists_for_household(
    household_id: Annotated[int, Depends(bind_household)],
    service: ShoppingListService = Depends(get_shopping_list_service),
) -> list[ShoppingListResponse]:
    return await service.get_shopping_lists_for_household(household_id)


@router.post(
    "/household/{household_id}",
    response_model=ShoppingListResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_shopping_list(
    household_id: Annotated[int, Depends(bind_household)],
    payload: SaveShoppingListRequest,
    request: Request,
    response: Response,
    service: ShoppingListService = Depends(get_shopping_list_service),
) -> ShoppingListResponse:
    """Create a hand-entered shopping list."""
    shopping_list = await service.create_shopping_list(household_id, payload)
    response.headers["Location"] = str(
        request.url_for("get_shopping_list", shopping_list_id=shopping_list.id)
    )
    return shopping_list


@router.post(
    "/generate/meal-plan/{meal_plan_id}/household/{household_id}",
    response_model=ShoppingListResponse,
    status_code=status.HTTP_201_CREATED,
)
async def generate_shopping_list(
    meal_plan_id: int,
    household_id: Annotated[int, Depends(bind_household)],
    request: Request,
    response: Response,
    service: ShoppingListService = Depends(get_shopping_list_service),
) -> ShoppingListResponse:
    """
    Generate a shopping list from a meal plan.

    Ingredients of every planned meal are scaled to the planned servings and
    summed per ingredient and unit. Each call creates a new list.
    """
    logger.info(f"Generating shopping list from meal plan {meal_plan_id}")

    try:
        shopping_list = await service.generate_from_meal_plan(meal_plan_id, household_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)

    response.headers["Location"] = str(
        request.url_for("get_shopping_list", shopping_list_id=shopping_list.id)
    )
    return shopping_list


@router.get("/{shopping_list_id}", response_model=ShoppingListResponse)
async def get_shopping_list(
    shopping_list_id: int,
    service: ShoppingListService = Depends(get_shopping_list_service),
) -> ShoppingListResponse:
    shopping_list = await service.get_shopping_list(shopping_list_id)
    if not shopping_list:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Shopping list {shopping_list_id} not found",
        )
    return shopping_list


@router.put("/{shopping_list_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_shopping_list(
    shopping_list_id: int,
    payload: SaveShoppingListRequest,
    service: ShoppingListService = Depends(get_shopping_list_service),
) -> None:
    """Overwrite notes and meal plan link and replace every item."""
    try:
        await service.update_shopping_list(shopping_list_id, payload)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)


@router.delete("/{shopping_list_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_shopping_list(
    shopping_list_id: int,
    service: ShoppingListService = Depends(get_shopping_list_service),
) -> None:
    try:
        await service.delete_shopping_list(shopping_list_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)


@router.patch("/{shopping_list_id}/items/{item_id}/toggle", status_code=status.HTTP_204_NO_CONTENT)
async def toggle_item_checked(
    shopping_list_id: int,
    item_id: int,
    service: ShoppingListService = Depends(get_shopping_list_service),
) -> None:
    """Flip the checked state of a shopping list item."""
    try:
        await service.toggle_item_checked(shopping_list_id, item_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
