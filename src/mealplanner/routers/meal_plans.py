"""API routes for weekly meal plans."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from mealplanner.dependencies import bind_household, get_meal_plan_service
from mealplanner.exceptions import ConflictError, NotFoundError
from mealplanner.logging_config import get_logger
from mealplanner.schemas import MealPlanResponse, SaveMealPlanRequest
from mealplanner.services import MealPlanService

logger = get_logger(__name__)

router = APIRouter(prefix="/api/meal-plans", tags=["meal-plans"])


@router.get("/household/{household_id}", response_model=list[MealPlanResponse])
async def get_meal_plans_for_household(
    household_id: Annotated[int, Depends(bind_household)],
    service: MealPlanService = Depends(get_meal_plan_service),
) -> list[MealPlanResponse]:
    """List a household's meal plans, most recent week first."""
    return await service.get_meal_plans_for_household(household_id)


@router.post(
    "/household/{household_id}",
    response_model=MealPlanResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_meal_plan(
    household_id: Annotated[int, Depends(bind_household)],
    payload: SaveMealPlanRequest,
    request: Request,
    response: Response,
    service: MealPlanService = Depends(get_meal_plan_service),
) -> MealPlanResponse:
    """Create a meal plan with its planned meals."""
    try:
        meal_plan = await service.create_meal_plan(household_id, payload)
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)
    response.headers["Location"] = str(request.url_for("get_meal_plan", meal_plan_id=meal_plan.id))
    return meal_plan


@router.get("/{meal_plan_id}", response_model=MealPlanResponse)
async def get_meal_plan(
    meal_plan_id: int,
    service: MealPlanService = Depends(get_meal_plan_service),
) -> MealPlanResponse:
    meal_plan = await service.get_meal_plan(meal_plan_id)
    if not meal_plan:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Meal plan {meal_plan_id} not found",
        )
    return meal_plan


@router.put("/{meal_plan_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_meal_plan(
    meal_plan_id: int,
    payload: SaveMealPlanRequest,
    service: MealPlanService = Depends(get_meal_plan_service),
) -> None:
    """Overwrite the week and replace every planned meal."""
    try:
        await service.update_meal_plan(meal_plan_id, payload)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)


@router.delete("/{meal_plan_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_meal_plan(
    meal_plan_id: int,
    service: MealPlanService = Depends(get_meal_plan_service),
) -> None:
    try:
        await service.delete_meal_plan(meal_plan_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
