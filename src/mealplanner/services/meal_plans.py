"""Weekly meal plan management."""

from datetime import date

from mealplanner.exceptions import ConflictError, NotFoundError
from mealplanner.logging_config import get_logger
from mealplanner.mappers import meal_plan_from_request, meal_plan_to_response, planned_meal_from_request
from mealplanner.models import MealPlan
from mealplanner.repository import MealPlanRepository
from mealplanner.schemas import MealPlanResponse, SaveMealPlanRequest

logger = get_logger(__name__)


class MealPlanService:
    """Service layer for meal plans and their planned meals."""

    def __init__(self, meal_plans: MealPlanRepository):
        self.meal_plans = meal_plans

    async def get_meal_plan(self, meal_plan_id: int) -> MealPlanResponse | None:
        meal_plan = await self.meal_plans.get_by_id_with_meals(meal_plan_id)
        return meal_plan_to_response(meal_plan) if meal_plan else None

    async def get_meal_plans_for_household(self, household_id: int) -> list[MealPlanResponse]:
        """Meal plans of a household, most recent week first."""
        meal_plans = await self.meal_plans.get_by_household_id(household_id)
        return [meal_plan_to_response(mp) for mp in meal_plans]

    async def create_meal_plan(self, household_id: int, payload: SaveMealPlanRequest) -> MealPlanResponse:
        await self._ensure_week_is_free(household_id, payload.week_start_date)
        meal_plan = await self.meal_plans.add(meal_plan_from_request(payload, household_id))
        logger.info(
            f"Created meal plan {meal_plan.id} for week of {payload.week_start_date} "
            f"with {len(payload.planned_meals)} planned meals"
        )
        return meal_plan_to_response(await self._require_with_meals(meal_plan.id))

    async def update_meal_plan(self, meal_plan_id: int, payload: SaveMealPlanRequest) -> None:
        """Overwrite the week and replace every planned meal with the payload's."""
        meal_plan = await self._require_with_meals(meal_plan_id)
        await self._ensure_week_is_free(meal_plan.household_id, payload.week_start_date, meal_plan.id)

        meal_plan.week_start_date = payload.week_start_date
        planned_meals = []
        for planned in payload.planned_meals:
            planned_meal = planned_meal_from_request(planned)
            planned_meal.meal_plan_id = meal_plan.id
            planned_meals.append(planned_meal)
        meal_plan.planned_meals = planned_meals

        await self.meal_plans.update(meal_plan)

    async def delete_meal_plan(self, meal_plan_id: int) -> None:
        meal_plan = await self.meal_plans.get_by_id(meal_plan_id)
        if meal_plan is None:
            raise NotFoundError("Meal plan", meal_plan_id)
        await self.meal_plans.delete(meal_plan)

    async def _require_with_meals(self, meal_plan_id: int) -> MealPlan:
        meal_plan = await self.meal_plans.get_by_id_with_meals(meal_plan_id)
        if meal_plan is None:
            raise NotFoundError("Meal plan", meal_plan_id)
        return meal_plan

    async def _ensure_week_is_free(
        self, household_id: int, week_start_date: date, meal_plan_id: int | None = None
    ) -> None:
        """A household has at most one meal plan per week."""
        existing_id = await self.meal_plans.get_id_for_week(household_id, week_start_date)
        if existing_id is not None and existing_id != meal_plan_id:
            raise ConflictError(
                f"Household {household_id} already has a meal plan for week of {week_start_date:%Y-%m-%d}"
            )
