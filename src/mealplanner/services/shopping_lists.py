"""Shopping lists, including generation from meal plans."""

from mealplanner.exceptions import NotFoundError
from mealplanner.logging_config import get_logger
from mealplanner.mappers import (
    shopping_list_from_request,
    shopping_list_item_from_request,
    shopping_list_to_response,
)
from mealplanner.models import ShoppingList, ShoppingListItem
from mealplanner.plan.shopping_list import build_shopping_list
from mealplanner.repository import MealPlanRepository, ShoppingListRepository
from mealplanner.schemas import SaveShoppingListRequest, ShoppingListResponse

logger = get_logger(__name__)


class ShoppingListService:
    """Service layer for shopping lists."""

    def __init__(self, shopping_lists: ShoppingListRepository, meal_plans: MealPlanRepository):
        self.shopping_lists = shopping_lists
        self.meal_plans = meal_plans

    async def get_shopping_list(self, shopping_list_id: int) -> ShoppingListResponse | None:
        shopping_list = await self.shopping_lists.get_by_id_with_items(shopping_list_id)
        return shopping_list_to_response(shopping_list) if shopping_list else None

    async def get_shopping_lists_for_household(self, household_id: int) -> list[ShoppingListResponse]:
        shopping_lists = await self.shopping_lists.get_by_household_id(household_id)
        return [shopping_list_to_response(sl) for sl in shopping_lists]

    async def create_shopping_list(
        self, household_id: int, payload: SaveShoppingListRequest
    ) -> ShoppingListResponse:
        shopping_list = await self.shopping_lists.add(shopping_list_from_request(payload, household_id))
        return shopping_list_to_response(await self._require_with_items(shopping_list.id))

    async def generate_from_meal_plan(self, meal_plan_id: int, household_id: int) -> ShoppingListResponse:
        """
        Create a new shopping list covering every planned meal of a meal plan.

        Recipe ingredients are scaled to each planned meal's servings and summed
        per (ingredient, unit). A fresh list is created on every call.

        Raises:
            NotFoundError: No meal plan with meal_plan_id exists.
        """
        meal_plan = await self.meal_plans.get_by_id_with_ingredients(meal_plan_id)
        if meal_plan is None:
            raise NotFoundError("Meal plan", meal_plan_id)

        shopping_list = await self.shopping_lists.add(build_shopping_list(meal_plan, household_id))
        logger.info(
            f"Generated shopping list {shopping_list.id} with {len(shopping_list.items)} items "
            f"from meal plan {meal_plan_id}"
        )
        return shopping_list_to_response(await self._require_with_items(shopping_list.id))

    async def update_shopping_list(self, shopping_list_id: int, payload: SaveShoppingListRequest) -> None:
        """Overwrite meal plan link and notes, and replace every item with the payload's."""
        shopping_list = await self._require_with_items(shopping_list_id)

        shopping_list.meal_plan_id = payload.meal_plan_id
        shopping_list.notes = payload.notes
        shopping_list.items = [shopping_list_item_from_request(item) for item in payload.items]

        await self.shopping_lists.update(shopping_list)

    async def delete_shopping_list(self, shopping_list_id: int) -> None:
        shopping_list = await self.shopping_lists.get_by_id(shopping_list_id)
        if shopping_list is None:
            raise NotFoundError("Shopping list", shopping_list_id)
        await self.shopping_lists.delete(shopping_list)

    async def toggle_item_checked(self, shopping_list_id: int, item_id: int) -> None:
        shopping_list = await self._require_with_items(shopping_list_id)
        item = self._find_item(shopping_list, item_id)
        item.is_checked = not item.is_checked
        await self.shopping_lists.update(shopping_list)

    async def _require_with_items(self, shopping_list_id: int) -> ShoppingList:
        shopping_list = await self.shopping_lists.get_by_id_with_items(shopping_list_id)
        if shopping_list is None:
            raise NotFoundError("Shopping list", shopping_list_id)
        return shopping_list

    @staticmethod
    def _find_item(shopping_list: ShoppingList, item_id: int) -> ShoppingListItem:
        for item in shopping_list.items:
            if item.id == item_id:
                return item
        raise NotFoundError("Shopping list item", item_id)
