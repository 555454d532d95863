"""Household pantry inventory."""

from mealplanner.exceptions import NotFoundError
from mealplanner.logging_config import get_logger
from mealplanner.mappers import pantry_item_from_request, pantry_item_to_response, pantry_to_response
from mealplanner.models import Pantry, PantryItem
from mealplanner.repository import PantryRepository
from mealplanner.schemas import PantryItemResponse, PantryResponse, SavePantryItemRequest

logger = get_logger(__name__)


class PantryService:
    """Service layer for pantries and pantry items."""

    def __init__(self, pantries: PantryRepository):
        self.pantries = pantries

    async def get_pantry_for_household(self, household_id: int) -> PantryResponse | None:
        pantry = await self.pantries.get_by_household_id(household_id)
        return pantry_to_response(pantry) if pantry else None

    async def create_pantry(self, household_id: int) -> PantryResponse:
        pantry = await self.pantries.add(Pantry(household_id=household_id, items=[]))
        logger.info(f"Created pantry {pantry.id} for household {household_id}")
        return pantry_to_response(pantry)

    async def add_item(self, household_id: int, payload: SavePantryItemRequest) -> PantryItemResponse:
        """Stock an item, creating the household's pantry on first use."""
        pantry = await self.pantries.get_by_household_id(household_id)
        if pantry is None:
            pantry = await self.pantries.add(Pantry(household_id=household_id, items=[]))
            logger.info(f"Created pantry {pantry.id} for household {household_id}")

        item = pantry_item_from_request(payload, pantry.id)
        pantry.items.append(item)
        await self.pantries.update(pantry)

        # reload so the ingredient relationship of the new item is populated
        await self.pantries.get_by_id_with_items(pantry.id)
        return pantry_item_to_response(item)

    async def update_item(self, pantry_id: int, item_id: int, payload: SavePantryItemRequest) -> None:
        pantry = await self._require_with_items(pantry_id)
        item = self._find_item(pantry, item_id)

        item.ingredient_id = payload.ingredient_id
        item.quantity = payload.quantity
        item.unit = payload.unit
        item.expiry_date = payload.expiry_date

        await self.pantries.update(pantry)

    async def remove_item(self, pantry_id: int, item_id: int) -> None:
        pantry = await self._require_with_items(pantry_id)
        pantry.items.remove(self._find_item(pantry, item_id))
        await self.pantries.update(pantry)

    async def _require_with_items(self, pantry_id: int) -> Pantry:
        pantry = await self.pantries.get_by_id_with_items(pantry_id)
        if pantry is None:
            raise NotFoundError("Pantry", pantry_id)
        return pantry

    @staticmethod
    def _find_item(pantry: Pantry, item_id: int) -> PantryItem:
        for item in pantry.items:
            if item.id == item_id:
                return item
        raise NotFoundError("Pantry item", item_id)
