"""API routes for a household's pantry."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from mealplanner.dependencies import bind_household, get_pantry_service
from mealplanner.exceptions import NotFoundError
from mealplanner.logging_config import get_logger
from mealplanner.schemas import PantryItemResponse, PantryResponse, SavePantryItemRequest
from mealplanner.services import PantryService

logger = get_logger(__name__)

router = APIRouter(prefix="/api/households/{household_id}/pantry", tags=["pantry"])


@router.get("", response_model=PantryResponse)
async def get_pantry(
    household_id: Annotated[int, Depends(bind_household)],
    service: PantryService = Depends(get_pantry_service),
) -> PantryResponse:
    """Get the household's pantry with its items."""
    pantry = await service.get_pantry_for_household(household_id)
    if not pantry:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Pantry for household {household_id} not found",
        )
    return pantry


@router.post("", response_model=PantryResponse, status_code=status.HTTP_201_CREATED)
async def create_pantry(
    household_id: Annotated[int, Depends(bind_household)],
    request: Request,
    response: Response,
    service: PantryService = Depends(get_pantry_service),
) -> PantryResponse:
    pantry = await service.create_pantry(household_id)
    response.headers["Location"] = str(request.url_for("get_pantry", household_id=household_id))
    return pantry


@router.post("/items", response_model=PantryItemResponse, status_code=status.HTTP_201_CREATED)
async def add_pantry_item(
    household_id: Annotated[int, Depends(bind_household)],
    payload: SavePantryItemRequest,
    request: Request,
    response: Response,
    service: PantryService = Depends(get_pantry_service),
) -> PantryItemResponse:
    """Stock an item; the pantry is created if the household has none yet."""
    item = await service.add_item(household_id, payload)
    response.headers["Location"] = str(request.url_for("get_pantry", household_id=household_id))
    return item


@router.put("/{pantry_id}/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_pantry_item(
    household_id: Annotated[int, Depends(bind_household)],
    pantry_id: int,
    item_id: int,
    payload: SavePantryItemRequest,
    service: PantryService = Depends(get_pantry_service),
) -> None:
    try:
        await service.update_item(pantry_id, item_id, payload)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)


@router.delete("/{pantry_id}/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_pantry_item(
    household_id: Annotated[int, Depends(bind_household)],
    pantry_id: int,
    item_id: int,
    service: PantryService = Depends(get_pantry_service),
) -> None:
    try:
        await service.remove_item(pantry_id, item_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
