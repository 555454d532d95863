"""API routes for households and household membership."""

from typing import Annotated

from fastapi import APIRouter, Depends, Header, HTTPException, Request, Response, status

from mealplanner.dependencies import bind_household, get_household_service
from mealplanner.exceptions import NotFoundError
from mealplanner.logging_config import get_logger
from mealplanner.schemas import (
    HouseholdMemberRequest,
    HouseholdResponse,
    MemberRoleRequest,
    SaveHouseholdRequest,
)
from mealplanner.services import HouseholdService

logger = get_logger(__name__)

router = APIRouter(prefix="/api/households", tags=["households"])


@router.get("/user/{user_id}", response_model=list[HouseholdResponse])
async def get_households_for_user(
    user_id: str,
    service: HouseholdService = Depends(get_household_service),
) -> list[HouseholdResponse]:
    """List the households a user is a member of."""
    return await service.get_households_for_user(user_id)


@router.get("/{household_id}", response_model=HouseholdResponse)
async def get_household(
    household_id: Annotated[int, Depends(bind_household)],
    service: HouseholdService = Depends(get_household_service),
) -> HouseholdResponse:
    """Get a household with its members."""
    household = await service.get_household(household_id)
    if not household:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Household {household_id} not found",
        )
    return household


@router.post("", response_model=HouseholdResponse, status_code=status.HTTP_201_CREATED)
async def create_household(
    payload: SaveHouseholdRequest,
    request: Request,
    response: Response,
    user_id: Annotated[str | None, Header(alias="X-User-ID")] = None,
    service: HouseholdService = Depends(get_household_service),
) -> HouseholdResponse:
    """
    Create a household.

    When the X-User-ID header is present that user joins the household as admin.
    """
    household = await service.create_household(payload, creator_user_id=user_id)
    response.headers["Location"] = str(request.url_for("get_household", household_id=household.id))
    return household


@router.put("/{household_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_household(
    household_id: Annotated[int, Depends(bind_household)],
    payload: SaveHouseholdRequest,
    service: HouseholdService = Depends(get_household_service),
) -> None:
    """Rename a household."""
    try:
        await service.update_household(household_id, payload)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)


@router.delete("/{household_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_household(
    household_id: Annotated[int, Depends(bind_household)],
    service: HouseholdService = Depends(get_household_service),
) -> None:
    """Delete a household together with everything it owns."""
    try:
        await service.delete_household(household_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)


# =============================================================================
# Membership Endpoints
# =============================================================================


@router.post("/{household_id}/members", status_code=status.HTTP_204_NO_CONTENT)
async def add_member(
    household_id: Annotated[int, Depends(bind_household)],
    member: HouseholdMemberRequest,
    service: HouseholdService = Depends(get_household_service),
) -> None:
    """Add a user to a household."""
    try:
        await service.add_member(household_id, member)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)


@router.delete("/{household_id}/members/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_member(
    household_id: Annotated[int, Depends(bind_household)],
    user_id: str,
    service: HouseholdService = Depends(get_household_service),
) -> None:
    """Remove a user from a household."""
    try:
        await service.remove_member(household_id, user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)


@router.put("/{household_id}/members/{user_id}/role", status_code=status.HTTP_204_NO_CONTENT)
async def update_member_role(
    household_id: Annotated[int, Depends(bind_household)],
    user_id: str,
    payload: MemberRoleRequest,
    service: HouseholdService = Depends(get_household_service),
) -> None:
    """Change the role of a household member."""
    try:
        await service.update_member_role(household_id, user_id, payload.role)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
