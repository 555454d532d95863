"""Household and membership management."""

from mealplanner.exceptions import NotFoundError
from mealplanner.logging_config import get_logger
from mealplanner.mappers import household_from_request, household_to_response
from mealplanner.models import Household, HouseholdRole, UserHousehold, utcnow
from mealplanner.repository import HouseholdRepository
from mealplanner.schemas import HouseholdMemberRequest, HouseholdResponse, SaveHouseholdRequest

logger = get_logger(__name__)


class HouseholdService:
    """Service layer for households and their members."""

    def __init__(self, households: HouseholdRepository):
        self.households = households

    async def get_household(self, household_id: int) -> HouseholdResponse | None:
        household = await self.households.get_by_id_with_members(household_id)
        return household_to_response(household) if household else None

    async def get_households_for_user(self, user_id: str) -> list[HouseholdResponse]:
        households = await self.households.get_by_user_id(user_id)
        return [household_to_response(h) for h in households]

    async def create_household(
        self, payload: SaveHouseholdRequest, creator_user_id: str | None = None
    ) -> HouseholdResponse:
        """
        Create a household.

        When creator_user_id is given the creator joins the new household as admin.
        """
        household = household_from_request(payload)
        if creator_user_id:
            household.members.append(
                UserHousehold(user_id=creator_user_id, role=HouseholdRole.ADMIN, joined_at=utcnow())
            )

        created = await self.households.add(household)
        logger.info(f"Created household {created.id} '{created.name}'")
        return household_to_response(created)

    async def update_household(self, household_id: int, payload: SaveHouseholdRequest) -> None:
        household = await self._require(household_id)
        household.name = payload.name
        await self.households.update(household)

    async def delete_household(self, household_id: int) -> None:
        household = await self._require(household_id)
        await self.households.delete(household)
        logger.info(f"Deleted household {household_id}")

    async def add_member(self, household_id: int, member: HouseholdMemberRequest) -> None:
        household = await self._require_with_members(household_id)
        household.members.append(
            UserHousehold(
                user_id=member.user_id,
                household_id=household_id,
                role=member.role,
                joined_at=utcnow(),
            )
        )
        await self.households.update(household)
        logger.info(f"Added user {member.user_id} to household {household_id} as {member.role.value}")

    async def remove_member(self, household_id: int, user_id: str) -> None:
        household = await self._require_with_members(household_id)
        membership = self._find_member(household, user_id)
        household.members.remove(membership)
        await self.households.update(household)
        logger.info(f"Removed user {user_id} from household {household_id}")

    async def update_member_role(self, household_id: int, user_id: str, role: HouseholdRole) -> None:
        household = await self._require_with_members(household_id)
        membership = self._find_member(household, user_id)
        membership.role = role
        await self.households.update(household)

    async def _require(self, household_id: int) -> Household:
        household = await self.households.get_by_id(household_id)
        if household is None:
            raise NotFoundError("Household", household_id)
        return household

    async def _require_with_members(self, household_id: int) -> Household:
        household = await self.households.get_by_id_with_members(household_id)
        if household is None:
            raise NotFoundError("Household", household_id)
        return household

    @staticmethod
    def _find_member(household: Household, user_id: str) -> UserHousehold:
        for membership in household.members:
            if membership.user_id == user_id:
                return membership
        raise NotFoundError(
            "User",
            user_id,
            f"User with ID {user_id} is not a member of household {household.id}",
        )
