"""Request and response schemas for the API."""

from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, ClassVar

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    field_validator,
)

from mealplanner.models import DayOfWeek, HouseholdRole, MealType
from mealplanner.units import MeasurementUnit


class ResponseModel(BaseModel):
    """Base class for response schemas built from ORM entities."""

    model_config = ConfigDict(from_attributes=True)


ErrorMessages = dict[str, dict[str, str]]


class RequestModel(BaseModel):
    """
    Base class for request payloads.

    error_messages maps a field name to pydantic error types and the message
    reported when that constraint fails, e.g.
    {"name": {"string_too_short": "Household name is required"}}.
    Errors without an entry keep pydantic's wording.
    """

    error_messages: ClassVar[ErrorMessages] = {}

    @field_validator("*", mode="wrap")
    @classmethod
    def reword_errors(
        cls, value: Any, handler: ValidatorFunctionWrapHandler, info: ValidationInfo
    ) -> Any:
        messages = cls.error_messages.get(info.field_name, {})
        try:
            return handler(value)
        except ValidationError as exc:
            message = messages.get(exc.errors()[0]["type"])
            if message is None:
                raise
            raise ValueError(message) from None


# =============================================================================
# Households
# =============================================================================


class SaveHouseholdRequest(RequestModel):
    """Create or update a household."""

    error_messages = {
        "name": {
            "string_too_short": "Household name is required",
            "string_too_long": "Household name cannot exceed 100 characters",
        },
    }

    name: str = Field(min_length=1, max_length=100)


class HouseholdMemberRequest(BaseModel):
    """Add a user to a household."""

    user_id: str = Field(min_length=1, max_length=64)
    role: HouseholdRole = HouseholdRole.MEMBER


class MemberRoleRequest(BaseModel):
    """Change a member's role."""

    role: HouseholdRole


class HouseholdMemberResponse(ResponseModel):
    """Member of a household."""

    user_id: str
    role: HouseholdRole
    joined_at: datetime | None = None


class HouseholdResponse(ResponseModel):
    """Household with its members."""

    id: int
    name: str
    created_at: datetime | None = None
    members: list[HouseholdMemberResponse] = Field(default_factory=list)


# =============================================================================
# Ingredients
# =============================================================================


class SaveIngredientRequest(RequestModel):
    """Create or update a catalog ingredient."""

    error_messages = {
        "name": {
            "string_too_short": "Ingredient name is required",
            "string_too_long": "Ingredient name cannot exceed 50 characters",
        },
        "category": {"string_too_long": "Category cannot exceed 100 characters"},
    }

    name: str = Field(min_length=1, max_length=50)
    category: str | None = Field(None, max_length=100)


class IngredientResponse(ResponseModel):
    """Catalog ingredient."""

    id: int
    name: str
    category: str | None = None


# =============================================================================
# Recipes
# =============================================================================


class SaveRecipeIngredientRequest(RequestModel):
    """Ingredient line of a recipe payload."""

    error_messages = {
        "ingredient_id": {"greater_than": "Ingredient ID must be valid"},
        "quantity": {"greater_than": "Quantity must be greater than zero"},
        "unit": {"enum": "Invalid measurement unit"},
        "notes": {"string_too_long": "Notes cannot exceed 1000 characters"},
    }

    ingredient_id: int = Field(gt=0)
    quantity: Decimal = Field(gt=0)
    unit: MeasurementUnit
    notes: str | None = Field(None, max_length=1000)


class SaveRecipeRequest(RequestModel):
    """Create or update a recipe together with its ingredients."""

    error_messages = {
        "name": {
            "string_too_short": "Recipe name is required",
            "string_too_long": "Recipe name cannot exceed 200 characters",
        },
        "description": {"string_too_long": "Description cannot exceed 1000 characters"},
        "instructions": {"string_too_long": "Instructions cannot exceed 5000 characters"},
        "prep_time_minutes": {"greater_than_equal": "Prep time can't be less than zero"},
        "cook_time_minutes": {"greater_than_equal": "Cook time can't be less than zero"},
        "serving_size": {"greater_than": "Serving size must be greater than zero"},
        "ingredients": {"too_short": "Recipe must have at least one ingredient"},
    }

    name: str = Field(min_length=1, max_length=200)
    description: str | None = Field(None, max_length=1000)
    instructions: str | None = Field(None, max_length=5000)
    prep_time_minutes: int = Field(0, ge=0)
    cook_time_minutes: int = Field(0, ge=0)
    serving_size: int = Field(gt=0, description="Servings the ingredient quantities are for")
    ingredients: list[SaveRecipeIngredientRequest] = Field(min_length=1)

    @field_validator("ingredients")
    @classmethod
    def ingredients_unique(
        cls, ingredients: list[SaveRecipeIngredientRequest]
    ) -> list[SaveRecipeIngredientRequest]:
        ids = [ingredient.ingredient_id for ingredient in ingredients]
        if len(ids) != len(set(ids)):
            raise ValueError("Each ingredient can only appear once in a recipe")
        return ingredients


class RecipeIngredientResponse(ResponseModel):
    """Ingredient line of a recipe."""

    ingredient_id: int
    ingredient_name: str = ""
    quantity: Decimal
    unit: MeasurementUnit
    notes: str | None = None
    display_quantity: str = ""


class RecipeResponse(ResponseModel):
    """Recipe with ingredient lines."""

    id: int
    name: str
    description: str | None = None
    instructions: str | None = None
    prep_time_minutes: int = 0
    cook_time_minutes: int = 0
    serving_size: int
    household_id: int
    created_at: datetime | None = None
    updated_at: datetime | None = None
    ingredients: list[RecipeIngredientResponse] = Field(default_factory=list)


# =============================================================================
# Meal Plans
# =============================================================================


class SavePlannedMealRequest(RequestModel):
    """Planned meal slot of a meal plan payload."""

    error_messages = {
        "recipe_id": {"greater_than": "Recipe ID must be valid"},
        "day_of_week": {"enum": "Day of week must be valid"},
        "meal_type": {"enum": "Meal type must be valid"},
        "servings": {"greater_than": "Servings must be greater than zero"},
        "notes": {"string_too_long": "Notes cannot exceed 1000 characters"},
    }

    recipe_id: int = Field(gt=0)
    day_of_week: DayOfWeek
    meal_type: MealType
    servings: int = Field(gt=0)
    notes: str | None = Field(None, max_length=1000)


class SaveMealPlanRequest(RequestModel):
    """Create or update a meal plan."""

    error_messages = {
        "planned_meals": {"too_short": "Meal plan must have at least one planned meal"},
    }

    week_start_date: date
    planned_meals: list[SavePlannedMealRequest] = Field(min_length=1)

    @field_validator("week_start_date")
    @classmethod
    def week_not_in_past(cls, week_start_date: date) -> date:
        if week_start_date < date.today():
            raise ValueError("Week start date must be in the future")
        return week_start_date


class PlannedMealResponse(ResponseModel):
    """Planned meal slot."""

    id: int
    meal_plan_id: int
    recipe_id: int
    recipe_name: str = ""
    day_of_week: DayOfWeek
    meal_type: MealType
    servings: int
    notes: str | None = None


class MealPlanResponse(ResponseModel):
    """Meal plan with its planned meals."""

    id: int
    household_id: int
    week_start_date: date
    created_at: datetime | None = None
    planned_meals: list[PlannedMealResponse] = Field(default_factory=list)


# =============================================================================
# Pantries
# =============================================================================


class SavePantryItemRequest(RequestModel):
    """Add or update a pantry item."""

    error_messages = {
        "ingredient_id": {"greater_than": "Ingredient ID must be greater than 0"},
        "quantity": {"greater_than": "Quantity must be greater than 0"},
    }

    ingredient_id: int = Field(gt=0)
    quantity: Decimal = Field(gt=0)
    unit: MeasurementUnit
    expiry_date: datetime | None = None

    @field_validator("expiry_date")
    @classmethod
    def expiry_in_future(cls, expiry_date: datetime | None) -> datetime | None:
        if expiry_date is None:
            return None
        if expiry_date.tzinfo is None:
            expiry_date = expiry_date.replace(tzinfo=timezone.utc)
        if expiry_date <= datetime.now(timezone.utc):
            raise ValueError("Expiry date must be in the future")
        return expiry_date


class PantryItemResponse(ResponseModel):
    """Stocked pantry item."""

    id: int
    ingredient_id: int
    ingredient_name: str = ""
    quantity: Decimal
    unit: MeasurementUnit
    expiry_date: datetime | None = None
    added_at: datetime | None = None
    display_quantity: str = ""


class PantryResponse(ResponseModel):
    """Household pantry."""

    id: int
    household_id: int
    items: list[PantryItemResponse] = Field(default_factory=list)


# =============================================================================
# Shopping Lists
# =============================================================================


class SaveShoppingListItemRequest(RequestModel):
    """Hand-entered shopping list line."""

    error_messages = {
        "ingredient_id": {"greater_than": "Ingredient ID must be greater than 0"},
        "quantity": {"greater_than": "Quantity must be greater than 0"},
    }

    ingredient_id: int = Field(gt=0)
    quantity: Decimal = Field(gt=0)
    unit: MeasurementUnit


class SaveShoppingListRequest(RequestModel):
    """Create or update a shopping list."""

    error_messages = {
        "notes": {"string_too_long": "Notes cannot exceed 500 characters"},
    }

    meal_plan_id: int | None = None
    notes: str | None = Field(None, max_length=500)
    items: list[SaveShoppingListItemRequest] = Field(default_factory=list)


class ShoppingListItemResponse(ResponseModel):
    """Shopping list line."""

    id: int | None = None
    ingredient_id: int
    ingredient_name: str = ""
    quantity: Decimal
    unit: MeasurementUnit
    is_checked: bool = False
    display_quantity: str = ""


class ShoppingListResponse(ResponseModel):
    """Shopping list with its lines."""

    id: int
    household_id: int
    meal_plan_id: int | None = None
    created_at: datetime | None = None
    notes: str | None = None
    items: list[ShoppingListItemResponse] = Field(default_factory=list)
