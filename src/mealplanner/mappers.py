"""Translation between persisted entities and API schemas."""

from mealplanner.models import (
    Household,
    Ingredient,
    MealPlan,
    Pantry,
    PantryItem,
    PlannedMeal,
    Recipe,
    RecipeIngredient,
    ShoppingList,
    ShoppingListItem,
    UserHousehold,
)
from mealplanner.schemas import (
    HouseholdMemberResponse,
    HouseholdResponse,
    IngredientResponse,
    MealPlanResponse,
    PantryItemResponse,
    PantryResponse,
    PlannedMealResponse,
    RecipeIngredientResponse,
    RecipeResponse,
    SaveHouseholdRequest,
    SaveIngredientRequest,
    SaveMealPlanRequest,
    SavePantryItemRequest,
    SavePlannedMealRequest,
    SaveRecipeIngredientRequest,
    SaveRecipeRequest,
    SaveShoppingListItemRequest,
    SaveShoppingListRequest,
    ShoppingListItemResponse,
    ShoppingListResponse,
)
from mealplanner.units import format_with_unit

# =============================================================================
# Households
# =============================================================================


def household_to_response(household: Household) -> HouseholdResponse:
    return HouseholdResponse(
        id=household.id,
        name=household.name,
        created_at=household.created_at,
        members=[member_to_response(member) for member in household.members],
    )


def member_to_response(member: UserHousehold) -> HouseholdMemberResponse:
    return HouseholdMemberResponse(
        user_id=member.user_id,
        role=member.role,
        joined_at=member.joined_at,
    )


def household_from_request(payload: SaveHouseholdRequest) -> Household:
    return Household(name=payload.name, members=[])


# =============================================================================
# Ingredients
# =============================================================================


def ingredient_to_response(ingredient: Ingredient) -> IngredientResponse:
    return IngredientResponse(id=ingredient.id, name=ingredient.name, category=ingredient.category)


def ingredient_from_request(payload: SaveIngredientRequest) -> Ingredient:
    return Ingredient(name=payload.name, category=payload.category)


# =============================================================================
# Recipes
# =============================================================================


def recipe_to_response(recipe: Recipe) -> RecipeResponse:
    return RecipeResponse(
        id=recipe.id,
        name=recipe.name,
        description=recipe.description,
        instructions=recipe.instructions,
        prep_time_minutes=recipe.prep_time_minutes or 0,
        cook_time_minutes=recipe.cook_time_minutes or 0,
        serving_size=recipe.serving_size,
        household_id=recipe.household_id,
        created_at=recipe.created_at,
        updated_at=recipe.updated_at,
        ingredients=[recipe_ingredient_to_response(ri) for ri in recipe.recipe_ingredients or []],
    )


def recipe_ingredient_to_response(recipe_ingredient: RecipeIngredient) -> RecipeIngredientResponse:
    ingredient = recipe_ingredient.ingredient
    return RecipeIngredientResponse(
        ingredient_id=recipe_ingredient.ingredient_id,
        ingredient_name=ingredient.name if ingredient else "",
        quantity=recipe_ingredient.quantity,
        unit=recipe_ingredient.unit,
        notes=recipe_ingredient.notes,
        display_quantity=format_with_unit(recipe_ingredient.quantity, recipe_ingredient.unit),
    )


def recipe_from_request(payload: SaveRecipeRequest, household_id: int) -> Recipe:
    return Recipe(
        household_id=household_id,
        name=payload.name,
        description=payload.description,
        instructions=payload.instructions,
        prep_time_minutes=payload.prep_time_minutes,
        cook_time_minutes=payload.cook_time_minutes,
        serving_size=payload.serving_size,
        recipe_ingredients=[recipe_ingredient_from_request(i) for i in payload.ingredients],
    )


def recipe_ingredient_from_request(payload: SaveRecipeIngredientRequest) -> RecipeIngredient:
    return RecipeIngredient(
        ingredient_id=payload.ingredient_id,
        quantity=payload.quantity,
        unit=payload.unit,
        notes=payload.notes,
    )


# =============================================================================
# Meal Plans
# =============================================================================


def meal_plan_to_response(meal_plan: MealPlan) -> MealPlanResponse:
    return MealPlanResponse(
        id=meal_plan.id,
        household_id=meal_plan.household_id,
        week_start_date=meal_plan.week_start_date,
        created_at=meal_plan.created_at,
        planned_meals=[planned_meal_to_response(pm) for pm in meal_plan.planned_meals],
    )


def planned_meal_to_response(planned_meal: PlannedMeal) -> PlannedMealResponse:
    recipe = planned_meal.recipe
    return PlannedMealResponse(
        id=planned_meal.id,
        meal_plan_id=planned_meal.meal_plan_id,
        recipe_id=planned_meal.recipe_id,
        recipe_name=recipe.name if recipe else "",
        day_of_week=planned_meal.day_of_week,
        meal_type=planned_meal.meal_type,
        servings=planned_meal.servings,
        notes=planned_meal.notes,
    )


def meal_plan_from_request(payload: SaveMealPlanRequest, household_id: int) -> MealPlan:
    return MealPlan(
        household_id=household_id,
        week_start_date=payload.week_start_date,
        planned_meals=[planned_meal_from_request(pm) for pm in payload.planned_meals],
    )


def planned_meal_from_request(payload: SavePlannedMealRequest) -> PlannedMeal:
    return PlannedMeal(
        recipe_id=payload.recipe_id,
        day_of_week=payload.day_of_week,
        meal_type=payload.meal_type,
        servings=payload.servings,
        notes=payload.notes,
    )


# =============================================================================
# Pantries
# =============================================================================


def pantry_to_response(pantry: Pantry) -> PantryResponse:
    return PantryResponse(
        id=pantry.id,
        household_id=pantry.household_id,
        items=[pantry_item_to_response(item) for item in pantry.items],
    )


def pantry_item_to_response(item: PantryItem) -> PantryItemResponse:
    ingredient = item.ingredient
    return PantryItemResponse(
        id=item.id,
        ingredient_id=item.ingredient_id,
        ingredient_name=ingredient.name if ingredient else "",
        quantity=item.quantity,
        unit=item.unit,
        expiry_date=item.expiry_date,
        added_at=item.added_at,
        display_quantity=format_with_unit(item.quantity, item.unit),
    )


def pantry_item_from_request(payload: SavePantryItemRequest, pantry_id: int) -> PantryItem:
    return PantryItem(
        pantry_id=pantry_id,
        ingredient_id=payload.ingredient_id,
        quantity=payload.quantity,
        unit=payload.unit,
        expiry_date=payload.expiry_date,
    )


# =============================================================================
# Shopping Lists
# =============================================================================


def shopping_list_to_response(shopping_list: ShoppingList) -> ShoppingListResponse:
    return ShoppingListResponse(
        id=shopping_list.id,
        household_id=shopping_list.household_id,
        meal_plan_id=shopping_list.meal_plan_id,
        created_at=shopping_list.created_at,
        notes=shopping_list.notes,
        items=[shopping_list_item_to_response(item) for item in shopping_list.items],
    )


def shopping_list_item_to_response(item: ShoppingListItem) -> ShoppingListItemResponse:
    ingredient = item.ingredient
    return ShoppingListItemResponse(
        id=item.id,
        ingredient_id=item.ingredient_id,
        ingredient_name=ingredient.name if ingredient else "",
        quantity=item.quantity,
        unit=item.unit,
        is_checked=bool(item.is_checked),
        display_quantity=format_with_unit(item.quantity, item.unit),
    )


def shopping_list_from_request(payload: SaveShoppingListRequest, household_id: int) -> ShoppingList:
    return ShoppingList(
        household_id=household_id,
        meal_plan_id=payload.meal_plan_id,
        notes=payload.notes,
        items=[shopping_list_item_from_request(item) for item in payload.items],
    )


def shopping_list_item_from_request(payload: SaveShoppingListItemRequest) -> ShoppingListItem:
    return ShoppingListItem(
        ingredient_id=payload.ingredient_id,
        quantity=payload.quantity,
        unit=payload.unit,
        is_checked=False,
    )
