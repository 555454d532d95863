"""Tests for repositories and services against an in-memory SQLite database."""

from datetime import date, timedelta
from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError

from factories import GARLIC, PASTA, TOMATOES
from mealplanner.exceptions import ConflictError
from mealplanner.models import DayOfWeek, HouseholdRole, MealPlan, MealType
from mealplanner.plan import compute_scale_factor
from mealplanner.repository import (
    HouseholdRepository,
    IngredientRepository,
    MealPlanRepository,
    PantryRepository,
    RecipeRepository,
    ShoppingListRepository,
)
from mealplanner.schemas import (
    HouseholdMemberRequest,
    SaveHouseholdRequest,
    SaveMealPlanRequest,
    SavePantryItemRequest,
    SaveRecipeRequest,
)
from mealplanner.seed import load_seed_ingredients, seed_ingredients
from mealplanner.services import (
    HouseholdService,
    MealPlanService,
    PantryService,
    RecipeService,
    ShoppingListService,
)
from mealplanner.units import MeasurementUnit


def pasta_payload(**overrides) -> SaveRecipeRequest:
    data = {
        "name": "Pasta Pomodoro",
        "serving_size": 2,
        "ingredients": [
            {"ingredient_id": PASTA, "quantity": "200", "unit": MeasurementUnit.GRAM},
            {"ingredient_id": TOMATOES, "quantity": "100", "unit": MeasurementUnit.GRAM},
        ],
    }
    data.update(overrides)
    return SaveRecipeRequest.model_validate(data)


async def create_household(db_session) -> int:
    household = await HouseholdService(HouseholdRepository(db_session)).create_household(
        SaveHouseholdRequest(name="The Smiths"), creator_user_id="alice"
    )
    return household.id


def plan_payload(recipe_id: int, servings: int, week_start: date | None = None) -> SaveMealPlanRequest:
    return SaveMealPlanRequest.model_validate(
        {
            "week_start_date": week_start or date.today() + timedelta(days=7),
            "planned_meals": [
                {
                    "recipe_id": recipe_id,
                    "day_of_week": DayOfWeek.WEDNESDAY,
                    "meal_type": MealType.DINNER,
                    "servings": servings,
                }
            ],
        }
    )


# =============================================================================
# Seed Tests
# =============================================================================


class TestSeedIngredients:
    """Tests for the ingredient catalog seed."""

    def test_catalog_file(self):
        entries = load_seed_ingredients()
        assert len(entries) == 23
        assert {"id": 21, "name": "Garlic", "category": "Vegetables"} in entries

    @pytest.mark.asyncio
    async def test_seed_is_idempotent(self, db_session):
        assert await seed_ingredients(db_session) == 23
        assert await seed_ingredients(db_session) == 0

        ingredients = await IngredientRepository(db_session).get_all()
        assert len(ingredients) == 23

    @pytest.mark.asyncio
    async def test_search_by_name(self, db_session):
        await seed_ingredients(db_session)

        found = await IngredientRepository(db_session).search_by_name("pep")

        assert [i.name for i in found] == ["Bell Pepper", "Black Pepper"]


# =============================================================================
# Household Tests
# =============================================================================


class TestHouseholds:
    @pytest.mark.asyncio
    async def test_creator_membership_and_lookup_by_user(self, db_session):
        service = HouseholdService(HouseholdRepository(db_session))
        household_id = await create_household(db_session)

        await service.add_member(household_id, HouseholdMemberRequest(user_id="bob"))
        await service.update_member_role(household_id, "bob", HouseholdRole.ADMIN)

        household = await service.get_household(household_id)
        assert sorted((m.user_id, m.role) for m in household.members) == [
            ("alice", HouseholdRole.ADMIN),
            ("bob", HouseholdRole.ADMIN),
        ]
        assert [h.id for h in await service.get_households_for_user("bob")] == [household_id]

        await service.remove_member(household_id, "bob")
        assert await service.get_households_for_user("bob") == []


# =============================================================================
# Recipe Tests
# =============================================================================


class TestRecipes:
    @pytest.mark.asyncio
    async def test_create_and_get(self, db_session):
        await seed_ingredients(db_session)
        household_id = await create_household(db_session)
        service = RecipeService(RecipeRepository(db_session))

        created = await service.create_recipe(household_id, pasta_payload())
        fetched = await service.get_recipe(created.id)

        assert fetched.household_id == household_id
        assert {i.ingredient_name: i.display_quantity for i in fetched.ingredients} == {
            "Pasta": "200g",
            "Tomatoes": "100g",
        }

    @pytest.mark.asyncio
    async def test_update_reconciles_ingredients(self, db_session):
        await seed_ingredients(db_session)
        household_id = await create_household(db_session)
        service = RecipeService(RecipeRepository(db_session))
        created = await service.create_recipe(household_id, pasta_payload())

        await service.update_recipe(
            created.id,
            pasta_payload(
                name="Garlic Pasta",
                ingredients=[
                    {"ingredient_id": PASTA, "quantity": "250", "unit": MeasurementUnit.GRAM},
                    {"ingredient_id": GARLIC, "quantity": "3", "unit": MeasurementUnit.CLOVE},
                ],
            ),
        )
        updated = await service.get_recipe(created.id)

        assert updated.name == "Garlic Pasta"
        assert {i.ingredient_id: i.display_quantity for i in updated.ingredients} == {
            PASTA: "250g",
            GARLIC: "3 cloves",
        }

    @pytest.mark.asyncio
    async def test_scale_does_not_touch_stored_recipe(self, db_session):
        await seed_ingredients(db_session)
        household_id = await create_household(db_session)
        service = RecipeService(RecipeRepository(db_session))
        created = await service.create_recipe(household_id, pasta_payload())

        scaled = await service.scale_recipe(created.id, 4)
        stored = await service.get_recipe(created.id)

        assert scaled.serving_size == 4
        assert {i.ingredient_id: i.quantity for i in scaled.ingredients}[PASTA] == Decimal("400")
        assert stored.serving_size == 2
        assert {i.ingredient_id: i.quantity for i in stored.ingredients}[PASTA] == Decimal("200")

    @pytest.mark.asyncio
    async def test_search_is_scoped_to_household(self, db_session):
        await seed_ingredients(db_session)
        first = await create_household(db_session)
        second = await create_household(db_session)
        service = RecipeService(RecipeRepository(db_session))
        await service.create_recipe(first, pasta_payload())
        await service.create_recipe(second, pasta_payload(name="Pasta Bake"))

        found = await service.search_recipes(first, "pasta")

        assert [r.name for r in found] == ["Pasta Pomodoro"]


# =============================================================================
# Meal Plan and Shopping List Tests
# =============================================================================


class TestShoppingListGeneration:
    @pytest.mark.asyncio
    async def test_generate_from_stored_meal_plan(self, db_session):
        await seed_ingredients(db_session)
        household_id = await create_household(db_session)
        pasta = await RecipeService(RecipeRepository(db_session)).create_recipe(
            household_id, pasta_payload()
        )
        salad = await RecipeService(RecipeRepository(db_session)).create_recipe(
            household_id,
            pasta_payload(
                name="Tomato Salad",
                ingredients=[
                    {"ingredient_id": TOMATOES, "quantity": "50", "unit": MeasurementUnit.GRAM}
                ],
            ),
        )
        meal_plan = await MealPlanService(MealPlanRepository(db_session)).create_meal_plan(
            household_id,
            SaveMealPlanRequest.model_validate(
                {
                    "week_start_date": date.today() + timedelta(days=3),
                    "planned_meals": [
                        {
                            "recipe_id": pasta.id,
                            "day_of_week": DayOfWeek.MONDAY,
                            "meal_type": MealType.DINNER,
                            "servings": 4,
                        },
                        {
                            "recipe_id": salad.id,
                            "day_of_week": DayOfWeek.TUESDAY,
                            "meal_type": MealType.LUNCH,
                            "servings": 2,
                        },
                    ],
                }
            ),
        )
        assert [pm.recipe_name for pm in meal_plan.planned_meals] == ["Pasta Pomodoro", "Tomato Salad"]

        service = ShoppingListService(
            ShoppingListRepository(db_session), MealPlanRepository(db_session)
        )
        shopping_list = await service.generate_from_meal_plan(meal_plan.id, household_id)

        quantities = {i.ingredient_name: i.quantity for i in shopping_list.items}
        assert quantities == {"Pasta": Decimal("400"), "Tomatoes": Decimal("250")}
        assert shopping_list.meal_plan_id == meal_plan.id

        item_id = shopping_list.items[0].id
        await service.toggle_item_checked(shopping_list.id, item_id)
        reloaded = await service.get_shopping_list(shopping_list.id)
        assert next(i for i in reloaded.items if i.id == item_id).is_checked is True

        lists = await service.get_shopping_lists_for_household(household_id)
        assert [sl.id for sl in lists] == [shopping_list.id]

    @pytest.mark.asyncio
    async def test_scaled_quantities_are_stored_exactly(self, db_session):
        await seed_ingredients(db_session)
        household_id = await create_household(db_session)
        recipe = await RecipeService(RecipeRepository(db_session)).create_recipe(
            household_id,
            pasta_payload(
                serving_size=3,
                ingredients=[{"ingredient_id": PASTA, "quantity": "100", "unit": MeasurementUnit.GRAM}],
            ),
        )
        meal_plan = await MealPlanService(MealPlanRepository(db_session)).create_meal_plan(
            household_id, plan_payload(recipe.id, servings=1)
        )
        service = ShoppingListService(
            ShoppingListRepository(db_session), MealPlanRepository(db_session)
        )

        generated = await service.generate_from_meal_plan(meal_plan.id, household_id)
        reloaded = await service.get_shopping_list(generated.id)

        expected = Decimal("100") * compute_scale_factor(1, 3)
        assert generated.items[0].quantity == expected
        assert reloaded.items[0].quantity == expected
        assert reloaded.items[0].display_quantity == "33.33g"


# =============================================================================
# Pantry Tests
# =============================================================================


class TestPantry:
    @pytest.mark.asyncio
    async def test_add_item_creates_pantry(self, db_session):
        await seed_ingredients(db_session)
        household_id = await create_household(db_session)
        service = PantryService(PantryRepository(db_session))

        assert await service.get_pantry_for_household(household_id) is None

        item = await service.add_item(
            household_id,
            SavePantryItemRequest(ingredient_id=GARLIC, quantity=Decimal("1"), unit=MeasurementUnit.CLOVE),
        )
        assert item.ingredient_name == "Garlic"
        assert item.display_quantity == "1 clove"

        pantry = await service.get_pantry_for_household(household_id)
        assert [i.id for i in pantry.items] == [item.id]

        await service.remove_item(pantry.id, item.id)
        pantry = await service.get_pantry_for_household(household_id)
        assert pantry.items == []


# =============================================================================
# Meal Plan Rule Tests
# =============================================================================


class TestMealPlanRules:
    @pytest.mark.asyncio
    async def test_one_meal_plan_per_household_week(self, db_session):
        await seed_ingredients(db_session)
        household_id = await create_household(db_session)
        recipe = await RecipeService(RecipeRepository(db_session)).create_recipe(
            household_id, pasta_payload()
        )
        service = MealPlanService(MealPlanRepository(db_session))
        week = date.today() + timedelta(days=7)

        first = await service.create_meal_plan(household_id, plan_payload(recipe.id, 2, week))
        with pytest.raises(ConflictError):
            await service.create_meal_plan(household_id, plan_payload(recipe.id, 4, week))

        second = await service.create_meal_plan(
            household_id, plan_payload(recipe.id, 4, week + timedelta(days=7))
        )
        with pytest.raises(ConflictError):
            await service.update_meal_plan(second.id, plan_payload(recipe.id, 4, week))

        await service.update_meal_plan(first.id, plan_payload(recipe.id, 6, week))
        plans = await service.get_meal_plans_for_household(household_id)
        assert [(p.id, p.planned_meals[0].servings) for p in plans] == [(second.id, 4), (first.id, 6)]

    @pytest.mark.asyncio
    async def test_household_week_index_is_unique(self, db_session):
        household_id = await create_household(db_session)
        repository = MealPlanRepository(db_session)
        week = date.today() + timedelta(days=7)

        await repository.add(MealPlan(household_id=household_id, week_start_date=week, planned_meals=[]))
        with pytest.raises(IntegrityError):
            await repository.add(
                MealPlan(household_id=household_id, week_start_date=week, planned_meals=[])
            )
        await db_session.rollback()

    @pytest.mark.asyncio
    async def test_planned_recipe_cannot_be_deleted(self, db_session):
        await seed_ingredients(db_session)
        household_id = await create_household(db_session)
        recipes = RecipeService(RecipeRepository(db_session))
        planned = await recipes.create_recipe(household_id, pasta_payload())
        unplanned = await recipes.create_recipe(household_id, pasta_payload(name="Tomato Salad"))
        meal_plan = await MealPlanService(MealPlanRepository(db_session)).create_meal_plan(
            household_id, plan_payload(planned.id, 2)
        )

        with pytest.raises(ConflictError):
            await recipes.delete_recipe(planned.id)
        await recipes.delete_recipe(unplanned.id)

        assert await recipes.get_recipe(planned.id) is not None
        assert await recipes.get_recipe(unplanned.id) is None
        reloaded = await MealPlanService(MealPlanRepository(db_session)).get_meal_plan(meal_plan.id)
        assert [pm.recipe_id for pm in reloaded.planned_meals] == [planned.id]
