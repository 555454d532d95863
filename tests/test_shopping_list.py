"""Tests for shopping list aggregation from meal plans."""

from decimal import Decimal

from factories import (
    GARLIC,
    PASTA,
    SALT,
    TOMATOES,
    make_meal_plan,
    make_planned_meal,
    make_recipe,
)
from mealplanner.plan.shopping_list import (
    aggregate_planned_meals,
    build_shopping_list,
    generated_note,
)
from mealplanner.units import MeasurementUnit

# =============================================================================
# Aggregation Tests
# =============================================================================


class TestAggregatePlannedMeals:
    """Tests for aggregate_planned_meals function."""

    def test_empty_plan_yields_nothing(self):
        assert aggregate_planned_meals([]) == {}

    def test_single_meal_is_scaled(self, pasta_recipe):
        """200g pasta at serving size 2, planned for 4, needs 400g."""
        totals = aggregate_planned_meals([make_planned_meal(1, pasta_recipe, 4)])

        assert totals[(PASTA, MeasurementUnit.GRAM)] == Decimal("400")
        assert totals[(GARLIC, MeasurementUnit.CLOVE)] == Decimal("4")

    def test_same_ingredient_across_recipes_is_summed(self, pasta_recipe, salad_recipe):
        """100g tomatoes for 4 of a 2-serving recipe plus 50g for 2 of a 2-serving recipe."""
        totals = aggregate_planned_meals(
            [
                make_planned_meal(1, pasta_recipe, 4),
                make_planned_meal(2, salad_recipe, 2),
            ]
        )

        assert totals[(TOMATOES, MeasurementUnit.GRAM)] == Decimal("250")
        assert totals[(SALT, MeasurementUnit.TO_TASTE)] == Decimal("1")

    def test_different_units_stay_separate(self):
        grams = make_recipe(1, 1, [(TOMATOES, "500", MeasurementUnit.GRAM)])
        pieces = make_recipe(2, 1, [(TOMATOES, "3", MeasurementUnit.PIECE)])

        totals = aggregate_planned_meals(
            [make_planned_meal(1, grams, 1), make_planned_meal(2, pieces, 1)]
        )

        assert totals == {
            (TOMATOES, MeasurementUnit.GRAM): Decimal("500"),
            (TOMATOES, MeasurementUnit.PIECE): Decimal("3"),
        }

    def test_kilograms_and_grams_are_not_converted(self):
        grams = make_recipe(1, 1, [(PASTA, "1000", MeasurementUnit.GRAM)])
        kilos = make_recipe(2, 1, [(PASTA, "1", MeasurementUnit.KILOGRAM)])

        totals = aggregate_planned_meals(
            [make_planned_meal(1, grams, 1), make_planned_meal(2, kilos, 1)]
        )

        assert len(totals) == 2

    def test_order_does_not_matter(self, pasta_recipe, salad_recipe):
        meals = [
            make_planned_meal(1, pasta_recipe, 3),
            make_planned_meal(2, salad_recipe, 5),
            make_planned_meal(3, pasta_recipe, 1),
        ]

        assert aggregate_planned_meals(meals) == aggregate_planned_meals(list(reversed(meals)))

    def test_meal_without_recipe_is_skipped(self, pasta_recipe):
        totals = aggregate_planned_meals(
            [make_planned_meal(1, None, 4), make_planned_meal(2, pasta_recipe, 2)]
        )

        assert totals[(PASTA, MeasurementUnit.GRAM)] == Decimal("200")

    def test_recipe_without_ingredients_is_skipped(self):
        empty = make_recipe(1, 2, [])
        assert aggregate_planned_meals([make_planned_meal(1, empty, 4)]) == {}

    def test_no_rounding_of_scaled_quantities(self):
        recipe = make_recipe(1, 3, [(PASTA, "100", MeasurementUnit.GRAM)])
        totals = aggregate_planned_meals([make_planned_meal(1, recipe, 1)])

        assert totals[(PASTA, MeasurementUnit.GRAM)] == Decimal("100") * (Decimal(1) / Decimal(3))


# =============================================================================
# Shopping List Building Tests
# =============================================================================


class TestBuildShoppingList:
    """Tests for build_shopping_list function."""

    def test_list_metadata(self, pasta_recipe):
        meal_plan = make_meal_plan([make_planned_meal(1, pasta_recipe, 2)], meal_plan_id=7)

        shopping_list = build_shopping_list(meal_plan, household_id=3)

        assert shopping_list.household_id == 3
        assert shopping_list.meal_plan_id == 7
        assert shopping_list.notes == "Generated from meal plan for week of 2024-01-15"
        assert shopping_list.created_at is not None

    def test_one_unchecked_item_per_ingredient_and_unit(self, pasta_recipe, salad_recipe):
        meal_plan = make_meal_plan(
            [make_planned_meal(1, pasta_recipe, 4), make_planned_meal(2, salad_recipe, 2)]
        )

        shopping_list = build_shopping_list(meal_plan, household_id=1)

        keys = [(item.ingredient_id, item.unit) for item in shopping_list.items]
        assert len(keys) == len(set(keys)) == 4
        assert all(item.is_checked is False for item in shopping_list.items)

        tomatoes = next(i for i in shopping_list.items if i.ingredient_id == TOMATOES)
        assert tomatoes.quantity == Decimal("250")

    def test_empty_plan_builds_empty_list(self):
        shopping_list = build_shopping_list(make_meal_plan([]), household_id=1)
        assert shopping_list.items == []

    def test_generated_note_format(self):
        assert generated_note(make_meal_plan([]).week_start_date) == (
            "Generated from meal plan for week of 2024-01-15"
        )
