"""Tests for recipe serving-size scaling."""

from decimal import Decimal

import pytest

from factories import PASTA, make_recipe
from mealplanner.mappers import recipe_to_response
from mealplanner.plan.scaling import compute_scale_factor, scale_quantity, scale_recipe
from mealplanner.units import MeasurementUnit


class TestScaleQuantity:
    """Tests for the scaling arithmetic."""

    def test_scale_factor_is_decimal(self):
        factor = compute_scale_factor(4, 2)
        assert isinstance(factor, Decimal)
        assert factor == Decimal(2)

    def test_doubling(self):
        assert scale_quantity(Decimal("200"), 2, 4) == Decimal("400")

    def test_scaling_down(self):
        assert scale_quantity(Decimal("300"), 4, 1) == Decimal("75")

    @pytest.mark.parametrize("n1,n2", [(3, 6), (8, 2), (6, 9), (6, 12)])
    def test_scaling_composes_through_base_ratio(self, n1, n2):
        """Scaling to n1 and then to n2 equals scaling straight to n2."""
        base = 4
        quantity = Decimal("250")
        via_n1 = scale_quantity(scale_quantity(quantity, base, n1), n1, n2)
        assert via_n1 == scale_quantity(quantity, base, n2)

    def test_zero_base_servings_is_signalled(self):
        with pytest.raises(ArithmeticError):
            compute_scale_factor(4, 0)


class TestScaleRecipe:
    """Tests for scale_recipe on recipe responses."""

    def test_pasta_for_four(self, pasta_recipe):
        """200g pasta for 2 servings becomes 400g for 4."""
        scaled = scale_recipe(recipe_to_response(pasta_recipe), 4)

        pasta = next(i for i in scaled.ingredients if i.ingredient_id == PASTA)
        assert scaled.serving_size == 4
        assert pasta.quantity == Decimal("400")
        assert pasta.unit == MeasurementUnit.GRAM
        assert pasta.display_quantity == "400g"

    def test_word_units_are_redisplayed(self, pasta_recipe):
        scaled = scale_recipe(recipe_to_response(pasta_recipe), 1)
        garlic = next(i for i in scaled.ingredients if i.unit == MeasurementUnit.CLOVE)
        assert garlic.quantity == Decimal("1")
        assert garlic.display_quantity == "1 clove"

    def test_input_is_not_mutated(self, pasta_recipe):
        source = recipe_to_response(pasta_recipe)
        scale_recipe(source, 6)

        assert source.serving_size == 2
        assert source.ingredients[0].quantity == Decimal("200")
        assert pasta_recipe.recipe_ingredients[0].quantity == Decimal("200")

    def test_notes_and_order_are_kept(self):
        recipe = make_recipe(5, 3, [(1, "1.5", MeasurementUnit.KILOGRAM), (2, "3", MeasurementUnit.PIECE)])
        recipe.recipe_ingredients[0].notes = "skin on"

        scaled = scale_recipe(recipe_to_response(recipe), 2)

        assert [i.ingredient_id for i in scaled.ingredients] == [1, 2]
        assert scaled.ingredients[0].notes == "skin on"
        assert scaled.ingredients[0].quantity == Decimal("1.0")
        assert scaled.ingredients[1].display_quantity == "2 pieces"
