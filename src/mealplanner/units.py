"""Measurement units, display abbreviations and quantity formatting."""

from decimal import ROUND_HALF_UP, Decimal
from enum import IntEnum


class MeasurementUnit(IntEnum):
    """Closed set of units a recipe, pantry or shopping-list quantity can use."""

    # Weight
    GRAM = 1
    KILOGRAM = 2
    OUNCE = 3
    POUND = 4

    # Volume
    MILLILITRE = 10
    LITRE = 11
    TEASPOON = 12
    TABLESPOON = 13
    CUP = 14
    PINT = 15
    QUART = 16
    GALLON = 17
    FLUID_OUNCE = 18

    # Count
    PIECE = 20
    WHOLE = 21
    CLOVE = 22
    SLICE = 23
    PINCH = 24
    DASH = 25

    # Other
    TO_TASTE = 30


# =============================================================================
# Unit Tables
# =============================================================================

ABBREVIATIONS: dict[MeasurementUnit, str] = {
    # Weight
    MeasurementUnit.GRAM: "g",
    MeasurementUnit.KILOGRAM: "kg",
    MeasurementUnit.OUNCE: "oz",
    MeasurementUnit.POUND: "lb",
    # Volume
    MeasurementUnit.MILLILITRE: "ml",
    MeasurementUnit.LITRE: "L",
    MeasurementUnit.TEASPOON: "tsp",
    MeasurementUnit.TABLESPOON: "tbsp",
    MeasurementUnit.CUP: "cup",
    MeasurementUnit.PINT: "pt",
    MeasurementUnit.QUART: "qt",
    MeasurementUnit.GALLON: "gal",
    MeasurementUnit.FLUID_OUNCE: "fl oz",
    # Count
    MeasurementUnit.PIECE: "piece",
    MeasurementUnit.WHOLE: "whole",
    MeasurementUnit.CLOVE: "clove",
    MeasurementUnit.SLICE: "slice",
    MeasurementUnit.PINCH: "pinch",
    MeasurementUnit.DASH: "dash",
    # Other
    MeasurementUnit.TO_TASTE: "to taste",
}

# Units written as words: separated from the quantity by a space and pluralized
WORD_UNIT_PLURALS: dict[str, str] = {
    "piece": "pieces",
    "whole": "whole",
    "clove": "cloves",
    "slice": "slices",
    "pinch": "pinches",
    "dash": "dashes",
}

TO_TASTE = ABBREVIATIONS[MeasurementUnit.TO_TASTE]

_TWO_PLACES = Decimal("0.01")


# =============================================================================
# Formatting Functions
# =============================================================================


def abbreviation(unit: MeasurementUnit | int) -> str:
    """
    Get the display abbreviation for a unit.

    Values outside the enumeration fall back to their raw representation.
    """
    try:
        member = MeasurementUnit(unit)
    except ValueError:
        return str(unit)
    return ABBREVIATIONS.get(member, member.name)


def pluralize(word: str) -> str:
    """Pluralize a word unit using the irregular plural table."""
    return WORD_UNIT_PLURALS.get(word, word + "s")


def format_quantity(quantity: Decimal | int | float) -> str:
    """
    Format a quantity with at most two decimals and no trailing zeros.

    Examples: 500.0 -> "500", 1.5 -> "1.5", 0.25 -> "0.25".
    """
    value = quantity if isinstance(quantity, Decimal) else Decimal(str(quantity))
    text = format(value.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        return "0"
    return text


def format_with_unit(quantity: Decimal | int | float, unit: MeasurementUnit | int) -> str:
    """
    Format a quantity together with its unit for display.

    "to taste" drops the quantity, word units get a space and pluralize
    when the quantity is not exactly one, abbreviated units are appended
    directly and never pluralize.
    """
    unit_text = abbreviation(unit)
    if unit_text == TO_TASTE:
        return unit_text

    formatted = format_quantity(quantity)

    if unit_text in WORD_UNIT_PLURALS:
        if Decimal(str(quantity)) != 1:
            unit_text = pluralize(unit_text)
        return f"{formatted} {unit_text}"

    return f"{formatted}{unit_text}"
