"""
Unit/quantity normalizer.

Converts (amount, unit) into one of the nutrition table's base units.
Every converter returns 0 when the source unit cannot be expressed in the
target unit; callers treat 0 as "no conversion".
"""
from __future__ import annotations

UNIT_SYNONYMS = {
    "cup": "cup", "cups": "cup",
    "tbsp": "tbsp", "tbsps": "tbsp", "tablespoon": "tbsp", "tablespoons": "tbsp",
    "tsp": "tsp", "tsps": "tsp", "teaspoon": "tsp", "teaspoons": "tsp",
    # a bare "oz" next to a volume measure is read as fluid ounces
    "oz": "floz", "fl oz": "floz", "fl-oz": "floz", "fl. oz": "floz",
    "fluid ounce": "floz", "fluid ounces": "floz",
    "ml": "ml", "milliliter": "ml", "milliliters": "ml", "millilitre": "ml", "millilitres": "ml",
    "pinch": "pinch", "pinches": "pinch",
}

# (numerator, denominator) per one source unit
CUP_RATIOS = {"cup": (1, 1), "tbsp": (1, 16), "tsp": (1, 48), "floz": (1, 8), "ml": (1, 237)}
TBSP_RATIOS = {"tbsp": (1, 1), "tsp": (1, 3), "cup": (16, 1), "floz": (2, 1)}
TSP_RATIOS = {"tsp": (1, 1), "tbsp": (3, 1), "cup": (48, 1), "pinch": (1, 16)}

EGG_SIZES = {"": 1.0, "unit": 1.0, "egg": 1.0, "eggs": 1.0, "large": 1.0, "medium": 0.85, "small": 0.7}
CLOVE_UNITS = {"", "unit", "clove", "cloves"}


def canonical_unit(unit: str) -> str:
    u = " ".join((unit or "").lower().split())
    return UNIT_SYNONYMS.get(u, u)


def _convert(amount: float, unit: str, ratios: dict) -> float:
    ratio = ratios.get(canonical_unit(unit))
    if ratio is None:
        return 0
    num, den = ratio
    return amount * num / den


def to_cups(amount: float, unit: str) -> float:
    return _convert(amount, unit, CUP_RATIOS)


def to_tbsp(amount: float, unit: str) -> float:
    return _convert(amount, unit, TBSP_RATIOS)


def to_tsp(amount: float, unit: str) -> float:
    return _convert(amount, unit, TSP_RATIOS)


def to_eggs(amount: float, unit: str) -> float:
    size = EGG_SIZES.get((unit or "").strip().lower())
    return amount * size if size is not None else 0


def to_cloves(amount: float, unit: str) -> float:
    return amount if (unit or "").strip().lower() in CLOVE_UNITS else 0
