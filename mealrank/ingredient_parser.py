"""
Ingredient line parser: "2 cups flour" -> {"name": "flour", "amount": 2.0, "unit": "cups"}.

parse_ingredient_line() never fails; a line without a leading quantity comes
back whole as the name with amount 0 and unit "unit".
"""
from __future__ import annotations

import re
from typing import Dict, Optional, Union

from mealrank.datasets import Ingredient
from mealrank.nutrition import enrich_ingredient

_VULGAR = {
    "¼": 0.25, "½": 0.5, "¾": 0.75,
    "⅓": 1/3, "⅔": 2/3,
    "⅛": 0.125, "⅜": 0.375, "⅝": 0.625, "⅞": 0.875
}

UNIT_TOKENS = (
    "tbsp|tablespoon|tablespoons|tsp|teaspoon|teaspoons|cup|cups|oz|ounce|ounces|"
    "lb|lbs|pound|pounds|g|gram|grams|kg|ml|milliliter|milliliters|clove|cloves|pinch|"
    "can|cans|slice|slices|stalk|stalks|bunch|piece|pieces|large|medium|small"
)

# quantity segment, optional unit token, then the name (mandatory)
AMOUNT_UNIT_RE = re.compile(
    r"^\s*([\d¼½¾⅓⅔⅛⅜⅝⅞.,/\s]+)\s*(" + UNIT_TOKENS + r")?\s+(.+)$",
    re.I,
)

_FRACTION_RE = re.compile(r"(\d+)\s*/\s*(\d+)")
_WHOLE_BEFORE_FRACTION_RE = re.compile(r"^(\d+)\s+\d+\s*/")
_WHOLE_BEFORE_VULGAR_RE = re.compile(r"(\d+)\s*[¼½¾⅓⅔⅛⅜⅝⅞]")
_LEADING_NUMBER_RE = re.compile(r"\d*\.?\d+")


def _leading_float(s: str) -> float:
    m = _LEADING_NUMBER_RE.match(s)
    if not m:
        return 0.0
    try:
        return float(m.group())
    except ValueError:
        return 0.0


def parse_quantity(raw: str) -> float:
    """Quantity segment -> float. "1/2" -> 0.5, "1 1/2" -> 1.5, "½" -> 0.5, "1,000" -> 1000."""
    s = (raw or "").replace(",", "").strip()
    if not s:
        return 0.0

    frac = _FRACTION_RE.search(s)
    if frac:
        num = float(frac.group(1)) or 0.0
        den = float(frac.group(2)) or 1.0
        whole = _WHOLE_BEFORE_FRACTION_RE.match(s)
        return (float(whole.group(1)) if whole else 0.0) + num / den

    for ch, val in _VULGAR.items():
        if ch in s:
            whole = _WHOLE_BEFORE_VULGAR_RE.search(s)
            return (float(whole.group(1)) if whole else 0.0) + val

    return _leading_float(s)


def match_amount_unit(line: str) -> Optional[re.Match]:
    return AMOUNT_UNIT_RE.match((line or "").strip())


def parse_ingredient_line(line: str) -> Dict[str, Union[str, float]]:
    t = (line or "").strip()
    m = AMOUNT_UNIT_RE.match(t)
    if not m:
        return {"name": t or "Ingredient", "amount": 0.0, "unit": "unit"}

    amount = parse_quantity(m.group(1))
    unit = (m.group(2) or "").strip() or "unit"
    name = (m.group(3) or "").strip() or "Ingredient"
    return {"name": name, "amount": amount, "unit": unit}


def ingredient_from_line(line: str) -> Ingredient:
    """Parse a raw line and attach table nutrition."""
    parsed = parse_ingredient_line(line)
    return enrich_ingredient(parsed["name"], parsed["amount"], parsed["unit"])
