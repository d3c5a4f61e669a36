# nutrition.py
"""
Static nutrition lookup for parsed ingredients.
- Input: ingredient name (may be noisy), amount, unit as written.
- Output: {"calories", "protein", "carbs", "fat"} as rounded ints, or None.
- Matching is whole-word alias matching against knowledgebase.NUTRITION_DB,
  first row wins. No network, no cache: the table is read-only.
"""
from __future__ import annotations

import re
from typing import Dict, Optional

from mealrank.datasets import Ingredient, NutritionDbRow
from mealrank.knowledgebase import NUTRITION_DB
from mealrank.units import to_cloves, to_cups, to_eggs, to_tbsp, to_tsp


def normalize_name(s: str) -> str:
    n = re.sub(r"\s+", " ", (s or "").lower()).strip()
    return n[:-1] if n.endswith("s") else n


def _word_match(a: str, b: str) -> bool:
    """a equals b, or b appears in a as whole words (prefix, suffix or inside)."""
    if a == b:
        return True
    return a.startswith(b + " ") or a.endswith(" " + b) or (" " + b + " ") in a


def _row_matches(row: NutritionDbRow, norm: str) -> bool:
    for key in row.keys:
        k = normalize_name(key)
        if _word_match(norm, k) or _word_match(k, norm):
            return True
    return False


def _scale_factor(row: NutritionDbRow, amount: float, unit: str) -> float:
    if row.unit == "cup":
        factor = to_cups(amount, unit)
        if factor <= 0 and (unit == "unit" or not unit):
            # "2 apples": a bare count scales the per-cup row directly
            factor = amount
        return factor
    if row.unit == "tbsp":
        return to_tbsp(amount, unit) or to_cups(amount, unit) * 16
    if row.unit == "tsp":
        return to_tsp(amount, unit) or to_tbsp(amount, unit) * 3 or to_cups(amount, unit) * 48
    if row.unit == "egg":
        return to_eggs(amount, unit)
    if row.unit == "clove":
        return to_cloves(amount, unit)
    if row.unit == "unit":
        return amount if amount > 0 else 1
    return 0


def _round(x: float) -> int:
    # half-up; inputs are never negative
    return int(x + 0.5)


def lookup_nutrition(name: str, amount: float, unit: str) -> Optional[Dict[str, int]]:
    norm = normalize_name(name)
    if not norm:
        return None

    for row in NUTRITION_DB:
        if not _row_matches(row, norm):
            continue
        factor = _scale_factor(row, amount, unit)
        if factor <= 0:
            continue
        return {
            "calories": _round(row.cal * factor),
            "protein": _round(row.protein * factor),
            "carbs": _round(row.carbs * factor),
            "fat": _round(row.fat * factor),
        }
    return None


def enrich_ingredient(name: str, amount: float, unit: str) -> Ingredient:
    """Build an Ingredient with macros filled from the table (0 when unknown)."""
    nut = lookup_nutrition(name, amount, unit) or {}
    return Ingredient(
        name=name,
        amount=amount,
        unit=unit,
        calories=nut.get("calories", 0),
        protein=nut.get("protein", 0),
        carbs=nut.get("carbs", 0),
        fat=nut.get("fat", 0),
    )


if __name__ == "__main__":
    # Self-test for nutrition.py
    tests = [
        ("flour", 2, "cups"),
        ("salt", 0.5, "tsp"),
        ("large eggs", 3, "unit"),
        ("olive oil", 2, "tbsp"),
        ("mystery thing", 1, "cup"),
    ]
    print("[NUTRITION OK] static lookup")
    for n, a, u in tests:
        print(f"  IN: {a:g} {u:5s} {n:15s} -> OUT: {lookup_nutrition(n, a, u)}")
