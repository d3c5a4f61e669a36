"""
===============================================================================
datasets.py — Core data models (ParsedRecipe, Ingredient, Nutrition)
===============================================================================

-------------------------------------------------------------------------------
Purpose:
    Defines the dataclasses shared by the recipe import engine:
        • Ingredient     — one parsed ingredient line with estimated macros
        • Nutrition      — recipe-level macro totals as published by the site
        • ParsedRecipe   — everything recovered from one recipe page
        • NutritionDbRow — one row of the static nutrition reference table
        • PageDocument   — a fetched page, parsed once and shared by strategies

Design Principles:
    • Every ParsedRecipe field is optional; partial results are valid.
    • Strategies only fill gaps, so "empty" has one meaning per field
      (None, or an empty list / string).
    • No third-party imports here, so every other module can depend on it.

-------------------------------------------------------------------------------
Fields:
    Ingredient:
        - name (str): ingredient name without quantity/unit
        - amount (float): >= 0, 0 when the quantity could not be read
        - unit (str): unit token as written, "unit" when there was none
        - calories / protein / carbs / fat (int): rounded estimates, 0 if unknown

    ParsedRecipe:
        - name (str | None): trimmed, at most 200 chars
        - ingredients (List[Ingredient] | None)
        - servings (int | None): >= 1
        - instructions (str | None): "Step 1: ...\\n\\nStep 2: ..."
        - images (List[str] | None): absolute http(s) URLs
        - nutrition (Nutrition | None)

-------------------------------------------------------------------------------
Notes:
    • to_dict() drops absent fields so the JSON matches what callers pre-fill.

===============================================================================
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass
class Ingredient:
    name: str
    amount: float = 0.0
    unit: str = "unit"
    calories: int = 0
    protein: int = 0
    carbs: int = 0
    fat: int = 0

    def to_dict(self) -> Dict:
        return {
            "name": self.name,
            "amount": self.amount,
            "unit": self.unit,
            "calories": self.calories,
            "protein": self.protein,
            "carbs": self.carbs,
            "fat": self.fat,
        }


@dataclass
class Nutrition:
    calories: Optional[int] = None
    protein: Optional[int] = None
    carbs: Optional[int] = None
    fat: Optional[int] = None

    def is_empty(self) -> bool:
        return all(v is None for v in (self.calories, self.protein, self.carbs, self.fat))

    def to_dict(self) -> Dict:
        out = {
            "calories": self.calories,
            "protein": self.protein,
            "carbs": self.carbs,
            "fat": self.fat,
        }
        return {k: v for k, v in out.items() if v is not None}


@dataclass
class ParsedRecipe:
    """
    Result of one extraction call.
    - A field counts as missing when it is None or empty; merge_missing() in
      scraper_recipe only ever writes into missing fields.
    """
    name: Optional[str] = None
    ingredients: Optional[List[Ingredient]] = None
    servings: Optional[int] = None
    instructions: Optional[str] = None
    images: Optional[List[str]] = None
    nutrition: Optional[Nutrition] = None

    def has_content(self) -> bool:
        return bool(self.name or self.ingredients or self.instructions)

    def to_dict(self) -> Dict:
        out: Dict[str, Any] = {}
        if self.name:
            out["name"] = self.name
        if self.ingredients:
            out["ingredients"] = [i.to_dict() for i in self.ingredients]
        if self.servings is not None:
            out["servings"] = self.servings
        if self.instructions:
            out["instructions"] = self.instructions
        if self.images:
            out["images"] = list(self.images)
        if self.nutrition is not None and not self.nutrition.is_empty():
            out["nutrition"] = self.nutrition.to_dict()
        return out


@dataclass(frozen=True)
class NutritionDbRow:
    """
    Static reference row. Macros are per ONE base unit
    (cup | tbsp | tsp | egg | clove | unit).
    """
    keys: Tuple[str, ...]
    unit: str
    cal: float
    protein: float
    carbs: float
    fat: float


@dataclass
class PageDocument:
    """A fetched page: raw markup for text scans plus the parsed tree."""
    url: str
    html: str
    soup: Any = field(repr=False, default=None)
