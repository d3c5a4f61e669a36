"""
End-to-end import of one recipe page:
1) fetch and parse the page (scraper_recipe.parse_recipe_from_url)
2) every ingredient already carries its estimated macros (nutrition.enrich_ingredient)
3) add per-recipe ingredient totals
4) save to <RECIPE_RESULTS_DIR>/recipe_<slug>.json

Run:
  python runner.py "https://www.example.com/recipes/pancakes"
"""
from __future__ import annotations
import json
import os
import re
import sys
from typing import Dict
from urllib.parse import urlparse

from mealrank import config
from mealrank.datasets import ParsedRecipe
from mealrank.exceptions import RecipeParseError
from mealrank.scraper_recipe import parse_recipe_from_url

MACROS = ("calories", "protein", "carbs", "fat")


def url_slug(url: str) -> str:
    p = urlparse(url)
    raw = f"{p.netloc}{p.path}".strip("/").lower()
    slug = re.sub(r"[^a-z0-9]+", "_", raw).strip("_")
    return slug[:80] or "recipe"


def ingredient_totals(recipe: ParsedRecipe) -> Dict[str, int]:
    totals = {k: 0 for k in MACROS}
    for ing in recipe.ingredients or []:
        for k in MACROS:
            totals[k] += getattr(ing, k)
    return totals


def build_result(url: str, recipe: ParsedRecipe) -> Dict:
    totals = ingredient_totals(recipe)
    servings = recipe.servings or 1
    for ing in recipe.ingredients or []:
        print(f"[runner] {ing.name} -> amount={ing.amount:g} {ing.unit}, kcal={ing.calories}")
    return {
        "url": url,
        "recipe": recipe.to_dict(),
        "ingredient_totals": totals,
        "per_serving_kcal": round(totals["calories"] / servings, 1),
    }


def run_once(url: str) -> str:
    recipe = parse_recipe_from_url(url)
    result = build_result(url, recipe)

    os.makedirs(config.RESULTS_DIR, exist_ok=True)
    out_path = os.path.join(config.RESULTS_DIR, f"recipe_{url_slug(url)}.json")

    with open(out_path, "w", encoding="utf-8") as f:
        json.dump(result, f, ensure_ascii=False, indent=2)

    print(f"[runner] saved {out_path}")
    return out_path


def main(argv=None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if not args:
        print("usage: python runner.py <recipe-url>")
        return 2
    try:
        path = run_once(args[0])
    except RecipeParseError as e:
        print(f"[runner][ERROR] {e.message}")
        return 1
    print(f"[OK] Results saved to: {path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
