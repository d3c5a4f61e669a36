# user_interface.py
import re
from typing import Any, Dict

from mealrank.exceptions import RecipeParseError
from mealrank.scraper_recipe import parse_recipe_from_url

URL_RE = re.compile(r"^https?://[^\s/?#]+\.[^\s/?#]+", re.I)
MAX_URL_LENGTH = 2048


def is_likely_recipe_url(user_input: str) -> bool:
    if not user_input:
        return False
    s = user_input.strip()
    if len(s) > MAX_URL_LENGTH:
        return False
    if any(ch.isspace() for ch in s):
        return False
    return bool(URL_RE.match(s))


def handle_recipe_url(user_input: str) -> Dict[str, Any]:
    url = (user_input or "").strip()
    if not is_likely_recipe_url(url):
        return {
            "ok": False,
            "status": 400,
            "message": "Please paste a full recipe link starting with http:// or https://.",
            "examples": ["https://www.allrecipes.com/recipe/21014/good-old-fashioned-pancakes/"],
        }

    try:
        recipe = parse_recipe_from_url(url)
    except RecipeParseError as e:
        return {"ok": False, "status": 400, "message": e.message}

    return {"ok": True, "recipe": recipe.to_dict()}


if __name__ == "__main__":
    while True:
        try:
            user_in = input("Paste a recipe URL (Enter q to exit): ").strip()
        except EOFError:
            break
        if user_in.lower() in {"q", "quit", "exit"}:
            break

        result = handle_recipe_url(user_in)
        if not result["ok"]:
            print("⚠️", result["message"])
            if "examples" in result:
                print("examples:", " / ".join(result["examples"]))
            print("-" * 60)
            continue

        r = result["recipe"]
        print(f"Title: {r.get('name', '(untitled)')}")
        print(f"Servings: {r.get('servings', '?')}")
        nutrition = r.get("nutrition") or {}
        if nutrition.get("calories") is not None:
            print(f"Calories: {nutrition['calories']} kcal")
        for img in r.get("images", [])[:1]:
            print(f"Image: {img}")
        print("Ingredients:")
        for it in r.get("ingredients", []):
            amt = f"{it['amount']:g} {it['unit']}" if it["amount"] else it["unit"]
            print(f"  - {it['name']}  [{amt}]  {it['calories']} kcal, "
                  f"P {it['protein']}g / C {it['carbs']}g / F {it['fat']}g")
        if r.get("instructions"):
            print("Instructions:")
            print(r["instructions"])
        print("=" * 60)
