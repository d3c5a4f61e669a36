"""
===============================================================================
structured_data.py — Recipe extraction from machine-readable page data
===============================================================================

-------------------------------------------------------------------------------
Purpose:
    Most recipe sites publish the recipe a second time for search engines or
    for their own front-end framework. This module finds that copy and maps
    it onto a ParsedRecipe.

    Strategies (each: PageDocument -> ParsedRecipe, empty when nothing found):
        • extract_linked_data  — <script type="application/ld+json"> blocks
        • extract_client_state — hydration globals (__INITIAL_STATE__, ...)
        • extract_microdata    — itemtype="schema.org/Recipe" attributes

    All three converge on recipe_from_record(), which maps a recipe-shaped
    dict (schema.org vocabulary, plus the "title"/"ingredients" variants some
    front-ends use) onto the data model.

-------------------------------------------------------------------------------
Notes:
    • Strategies may raise on hostile markup; the orchestrator catches it.
    • Client-state search is depth-capped (config.MAX_STATE_DEPTH) and only
      descends into an allowlist of keys.

===============================================================================
"""
from __future__ import annotations

import json
import re
from html import unescape
from typing import Any, Dict, List, Optional

from mealrank import config
from mealrank.config import debug_log
from mealrank.datasets import Nutrition, PageDocument, ParsedRecipe
from mealrank.ingredient_parser import ingredient_from_line
from mealrank.knowledgebase import NUTRITION_ALIASES, STATE_CONTAINER_KEYS, STATE_VARIABLES

_HTTP_RE = re.compile(r"^https?://", re.I)


# ================== Small helpers ==================
def clean_text(value: Any) -> str:
    if not isinstance(value, str):
        return ""
    return re.sub(r"\s+", " ", unescape(value)).strip()


def cap_name(value: str) -> str:
    return value.strip()[: config.MAX_NAME_LENGTH]


def normalize_image_url(url: Any) -> Optional[str]:
    if not isinstance(url, str):
        return None
    u = url.strip()
    if u.startswith("//"):
        u = "https:" + u
    return u if _HTTP_RE.match(u) else None


def format_steps(steps: List[str]) -> Optional[str]:
    if not steps:
        return None
    return "\n\n".join(f"Step {i}: {s}" for i, s in enumerate(steps, 1))


def _unique(seq):
    seen = set(); out = []
    for x in seq:
        if x not in seen:
            seen.add(x); out.append(x)
    return out


def is_recipe_type(type_value: Any) -> bool:
    """"Recipe", "http://schema.org/Recipe" or a list containing either."""
    if isinstance(type_value, str):
        return type_value.strip().split("/")[-1].lower() == "recipe"
    if isinstance(type_value, list):
        return any(is_recipe_type(t) for t in type_value)
    return False


def _type_names(node: dict) -> List[str]:
    t = node.get("@type")
    values = t if isinstance(t, list) else [t]
    return [v.split("/")[-1].lower() for v in values if isinstance(v, str)]


def extract_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return max(0.0, float(value)) if value == value else None
    if not isinstance(value, str):
        return None
    m = re.search(r"[\d.,]+", value)
    if not m:
        return None
    num = re.match(r"\d*\.?\d+", m.group().replace(",", ""))
    return max(0.0, float(num.group())) if num else None


def _round(x: float) -> int:
    return int(x + 0.5)


# ================== Field mapping ==================
def _lift_value(x: Any) -> Any:
    if isinstance(x, dict) and "value" in x:
        return x["value"]
    return x


def _first_present(obj: dict, keys) -> Any:
    for k in keys:
        if obj.get(k) is not None:
            return obj[k]
    return None


def parse_nutrition(obj: Dict[str, Any]) -> Optional[Nutrition]:
    out = Nutrition()
    for field_name, keys in NUTRITION_ALIASES.items():
        raw = _lift_value(_first_present(obj, keys))
        if isinstance(raw, str):
            if field_name == "calories":
                raw = re.sub(r"\s*calories?", "", raw, count=1, flags=re.I)
            else:
                raw = re.sub(r"\s*g(?:rams?)?", "", raw, flags=re.I)
        n = extract_number(raw)
        if n is not None:
            setattr(out, field_name, _round(n))
    return None if out.is_empty() else out


def collect_images(obj: Dict[str, Any]) -> List[str]:
    raw = obj.get("image")
    if raw is None:
        raw = obj.get("images")
    items = raw if isinstance(raw, list) else [raw]
    imgs: List[str] = []
    for x in items:
        if isinstance(x, dict):
            x = x.get("url")
        u = normalize_image_url(x)
        if u:
            imgs.append(u)
    return _unique(imgs)


def parse_servings(value: Any) -> Optional[int]:
    if isinstance(value, list):
        value = value[0] if value else None
    n = extract_number(value)
    if n is None or n < 1:
        return None
    return _round(n)


def step_text(node: Any, depth: int = 0) -> Optional[str]:
    if isinstance(node, str):
        return clean_text(node) or None
    if not isinstance(node, dict) or depth > config.MAX_STATE_DEPTH:
        return None
    t = clean_text(node.get("text")) or clean_text(node.get("name"))
    if t:
        return t
    if node.get("item"):
        s = step_text(node["item"], depth + 1)
        if s:
            return s
    lst = node.get("itemListElement")
    if not isinstance(lst, list) or not lst:
        return None
    bits = [s for s in (step_text(x, depth + 1) for x in lst) if s]
    return " ".join(bits) if bits else None


def flatten_instructions(raw: Any, depth: int = 0) -> List[str]:
    out: List[str] = []
    if depth > config.MAX_STATE_DEPTH:
        return out
    if isinstance(raw, str):
        t = unescape(raw).strip()
        if not t:
            return out
        by_newline = [clean_text(s) for s in re.split(r"\n+", t)]
        by_newline = [s for s in by_newline if s]
        if len(by_newline) > 1:
            return by_newline
        return [clean_text(t)]

    if isinstance(raw, list):
        nodes = raw
    elif isinstance(raw, dict):
        nodes = [raw]
    else:
        nodes = []

    for node in nodes:
        if isinstance(node, str):
            t = clean_text(node)
            if t:
                out.append(t)
            continue
        if not isinstance(node, dict):
            continue
        types = _type_names(node)
        if "itemlist" in types:
            out.extend(flatten_instructions(_first_present(node, ("itemListElement", "itemList")) or [], depth + 1))
            continue
        if "howtosection" in types:
            out.extend(flatten_instructions(_first_present(node, ("itemListElement", "step")) or [], depth + 1))
            continue
        s = step_text(node, depth + 1)
        if s:
            out.append(s)
    return out


def _ingredient_lines(raw: Any) -> List[str]:
    if isinstance(raw, str):
        raw = raw.splitlines()
    if not isinstance(raw, list):
        return []
    return [t for t in (clean_text(x) for x in raw) if t]


def recipe_from_record(record: Dict[str, Any]) -> ParsedRecipe:
    """Map a recipe-shaped dict onto ParsedRecipe; missing fields stay None."""
    result = ParsedRecipe()

    for key in ("name", "title"):
        n = clean_text(record.get(key))
        if n:
            result.name = cap_name(n)
            break

    lines = _ingredient_lines(record.get("recipeIngredient") or record.get("ingredients"))
    if lines:
        result.ingredients = [ingredient_from_line(s) for s in lines]

    if record.get("recipeYield") is not None:
        result.servings = parse_servings(record["recipeYield"])

    raw_steps = record.get("recipeInstructions")
    if raw_steps is None:
        raw_steps = record.get("instructions")
    result.instructions = format_steps(flatten_instructions(raw_steps))

    imgs = collect_images(record)
    if imgs:
        result.images = imgs

    nut = record.get("nutrition")
    if isinstance(nut, dict):
        result.nutrition = parse_nutrition(nut)
    return result


# ================== Strategy 1: JSON-LD ==================
def find_recipe_in_ld_json(parsed: Any) -> Optional[dict]:
    if isinstance(parsed, list):
        for item in parsed:
            r = find_recipe_in_ld_json(item)
            if r:
                return r
        return None
    if not isinstance(parsed, dict):
        return None
    if is_recipe_type(parsed.get("@type")):
        return parsed
    graph = parsed.get("@graph")
    if isinstance(graph, list):
        for item in graph:
            if isinstance(item, dict) and is_recipe_type(item.get("@type")):
                return item
    return None


def extract_linked_data(page: PageDocument) -> ParsedRecipe:
    blocks = page.soup.find_all("script", attrs={"type": "application/ld+json"})
    debug_log("structured_data", f"JSON-LD blocks found: {len(blocks)}")
    for tag in blocks:
        text = (tag.string or tag.get_text() or "").strip()
        if not text:
            continue
        try:
            data = json.loads(text)
        except (ValueError, RecursionError):
            continue
        recipe = find_recipe_in_ld_json(data)
        if recipe:
            debug_log("structured_data", "Using recipe from JSON-LD")
            return recipe_from_record(recipe)
    return ParsedRecipe()


# ================== Strategy 2: client-state blobs ==================
def extract_json_from_script_var(html: str, var_name: str) -> Any:
    """
    Find `[window.|self.]<var_name> = {` (or `[`) and decode the balanced
    literal that follows. Returns None when absent or not valid JSON.
    """
    pattern = r"(?:window\.|self\.)?" + re.escape(var_name) + r"\s*=\s*(\{|\[)"
    m = re.search(pattern, html, flags=re.I)
    if not m:
        return None
    start = m.start(1)
    depth = 0
    in_string = False
    escape = False
    for i in range(start, len(html)):
        c = html[i]
        if escape:
            escape = False
            continue
        if in_string:
            if c == "\\":
                escape = True
            elif c == '"':
                in_string = False
            continue
        if c == '"':
            in_string = True
        elif c in "{[":
            depth += 1
        elif c in "}]":
            depth -= 1
            if depth == 0:
                try:
                    return json.loads(html[start:i + 1])
                except (ValueError, RecursionError):
                    return None
    return None


def looks_like_recipe(o: dict) -> bool:
    name = o.get("name") or o.get("title")
    ing = o.get("recipeIngredient") or o.get("ingredients")
    return isinstance(name, str) and bool(name.strip()) and isinstance(ing, list) and len(ing) > 0


def _search_state_value(value: Any, depth: int) -> Optional[dict]:
    if isinstance(value, list):
        for item in value:
            r = find_recipe_in_state(item, depth + 1)
            if r:
                return r
        return None
    return find_recipe_in_state(value, depth + 1)


def find_recipe_in_state(obj: Any, depth: int = 0) -> Optional[dict]:
    if not isinstance(obj, dict) or depth > config.MAX_STATE_DEPTH:
        return None
    if is_recipe_type(obj.get("@type")) or looks_like_recipe(obj):
        return obj
    for k in STATE_CONTAINER_KEYS:
        r = _search_state_value(obj.get(k), depth)
        if r:
            return r
    for k in ("recipes", "@graph"):
        if isinstance(obj.get(k), list):
            r = _search_state_value(obj[k], depth)
            if r:
                return r
    return None


def _state_payloads(page: PageDocument):
    for var in STATE_VARIABLES:
        yield var, extract_json_from_script_var(page.html, var)
    # Next.js ships its state as a JSON script rather than an assignment
    tag = page.soup.find("script", id="__NEXT_DATA__")
    if tag is not None:
        try:
            yield "__NEXT_DATA__ script", json.loads(tag.string or tag.get_text() or "")
        except (ValueError, RecursionError):
            pass


def extract_client_state(page: PageDocument) -> ParsedRecipe:
    for source, payload in _state_payloads(page):
        recipe = find_recipe_in_state(payload)
        if recipe:
            debug_log("structured_data", f"Found recipe-like data in {source}")
            return recipe_from_record(recipe)
    return ParsedRecipe()


# ================== Strategy 3: microdata ==================
def _element_text(el) -> str:
    return re.sub(r"\s+", " ", el.get_text(" ", True)).strip()


def _microdata_nutrition(scope) -> Optional[dict]:
    node = scope.select_one('[itemprop="nutrition"]')
    if node is None:
        return None
    out = {}
    for keys in NUTRITION_ALIASES.values():
        for k in keys:
            el = node.select_one(f'[itemprop="{k}"]')
            if el is not None:
                out[k] = el.get("content") or _element_text(el)
                break
    return out or None


def extract_microdata(page: PageDocument) -> ParsedRecipe:
    scope = page.soup.select_one('[itemtype*="schema.org/Recipe"]')
    if scope is None:
        return ParsedRecipe()
    name_el = scope.select_one('[itemprop="name"]')
    name = _element_text(name_el) if name_el is not None else ""
    if not name:
        return ParsedRecipe()

    ingredients = [t for t in (_element_text(el) for el in
                               scope.select('[itemprop="recipeIngredient"], [itemprop="ingredients"]')) if t]
    instructions = [t for t in (_element_text(el) for el in scope.select('[itemprop="recipeInstructions"]')) if t]

    record: Dict[str, Any] = {"name": name, "recipeIngredient": ingredients}
    if instructions:
        record["recipeInstructions"] = instructions

    img_el = scope.select_one('[itemprop="image"]')
    if img_el is not None:
        nested = img_el.find("img")
        img = img_el.get("content") or img_el.get("src") or (nested.get("src") if nested is not None else None)
        if img:
            record["image"] = img

    yield_el = scope.select_one('[itemprop="recipeYield"]')
    if yield_el is not None:
        y = yield_el.get("content") or _element_text(yield_el)
        if y:
            record["recipeYield"] = y

    nut = _microdata_nutrition(scope)
    if nut:
        record["nutrition"] = nut

    debug_log("structured_data", "Using recipe from microdata")
    return recipe_from_record(record)
