"""
Last-resort extraction from plain page structure.

Used only when structured data left the name or the ingredients empty.
Everything is scoped to recipe-looking containers first and to
main/article second, and scraped ingredient blocks must pass the
plausibility filter as a whole or are dropped entirely.
"""
from __future__ import annotations

import re
from typing import List, Optional

from mealrank.config import debug_log
from mealrank.content_filter import is_plausible_ingredient, is_plausible_ingredient_list
from mealrank.datasets import PageDocument, ParsedRecipe
from mealrank.ingredient_parser import ingredient_from_line
from mealrank.knowledgebase import (
    CONTENT_REGIONS,
    FALLBACK_LIST_ITEMS,
    IMAGE_CONTAINER_SELECTOR,
    INGREDIENT_SCOPES,
    INSTRUCTION_SCOPES,
    MIN_INSTRUCTION_LENGTH,
    SCOPED_TITLE_SELECTOR,
    TITLE_SELECTORS,
)
from mealrank.structured_data import cap_name, format_steps, normalize_image_url

SERVINGS_RE = re.compile(r"(?:yield|servings?|makes)\s*:?\s*(?:about\s+)?(\d+)", re.I)


def _text(el) -> str:
    return re.sub(r"\s+", " ", el.get_text(" ", True)).strip()


def _in_content_region(el) -> bool:
    return el.find_parent(CONTENT_REGIONS) is not None or el.find_parent(attrs={"role": "main"}) is not None


# ================== Open Graph ==================
def og_image(soup) -> Optional[str]:
    meta = soup.select_one('meta[property="og:image"]')
    return normalize_image_url(meta.get("content")) if meta is not None else None


def og_title(soup) -> Optional[str]:
    meta = soup.select_one('meta[property="og:title"]')
    if meta is None:
        return None
    t = (meta.get("content") or "").strip()
    return cap_name(t) if t else None


# ================== Fields ==================
def find_title(soup) -> Optional[str]:
    for sel in TITLE_SELECTORS:
        el = soup.select_one(sel)
        if el is not None and _text(el):
            return cap_name(_text(el))
    for el in soup.select(SCOPED_TITLE_SELECTOR):
        if _in_content_region(el) and _text(el):
            return cap_name(_text(el))
    return None


def collect_scoped_ingredients(soup) -> List[str]:
    raw: List[str] = []
    for scope in INGREDIENT_SCOPES:
        container = soup.select_one(scope)
        if container is None:
            continue
        raw.extend(t for t in (_text(li) for li in container.select("li")) if t)
        if raw:
            break
    if not raw:
        raw = [t for t in (_text(li) for li in soup.select(FALLBACK_LIST_ITEMS)) if t]

    filtered = [s for s in raw if is_plausible_ingredient(s)]
    if not is_plausible_ingredient_list(filtered or raw):
        debug_log("html_fallback",
                  "ingredient validation failed (nav/sidebar or too few real ingredients)",
                  {"rawCount": len(raw), "filteredCount": len(filtered)})
        return []
    return filtered


def collect_scoped_instructions(soup) -> List[str]:
    for tag in ("li", "p"):
        for scope in INSTRUCTION_SCOPES:
            container = soup.select_one(scope)
            if container is None:
                continue
            steps = [t for t in (_text(el) for el in container.select(tag)) if len(t) > MIN_INSTRUCTION_LENGTH]
            if steps:
                return steps
    return []


def find_image(soup) -> Optional[str]:
    img = og_image(soup)
    if img:
        return img
    el = soup.select_one(IMAGE_CONTAINER_SELECTOR)
    return normalize_image_url(el.get("src")) if el is not None else None


def find_servings(soup) -> Optional[int]:
    m = SERVINGS_RE.search((soup.body or soup).get_text(" "))
    if not m:
        return None
    n = int(m.group(1))
    return n if n >= 1 else None


def extract_from_html(page: PageDocument) -> ParsedRecipe:
    soup = page.soup
    out = ParsedRecipe()
    out.name = find_title(soup)

    lines = collect_scoped_ingredients(soup)
    if lines:
        out.ingredients = [ingredient_from_line(s) for s in lines]

    out.instructions = format_steps(collect_scoped_instructions(soup))

    img = find_image(soup)
    if img:
        out.images = [img]

    out.servings = find_servings(soup)
    return out
