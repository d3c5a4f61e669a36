"""
Plausibility checks for scraped ingredient text.

HTML fallback scraping often picks up sidebars ("7 Ingredients or Less",
"Sign up for our newsletter"). A line must look like a quantity + name to
count, and a whole block must be mostly such lines before it is trusted.
"""
from __future__ import annotations

from typing import Iterable

from mealrank.ingredient_parser import match_amount_unit
from mealrank.knowledgebase import CATEGORY_WORDS_PATTERN, LISTICLE_PATTERN, MAX_INGREDIENT_LENGTH, NAV_PHRASES


def is_plausible_ingredient(line: str) -> bool:
    t = (line or "").strip()
    if not t or len(t) > MAX_INGREDIENT_LENGTH:
        return False
    m = match_amount_unit(t)
    if not m:
        return False
    if LISTICLE_PATTERN.match(t):
        return False
    lower = t.lower()
    if any(p in lower for p in NAV_PHRASES):
        return False
    name = (m.group(3) or "").strip()
    if len(name) < 2:
        return False
    if CATEGORY_WORDS_PATTERN.match(name):
        return False
    return True


def is_plausible_ingredient_list(lines: Iterable[str]) -> bool:
    trimmed = [s.strip() for s in lines if s and s.strip()]
    if len(trimmed) < 2:
        return False
    valid = [s for s in trimmed if is_plausible_ingredient(s)]
    if len(valid) < 2:
        return False
    return len(trimmed) - len(valid) <= len(valid)
