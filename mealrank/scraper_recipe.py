"""
===============================================================================
scraper_recipe.py — Recipe import from an arbitrary recipe URL
===============================================================================

-------------------------------------------------------------------------------
Purpose:
    Fetches one recipe page and recovers a structured ParsedRecipe from it.

    Key responsibilities:
        • Fetch the page once (fixed User-Agent, HTML Accept header, hard deadline)
        • Classify fetch failures into user-facing errors
        • Run the structured-data strategies in priority order
        • Fall back to HTML heuristics when name or ingredients are missing
        • Merge partial results: first writer wins per field
        • Enrich with Open Graph image/title

-------------------------------------------------------------------------------
Inputs / Outputs:
    Input  → recipe page URL (or already-fetched HTML for parse_recipe_html)
    Output → ParsedRecipe; raises a RecipeParseError subclass otherwise

-------------------------------------------------------------------------------
Dependencies:
    - requests, charset-normalizer, BeautifulSoup4 (+ lxml tree builder)
    - Internal modules: structured_data, html_fallback, exceptions, config

-------------------------------------------------------------------------------
Notes:
    • No retries; the caller owns retry policy.
    • A strategy that raises contributes nothing; only fetch errors and
      NoRecipeFoundError reach the caller.
    • No state is shared between calls, so concurrent calls are independent.

===============================================================================
"""
from __future__ import annotations

import time
from typing import Callable, List, Optional, Tuple

import charset_normalizer
import requests
from bs4 import BeautifulSoup

from mealrank import config
from mealrank.config import debug_log
from mealrank.datasets import PageDocument, ParsedRecipe
from mealrank.exceptions import FetchConnectionError, FetchTimeoutError, HttpStatusError, NoRecipeFoundError
from mealrank.html_fallback import extract_from_html, og_image, og_title
from mealrank.structured_data import extract_client_state, extract_linked_data, extract_microdata

HEADERS = {
    "User-Agent": config.USER_AGENT,
    "Accept": config.ACCEPT_HEADER,
}

Strategy = Callable[[PageDocument], ParsedRecipe]

# priority order; earlier strategies win every field they fill
STRATEGIES: Tuple[Tuple[str, Strategy], ...] = (
    ("JSON-LD", extract_linked_data),
    ("initial-state", extract_client_state),
    ("microdata", extract_microdata),
)

FIELDS = ("name", "ingredients", "servings", "instructions", "images", "nutrition")


# ================== HTTP ==================
CHUNK_SIZE = 1024


def decode_body(body: bytes, headers) -> str:
    """Declared charset first; otherwise the detected one (requests would assume ISO-8859-1)."""
    encoding = None
    if "charset" in headers.get("Content-Type", "").lower():
        encoding = requests.utils.get_encoding_from_headers(headers)
    if not encoding:
        best = charset_normalizer.from_bytes(body).best()
        encoding = best.encoding if best is not None else "utf-8"
    try:
        return body.decode(encoding, errors="replace")
    except LookupError:
        return body.decode("utf-8", errors="replace")


def fetch_html(url: str, timeout: Optional[float] = None) -> str:
    limit = config.FETCH_TIMEOUT if timeout is None else timeout
    # whole-download budget; requests' own timeout only bounds connect and each read
    deadline = time.monotonic() + limit
    try:
        with requests.get(url, headers=HEADERS, timeout=limit, allow_redirects=True, stream=True) as resp:
            if not 200 <= resp.status_code < 300:
                raise HttpStatusError(resp.status_code, resp.reason or "")
            chunks: List[bytes] = []
            for chunk in resp.iter_content(chunk_size=CHUNK_SIZE):
                if time.monotonic() > deadline:
                    raise FetchTimeoutError()
                chunks.append(chunk)
            if time.monotonic() > deadline:
                raise FetchTimeoutError()
            headers = resp.headers
    except requests.exceptions.Timeout:
        raise FetchTimeoutError() from None
    except requests.exceptions.ConnectionError:
        # a read timeout while streaming surfaces as ConnectionError
        if time.monotonic() >= deadline:
            raise FetchTimeoutError() from None
        raise FetchConnectionError() from None
    except requests.exceptions.RequestException as e:
        raise FetchConnectionError(str(e)) from None

    html = decode_body(b"".join(chunks), headers)
    debug_log("scraper_recipe", f"Fetched HTML: {len(html)} bytes from {url}")
    return html


# ================== Merge ==================
def _is_missing(value) -> bool:
    if value is None:
        return True
    if isinstance(value, (str, list)):
        return not value
    if hasattr(value, "is_empty"):
        return value.is_empty()
    return False


def merge_missing(result: ParsedRecipe, partial: ParsedRecipe) -> List[str]:
    """Copy fields from partial into result where result has none. Returns the filled field names."""
    filled = []
    for f in FIELDS:
        if _is_missing(getattr(result, f)) and not _is_missing(getattr(partial, f)):
            setattr(result, f, getattr(partial, f))
            filled.append(f)
    return filled


def _run_strategy(name: str, strategy: Strategy, page: PageDocument) -> ParsedRecipe:
    try:
        return strategy(page)
    except Exception as e:
        print(f"[scraper_recipe][WARN] {name} failed: {e}")
        return ParsedRecipe()


def apply_open_graph(result: ParsedRecipe, soup) -> None:
    img = og_image(soup)
    if img:
        images = [u for u in (result.images or []) if u != img]
        result.images = [img] + images
    title = og_title(soup)
    if title and not result.name:
        result.name = title


# ================== Page parsing ==================
def parse_recipe_html(html: str, url: str = "") -> ParsedRecipe:
    """Run every extraction step over already-fetched HTML."""
    page = PageDocument(url=url, html=html, soup=BeautifulSoup(html, config.HTML_PARSER))
    result = ParsedRecipe()

    for name, strategy in STRATEGIES:
        filled = merge_missing(result, _run_strategy(name, strategy, page))
        if filled:
            debug_log("scraper_recipe", f"Using {', '.join(filled)} from {name}")

    if not result.name or not result.ingredients:
        filled = merge_missing(result, _run_strategy("HTML fallback", extract_from_html, page))
        if filled:
            debug_log("scraper_recipe", f"Using {', '.join(filled)} from HTML fallback")

    try:
        apply_open_graph(result, page.soup)
    except Exception as e:
        print(f"[scraper_recipe][WARN] Open Graph enrichment failed: {e}")

    if not result.has_content():
        raise NoRecipeFoundError()
    return result


def parse_recipe_from_url(url: str) -> ParsedRecipe:
    html = fetch_html(url)
    return parse_recipe_html(html, url)
