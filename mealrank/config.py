"""
Runtime settings for the recipe import engine.

Values come from the environment (a local .env file is merged first via
python-dotenv). Everything here is read once at import time.
"""
from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()

USER_AGENT = os.getenv(
    "RECIPE_USER_AGENT",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
)
ACCEPT_HEADER = "text/html,application/xhtml+xml"
FETCH_TIMEOUT = float(os.getenv("RECIPE_FETCH_TIMEOUT", "15"))

# lxml is faster; "html.parser" works without the C extension
HTML_PARSER = os.getenv("RECIPE_HTML_PARSER", "lxml")

RESULTS_DIR = os.getenv("RECIPE_RESULTS_DIR", "data")

MAX_NAME_LENGTH = 200
MAX_STATE_DEPTH = 12

DEBUG = os.getenv("RECIPE_PARSER_DEBUG", "").strip().lower() in {"1", "true", "yes", "on"}


def debug_log(tag: str, *args) -> None:
    if DEBUG:
        print(f"[{tag}]", *args)
