# flake8: noqa
import sys
from pathlib import Path

# Ensure project root is on sys.path so `mealrank` and `runner` import when tests are run
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))  # noqa: E402

import json

import pytest
import requests
from bs4 import BeautifulSoup

from mealrank import scraper_recipe
from mealrank.datasets import PageDocument


PANCAKES_LD = {
    "@context": "https://schema.org",
    "@type": "Recipe",
    "name": "Pancakes",
    "recipeIngredient": ["1 cup milk"],
}

NAV_MENU_HTML = """
<html><body>
<main>
  <h1>Our Kitchen</h1>
  <ul>
    <li>7 Ingredients or Less</li>
    <li>Sign up for our newsletter</li>
    <li>View shopping list</li>
  </ul>
</main>
</body></html>
"""


def page_from_html(html: str, url: str = "https://example.com/recipe") -> PageDocument:
    return PageDocument(url=url, html=html, soup=BeautifulSoup(html, "html.parser"))


def ld_json_page(*blocks) -> str:
    scripts = "\n".join(
        f'<script type="application/ld+json">{b if isinstance(b, str) else json.dumps(b)}</script>'
        for b in blocks
    )
    return f"<html><head>{scripts}</head><body><p>hello</p></body></html>"


def make_response(body: str, status: int = 200, reason: str = "OK",
                  content_type: str = "text/html; charset=utf-8", url: str = "https://example.com/recipe"):
    resp = requests.Response()
    resp.status_code = status
    resp.reason = reason
    resp.url = url
    resp.headers["Content-Type"] = content_type
    resp._content = body.encode("utf-8")
    # body is already in memory, so iter_content() slices it instead of reading resp.raw
    resp._content_consumed = True
    if "charset=" in content_type:
        resp.encoding = content_type.split("charset=")[-1]
    return resp


@pytest.fixture
def page():
    return page_from_html


@pytest.fixture
def pancakes_html():
    return ld_json_page(PANCAKES_LD)


@pytest.fixture
def nav_menu_html():
    return NAV_MENU_HTML


@pytest.fixture
def fake_get(monkeypatch):
    """
    Replace requests.get inside scraper_recipe.
    Call with either a response, or an exception instance to raise.
    The recorded calls are available as fake_get.calls.
    """
    class _Fake:
        def __init__(self):
            self.calls = []
            self.outcome = None

        def __call__(self, outcome):
            self.outcome = outcome
            return self

        def get(self, url, **kwargs):
            self.calls.append((url, kwargs))
            if isinstance(self.outcome, Exception):
                raise self.outcome
            return self.outcome

    fake = _Fake()
    monkeypatch.setattr(scraper_recipe.requests, "get", fake.get)
    return fake
