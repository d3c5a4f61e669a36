import json

from mealrank.structured_data import (
    extract_client_state,
    extract_json_from_script_var,
    extract_linked_data,
    extract_microdata,
    find_recipe_in_state,
    flatten_instructions,
    parse_nutrition,
    parse_servings,
    recipe_from_record,
)


def _ld(*blocks):
    scripts = "".join(
        f'<script type="application/ld+json">{b if isinstance(b, str) else json.dumps(b)}</script>'
        for b in blocks
    )
    return f"<html><head>{scripts}</head><body></body></html>"


# ================== Field mapping ==================
def test_record_mapping_full():
    r = recipe_from_record({
        "name": "  Banana &amp; Oat   Bread ",
        "recipeIngredient": ["2 bananas", "1 cup rolled oats"],
        "recipeYield": ["8 slices", "1 loaf"],
        "recipeInstructions": [
            {"@type": "HowToStep", "text": "Mash the bananas."},
            {"@type": "HowToStep", "text": "Stir in the oats."},
        ],
        "image": [{"@type": "ImageObject", "url": "//cdn.example.com/a.jpg"}, "https://cdn.example.com/a.jpg"],
        "nutrition": {"calories": "240 calories", "proteinContent": "6 g", "fatContent": {"value": "3.5"}},
    })
    assert r.name == "Banana & Oat Bread"
    assert [i.name for i in r.ingredients] == ["bananas", "rolled oats"]
    assert r.ingredients[1].calories == 307
    assert r.servings == 8
    assert r.instructions == "Step 1: Mash the bananas.\n\nStep 2: Stir in the oats."
    assert r.images == ["https://cdn.example.com/a.jpg"]
    assert r.nutrition.calories == 240
    assert r.nutrition.protein == 6
    assert r.nutrition.fat == 4
    assert r.nutrition.carbs is None


def test_name_capped_at_200():
    r = recipe_from_record({"name": "a" * 300})
    assert len(r.name) == 200


def test_title_used_when_name_missing():
    assert recipe_from_record({"title": "Soup"}).name == "Soup"


def test_servings():
    assert parse_servings("Serves 4-6") == 4
    assert parse_servings(2.6) == 3
    assert parse_servings("0") is None
    assert parse_servings("a few") is None


def test_nutrition_all_absent_is_none():
    assert parse_nutrition({"servingSize": "1 slice"}) is None


def test_relative_image_dropped():
    assert recipe_from_record({"name": "x", "image": "/img/a.jpg"}).images is None


def test_instructions_plain_string_split_on_newlines():
    assert flatten_instructions("Mix.\n\nBake.") == ["Mix.", "Bake."]
    assert flatten_instructions("Mix and bake.") == ["Mix and bake."]


def test_instructions_sections_and_item_lists():
    raw = [
        {"@type": "HowToSection", "name": "Batter", "itemListElement": [
            {"@type": "HowToStep", "text": "Whisk eggs."},
            {"@type": "HowToStep", "name": "Add milk."},
        ]},
        {"@type": "ItemList", "itemListElement": ["Fry."]},
        {"@type": "HowToStep", "item": {"text": "Serve warm."}},
        42,
    ]
    assert flatten_instructions(raw) == ["Whisk eggs.", "Add milk.", "Fry.", "Serve warm."]


def test_instructions_depth_is_bounded():
    node = {"@type": "HowToStep", "text": "deep"}
    for _ in range(50):
        node = {"@type": "HowToSection", "itemListElement": [node]}
    assert flatten_instructions([node]) == []


# ================== JSON-LD ==================
def test_linked_data_pancakes(page):
    doc = page(_ld({"@type": "Recipe", "name": "Pancakes", "recipeIngredient": ["1 cup milk"]}))
    r = extract_linked_data(doc)
    assert r.name == "Pancakes"
    assert len(r.ingredients) == 1
    assert r.ingredients[0].name == "milk"
    assert r.ingredients[0].calories == 149


def test_linked_data_graph_and_type_variants(page):
    graph = {"@context": "https://schema.org", "@graph": [
        {"@type": "WebPage", "name": "Page"},
        {"@type": ["Recipe", "NewsArticle"], "name": "Stew"},
    ]}
    assert extract_linked_data(page(_ld(graph))).name == "Stew"
    top_list = [{"@type": "Organization"}, {"@type": "http://schema.org/Recipe", "name": "Salad"}]
    assert extract_linked_data(page(_ld(top_list))).name == "Salad"


def test_linked_data_skips_malformed_block(page):
    doc = page(_ld("{not json", {"@type": "Recipe", "name": "Toast"}))
    assert extract_linked_data(doc).name == "Toast"


def test_linked_data_skips_too_deeply_nested_block(page):
    deep = "[" * 100000 + "]" * 100000
    doc = page(_ld(deep, {"@type": "Recipe", "name": "Good", "recipeIngredient": ["1 egg"]}))
    r = extract_linked_data(doc)
    assert r.name == "Good"
    assert r.ingredients[0].name == "egg"


def test_linked_data_without_recipe_is_empty(page):
    r = extract_linked_data(page(_ld({"@type": "Article", "name": "News"})))
    assert not r.has_content()


# ================== Client state ==================
def test_script_var_brace_scan_handles_strings():
    html = '<script>window.__INITIAL_STATE__ = {"a": "}{\\"", "b": [1, {"c": 2}]};var x = 1;</script>'
    assert extract_json_from_script_var(html, "__INITIAL_STATE__") == {"a": '}{"', "b": [1, {"c": 2}]}


def test_script_var_missing_or_invalid():
    assert extract_json_from_script_var("<script>var y = 2;</script>", "__INITIAL_STATE__") is None
    assert extract_json_from_script_var("<script>__APOLLO_STATE__ = {bad: 1}</script>", "__APOLLO_STATE__") is None
    assert extract_json_from_script_var("<script>__APOLLO_STATE__ = {\"a\": 1", "__APOLLO_STATE__") is None


def test_script_var_too_deeply_nested_is_skipped():
    deep = "[" * 100000 + "]" * 100000
    assert extract_json_from_script_var(f"<script>__APOLLO_STATE__ = {deep};</script>", "__APOLLO_STATE__") is None


def test_client_state_survives_deep_next_data_script(page):
    deep = "[" * 100000 + "]" * 100000
    state = {"recipe": {"name": "Chowder", "ingredients": ["1 cup milk"]}}
    doc = page(
        f"<html><body><script>window.__NUXT_DATA__ = {json.dumps(state)};</script>"
        f'<script id="__NEXT_DATA__" type="application/json">{deep}</script></body></html>'
    )
    assert extract_client_state(doc).name == "Chowder"
    assert not extract_client_state(page(f'<script id="__NEXT_DATA__">{deep}</script>')).has_content()


def test_client_state_nested_recipe(page):
    state = {"pageProps": {"data": {"recipes": [
        {"title": "Not a recipe"},
        {"title": "Chili", "ingredients": ["1 onion"], "instructions": "Cook it all."},
    ]}}}
    doc = page(f"<html><body><script>self.__PRELOADED_STATE__ = {json.dumps(state)};</script></body></html>")
    r = extract_client_state(doc)
    assert r.name == "Chili"
    assert r.ingredients[0].name == "onion"
    assert r.instructions == "Step 1: Cook it all."


def test_client_state_next_data_script(page):
    data = {"props": {"pageProps": {"recipe": {"@type": "Recipe", "name": "Tacos"}}}}
    doc = page(f'<html><body><script id="__NEXT_DATA__" type="application/json">{json.dumps(data)}</script></body></html>')
    assert extract_client_state(doc).name == "Tacos"


def test_state_search_is_depth_capped():
    obj = {"name": "Deep", "ingredients": ["1 egg"]}
    for _ in range(30):
        obj = {"data": obj}
    assert find_recipe_in_state(obj) is None


def test_state_search_ignores_unknown_keys():
    assert find_recipe_in_state({"sidebar": {"name": "X", "ingredients": ["1 egg"]}}) is None


# ================== Microdata ==================
MICRODATA = """
<html><body>
<div itemscope itemtype="http://schema.org/Recipe">
  <h1 itemprop="name">Grandma's Cookies</h1>
  <img itemprop="image" src="//cdn.example.com/cookies.jpg">
  <span itemprop="recipeYield">24 cookies</span>
  <ul>
    <li itemprop="recipeIngredient">1 cup butter</li>
    <li itemprop="recipeIngredient">2 cups flour</li>
  </ul>
  <div itemprop="recipeInstructions">Cream the butter.</div>
  <div itemprop="recipeInstructions">Fold in flour.</div>
  <div itemprop="nutrition" itemscope itemtype="http://schema.org/NutritionInformation">
    <span itemprop="calories">150 calories</span>
    <meta itemprop="fatContent" content="8g">
  </div>
</div>
</body></html>
"""


def test_microdata(page):
    r = extract_microdata(page(MICRODATA))
    assert r.name == "Grandma's Cookies"
    assert [i.name for i in r.ingredients] == ["butter", "flour"]
    assert r.servings == 24
    assert r.instructions == "Step 1: Cream the butter.\n\nStep 2: Fold in flour."
    assert r.images == ["https://cdn.example.com/cookies.jpg"]
    assert r.nutrition.calories == 150
    assert r.nutrition.fat == 8


def test_microdata_requires_name(page):
    html = '<div itemscope itemtype="https://schema.org/Recipe"><li itemprop="recipeIngredient">1 egg</li></div>'
    assert not extract_microdata(page(html)).has_content()
